#!/usr/bin/env python3
"""Helper script to check and create the .env file for the provider credentials."""

from pathlib import Path
import os
import sys

ENV_TEMPLATE = """# Air quality (required: route requests fail without it)
# Get a token from: https://aqicn.org/data-platform/token/
GREENPATH_WAQI_TOKEN=your-waqi-token-here

# Supabase route history (optional)
GREENPATH_SUPABASE_URL=https://your-project-id.supabase.co
GREENPATH_SUPABASE_KEY=your-service-role-key-here

# Providers
GREENPATH_OSRM_BASE_URL=http://router.project-osrm.org
GREENPATH_NOMINATIM_BASE_URL=https://nominatim.openstreetmap.org
GREENPATH_GEOCODE_REGION_SUFFIX=Lucknow, India

# API Configuration
GREENPATH_API_PREFIX=/api
# GREENPATH_FRONTEND_ALLOWED_ORIGINS accepts a JSON array or comma-separated list
"""

SECRET_KEYS = ("GREENPATH_WAQI_TOKEN", "GREENPATH_SUPABASE_KEY")


def _mask(line: str) -> str:
    name, _, value = line.partition("=")
    value = value.strip()
    if name.strip() in SECRET_KEYS and len(value) > 12:
        return f"{name}={value[:6]}...{value[-4:]}"
    return line


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Green Path Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"Created template .env file at: {env_file}")
        print("Edit it and add your WAQI token before starting the server.")
        return 1

    print(f"Found .env file at: {env_file}")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        print(_mask(line))
    print("-" * 60)
    print()

    sys.path.insert(0, str(project_root / "src"))
    try:
        from greenpath.config import settings
    except Exception as e:
        print(f"Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return 1

    checks = {
        "WAQI token": bool(settings.waqi_token),
        "Supabase URL": bool(settings.supabase_url),
        "Supabase key": bool(settings.supabase_key),
    }
    for label, present in checks.items():
        print(f"[{'OK' if present else 'MISSING'}] {label}")

    print()
    print(f"OSRM: {settings.osrm_base_url} ({settings.osrm_profile})")
    print(f"Nominatim: {settings.nominatim_base_url} (suffix: {settings.geocode_region_suffix!r})")
    print(f"Environment overrides: {sorted(k for k in os.environ if k.startswith('GREENPATH_'))}")

    if not settings.waqi_token:
        print()
        print("Route requests will answer 'Air-quality token missing' until GREENPATH_WAQI_TOKEN is set.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
