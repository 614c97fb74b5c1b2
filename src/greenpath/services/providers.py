"""Contracts for the external services the route pipeline depends on."""

from __future__ import annotations

from typing import Protocol, Sequence

from ..models.domain import AirQualitySample, Coordinate, RawRoute


class Geocoder(Protocol):
    def search(self, place: str) -> Sequence[Coordinate]:
        ...


class ReverseGeocoder(Protocol):
    def reverse(self, latitude: float, longitude: float) -> str:
        ...


class RouteProvider(Protocol):
    def alternatives(self, source: Coordinate, destination: Coordinate) -> Sequence[RawRoute]:
        ...


class AirQualityProvider(Protocol):
    def sample(self, coordinate: Coordinate) -> AirQualitySample:
        ...
