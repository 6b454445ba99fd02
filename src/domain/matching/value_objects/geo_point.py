"""
GeoPoint Value Object

Geographic coordinate of a customer request or an artist studio.

Responsibility:
    - Validate latitude/longitude (finite, within range)
    - Great-circle distance between two points (haversine, radius 6371 km)

Architecture Notes:
    - Value Object (immutable, defined by values)
    - Uses Pydantic for validation
    - Malformed coordinates are rejected, never silently defaulted
"""

import math

from pydantic import BaseModel, Field, ValidationError

from src.domain.shared.exceptions import InvalidInputError

from ..constants import EARTH_RADIUS_KM


class GeoPoint(BaseModel):
    """
    Immutable latitude/longitude pair in decimal degrees.

    Attributes:
        latitude: Latitude in [-90, 90]
        longitude: Longitude in [-180, 180]

    Examples:
        >>> tokyo_station = GeoPoint.create(35.681236, 139.767125)
        >>> shinjuku = GeoPoint.create(35.689487, 139.691706)
        >>> round(tokyo_station.distance_km(shinjuku), 1)
        6.9
    """

    latitude: float = Field(..., description="Latitude in degrees", ge=-90.0, le=90.0)
    longitude: float = Field(
        ..., description="Longitude in degrees", ge=-180.0, le=180.0
    )

    model_config = {
        "frozen": True,
        "allow_inf_nan": False,
        "json_schema_extra": {
            "examples": [{"latitude": 35.681236, "longitude": 139.767125}]
        },
    }

    @classmethod
    def create(cls, latitude: float, longitude: float) -> "GeoPoint":
        """
        Factory method translating validation failures into domain errors.

        Raises:
            InvalidInputError: If a coordinate is missing, non-finite or out of range
        """
        for field_name, value in (("latitude", latitude), ("longitude", longitude)):
            if value is None or isinstance(value, bool):
                raise InvalidInputError(
                    f"{field_name} is required", field_name=field_name
                )
            try:
                numeric = float(value)
            except (TypeError, ValueError):
                raise InvalidInputError(
                    f"{field_name} must be a number, got {value!r}",
                    field_name=field_name,
                ) from None
            if not math.isfinite(numeric):
                raise InvalidInputError(
                    f"{field_name} must be finite, got {value!r}",
                    field_name=field_name,
                )

        try:
            return cls(latitude=float(latitude), longitude=float(longitude))
        except ValidationError as e:
            field_name = str(e.errors()[0]["loc"][0]) if e.errors() else None
            raise InvalidInputError(
                f"Invalid coordinates ({latitude}, {longitude}): out of range",
                field_name=field_name,
            ) from e

    def distance_km(self, other: "GeoPoint") -> float:
        """
        Haversine great-circle distance to another point in kilometres.

        Examples:
            >>> a = GeoPoint.create(0.0, 0.0)
            >>> a.distance_km(a)
            0.0
        """
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        dlat = lat2 - lat1
        dlon = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(dlat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        )
        # Rounding can push a just outside [0, 1] for near-antipodal points
        a = min(1.0, max(0.0, a))
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return EARTH_RADIUS_KM * c

    def offset_north(self, distance_km: float) -> "GeoPoint":
        """Point `distance_km` due north along the meridian (same longitude)."""
        delta = math.degrees(distance_km / EARTH_RADIUS_KM)
        return GeoPoint.create(self.latitude + delta, self.longitude)

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}
