"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class TripbookModel(BaseModel):
    """Immutable base model; serialized with camelCase field names."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class GeoPosition(TripbookModel):
    """Geographic coordinates (WGS84)."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class GeoBounds(TripbookModel):
    """Map viewport rectangle."""

    north: float = Field(..., ge=-90, le=90)
    south: float = Field(..., ge=-90, le=90)
    east: float = Field(..., ge=-180, le=180)
    west: float = Field(..., ge=-180, le=180)

    @model_validator(mode="after")
    def validate_south_not_above_north(self) -> "GeoBounds":
        """Ensure south <= north (east/west may wrap the antimeridian)."""
        if self.south > self.north:
            raise ValueError("south must be <= north")
        return self


class ActivityType(str, Enum):
    """Activity category."""

    sightseeing = "sightseeing"
    dining = "dining"
    accommodation = "accommodation"
    flight = "flight"
    train = "train"
    bus = "bus"
    other = "other"
