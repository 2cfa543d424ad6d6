"""Pydantic models for timeline points"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Point(BaseModel):
    """A decoded timeline point with its map and reverse geocode links"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    lat: float = Field(..., description="Latitude in decimal degrees")
    lng: float = Field(..., description="Longitude in decimal degrees")
    google_maps_url: str
    geocode_request_url: str
