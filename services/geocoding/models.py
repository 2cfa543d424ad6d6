"""Pydantic models for reverse geocoding results"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from services.timeline.models import Point


class LocalityData(BaseModel):
    """District and country names from a Nominatim reverse lookup"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    district_name: str | None = Field(None, description="addressparts.city_district")
    country_name: str | None = Field(None, description="addressparts.country")


class EnrichedPoint(Point):
    """Point plus locality data (None when the lookup failed)"""

    locality_data: LocalityData | None = None
