"""Reverse geocoding service package"""

from .models import EnrichedPoint, LocalityData
from .service import NominatimService, parse_locality

__all__ = [
    "EnrichedPoint",
    "LocalityData",
    "NominatimService",
    "parse_locality",
]
