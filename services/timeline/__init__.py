"""Timeline export parsing package"""

from .coordinates import decode_e7
from .extractor import extract_points
from .models import Point

__all__ = [
    "decode_e7",
    "extract_points",
    "Point",
]
