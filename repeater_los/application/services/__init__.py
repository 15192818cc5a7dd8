# repeater_los/application/services/__init__.py
from .coordinates import CoordinatesService
from .profile import PathProfileService
from .rating import Rating, rate_clearance, star_rating

__all__ = [
    "CoordinatesService",
    "PathProfileService",
    "Rating",
    "rate_clearance",
    "star_rating",
]
