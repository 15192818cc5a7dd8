# repeater_los/domain/models/__init__.py
from .units import Meters, Kilometers, Feet, Miles, MHz
from .coordinates import Coordinates, Endpoint
from .parameters import PathParameters
from .profile import TerrainProfile, ClearanceResult
from .screening import (
    FresnelMidpointResult,
    HorizonScreenResult,
    ScreenInputs,
    ScreenReason,
    ScreenResult,
    Verdict,
)
from .assessment import LinkAssessment

__all__ = [
    "Meters",
    "Kilometers",
    "Feet",
    "Miles",
    "MHz",
    "Coordinates",
    "Endpoint",
    "PathParameters",
    "TerrainProfile",
    "ClearanceResult",
    "FresnelMidpointResult",
    "HorizonScreenResult",
    "ScreenInputs",
    "ScreenReason",
    "ScreenResult",
    "Verdict",
    "LinkAssessment",
]
