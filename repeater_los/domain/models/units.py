# repeater_los/domain/models/units.py
"""
Type-safe unit definitions for line-of-sight calculations.

The quick screen works in feet and miles (the traditional RF rule-of-thumb
units), the profile analyzer in meters. NewType keeps the two apart at
type-checking time.

Usage:
    from repeater_los.domain.models.units import Feet, Meters
    from repeater_los.domain.units import feet_to_meters

    def mast_height(height: Feet) -> Meters:
        return feet_to_meters(height)
"""

from typing import NewType

# Base physical units
Meters = NewType("Meters", float)  # Distance or height in meters
Kilometers = NewType("Kilometers", float)  # Distance in kilometers
Feet = NewType("Feet", float)  # Height in feet
Miles = NewType("Miles", float)  # Distance in statute miles
MHz = NewType("MHz", float)  # Frequency in megahertz

# Semantic types (domain-specific meanings)
Elevation = NewType("Elevation", Meters)  # Terrain elevation above sea level
