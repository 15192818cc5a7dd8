# repeater_los/domain/units.py
"""Conversions between the metric and imperial units used by the screens."""

from repeater_los.domain.constants import FT_PER_M, M_PER_MI
from repeater_los.domain.models.units import Feet, Kilometers, Meters, Miles


def meters_to_feet(meters: Meters) -> Feet:
    return Feet(meters * FT_PER_M)


def feet_to_meters(feet: Feet) -> Meters:
    return Meters(feet / FT_PER_M)


def miles_to_meters(miles: Miles) -> Meters:
    return Meters(miles * M_PER_MI)


def meters_to_miles(meters: Meters) -> Miles:
    return Miles(meters / M_PER_MI)


def meters_to_kilometers(meters: Meters) -> Kilometers:
    return Kilometers(meters / 1000)
