"""Line-of-sight and Fresnel clearance estimation for amateur repeaters."""

from repeater_los.adapter import RepeaterLosAPI
from repeater_los.application.analyzers import ProfileAnalyzer, QuickScreen

__all__ = ["RepeaterLosAPI", "ProfileAnalyzer", "QuickScreen"]
