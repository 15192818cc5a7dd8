from .profile_analyzer import ProfileAnalyzer
from .quick_screen import QuickScreen

__all__ = ["ProfileAnalyzer", "QuickScreen"]
