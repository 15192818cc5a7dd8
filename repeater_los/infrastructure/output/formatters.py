"""Output formatting services for console display and JSON export."""

import json
import math
from typing import Any, Protocol

from repeater_los.application.services.rating import rate_clearance
from repeater_los.domain.models.coordinates import Endpoint
from repeater_los.domain.models.profile import ClearanceResult
from repeater_los.domain.models.screening import ScreenResult
from repeater_los.domain.units import (
    meters_to_feet,
    meters_to_kilometers,
    meters_to_miles,
)


def _format_float(v, precision):
    # JSON has no inf / NaN
    return round(v, precision) if math.isfinite(v) else None


def _format_dict_floats(d, precision):
    for k, v in d.items():
        if isinstance(v, float):
            d[k] = _format_float(v, precision)
        elif isinstance(v, dict):
            _format_dict_floats(v, precision)
        elif isinstance(v, list):
            d[k] = [
                _format_dict_floats(i, precision)
                if isinstance(i, dict)
                else (_format_float(i, precision) if isinstance(i, float) else i)
                for i in v
            ]
    return d


def _endpoint_dict(endpoint: Endpoint) -> dict[str, Any]:
    return {
        "id": endpoint.id,
        "lat": endpoint.latitude,
        "lon": endpoint.longitude,
        "ground_elevation_m": endpoint.ground_elevation_m,
        "antenna_height_m": endpoint.antenna_height_m,
    }


def _build_output_dict(
    screen: ScreenResult | None = None,
    clearance: ClearanceResult | None = None,
    home: Endpoint | None = None,
    target: Endpoint | None = None,
    include_profile: bool = False,
) -> dict:
    output_dict: dict[str, Any] = {}

    if home:
        output_dict["home"] = _endpoint_dict(home)
    if target:
        output_dict["target"] = _endpoint_dict(target)

    if screen:
        output_dict["screen"] = _format_dict_floats(screen.to_dict(), 2)

    if clearance:
        rating = rate_clearance(clearance)
        summary = {
            "line_of_sight": clearance.has_line_of_sight,
            "min_clearance_m": float(clearance.min_clearance_m),
            "min_clearance_ft": float(meters_to_feet(clearance.min_clearance_m)),
            "worst_sample_index": clearance.worst_sample_index,
            "worst_sample_distance_m": float(
                clearance.distances_m[clearance.worst_sample_index]
            ),
            "distance_m": float(clearance.total_distance_m),
            "distance_mi": float(meters_to_miles(clearance.total_distance_m)),
            "frequency_mhz": clearance.frequency_mhz,
            "fresnel_fraction": clearance.fresnel_fraction,
            "k_factor": clearance.k_factor,
            "margin_ratio": float(clearance.margin_ratio),
            "stars": rating.stars,
            "rating": rating.label,
        }
        output_dict["clearance"] = _format_dict_floats(summary, 2)

        if include_profile:
            output_dict["profile"] = _format_dict_floats(clearance.to_dict(), 3)

    return output_dict


class OutputFormatter(Protocol):
    """Protocol for output formatting strategies"""

    def format_result(
        self,
        screen: ScreenResult | None = None,
        clearance: ClearanceResult | None = None,
        home: Endpoint | None = None,
        target: Endpoint | None = None,
    ) -> Any:
        """Format and display results with optional endpoint context"""
        ...


class ConsoleOutputFormatter:
    """Format screening and clearance results for console output"""

    def format_result(
        self,
        screen: ScreenResult | None = None,
        clearance: ClearanceResult | None = None,
        home: Endpoint | None = None,
        target: Endpoint | None = None,
    ) -> None:
        output_dict = _build_output_dict(screen, clearance, home, target)

        print(f"\n{'=' * 60}")
        print("Line-of-Sight Assessment")
        print(f"{'=' * 60}")

        if "home" in output_dict and "target" in output_dict:
            print("\n📍 Endpoints:")
            for role in ("home", "target"):
                endpoint = output_dict[role]
                print(
                    f"  {role.capitalize():<8} {endpoint['id']:<16} "
                    f"{endpoint['lat']:.6f}°, {endpoint['lon']:.6f}°  "
                    f"AGL {endpoint['antenna_height_m']:.1f} m"
                )

        if "screen" in output_dict:
            screen_dict = output_dict["screen"]
            print("\n🔭 Quick Screen:")
            print(f"  Verdict:                 {screen_dict['verdict'].upper()}")
            print(f"  Reason:                  {screen_dict['reason']}")
            print(f"  Horizon (k=1):           {screen_dict['strict_horizon_mi']:.2f} mi")
            print(f"  Horizon (k=4/3):         {screen_dict['standard_horizon_mi']:.2f} mi")
            fresnel = screen_dict.get("fresnel")
            if fresnel:
                print(f"  Midpoint clearance:      {fresnel['clearance_ft']:.1f} ft")
                print(f"  Required clearance:      {fresnel['required_ft']:.1f} ft")
                print(f"  Midpoint earth bulge:    {fresnel['bulge_ft']:.1f} ft")

        if "clearance" in output_dict:
            summary = output_dict["clearance"]
            print("\n📡 Terrain Clearance:")
            print(f"  Line of sight:           {'Yes' if summary['line_of_sight'] else 'No'}")
            print(
                f"  Min clearance:           {summary['min_clearance_ft']:.1f} ft "
                f"({summary['min_clearance_m']:.1f} m)"
            )
            print(
                f"  Worst point:             {summary['worst_sample_distance_m'] / 1000:.2f} km "
                f"(sample {summary['worst_sample_index']})"
            )
            print(
                f"  Distance:                {summary['distance_mi']:.2f} mi "
                f"({meters_to_kilometers(summary['distance_m']):.2f} km)"
            )
            print(f"  Frequency:               {summary['frequency_mhz']:.3f} MHz")
            print(f"  k-factor:                {summary['k_factor']:.2f}")
            print(f"  Fresnel target:          {round(summary['fresnel_fraction'] * 100)}%")
            print(f"  Rating:                  {rate_clearance(clearance).text}")

        print(f"{'=' * 60}\n")


class JSONOutputFormatter:
    """Format results as JSON (for API/automation)"""

    def __init__(self, include_profile: bool = False):
        self.include_profile = include_profile

    def format_result(
        self,
        screen: ScreenResult | None = None,
        clearance: ClearanceResult | None = None,
        home: Endpoint | None = None,
        target: Endpoint | None = None,
    ) -> str:
        output_dict = _build_output_dict(
            screen, clearance, home, target, include_profile=self.include_profile
        )
        return json.dumps(output_dict, indent=2, ensure_ascii=False)
