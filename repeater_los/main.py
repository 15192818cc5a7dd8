import argparse
import asyncio
import os
import sys

from environs import Env

from repeater_los.application.analyzers import ProfileAnalyzer, QuickScreen
from repeater_los.application.orchestration import OrchestrationService
from repeater_los.application.services.profile import PathProfileService
from repeater_los.config import Settings
from repeater_los.domain.exceptions import (
    APIException,
    CoordinatesRequiredException,
    InvalidInput,
)
from repeater_los.domain.models.coordinates import Endpoint
from repeater_los.domain.models.screening import ScreenInputs
from repeater_los.infrastructure.api.clients import AsyncElevationsApiClient
from repeater_los.infrastructure.output.formatters import (
    ConsoleOutputFormatter,
    JSONOutputFormatter,
)
from repeater_los.infrastructure.storage import FileProfileStorage
from repeater_los.logging_config import setup_logging


class AppDependencies:
    """Container for application dependencies."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.storage = FileProfileStorage(output_dir=settings.output_dir)
        self.elevations_api_client = AsyncElevationsApiClient(
            settings.elevation_api_url, settings.elevation_api_key
        )
        self.output_formatter = ConsoleOutputFormatter()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repeater-los",
        description="Line-of-sight and Fresnel clearance estimator for repeaters",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log at DEBUG level"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    screen = subparsers.add_parser(
        "screen", help="Classify a path from antenna heights and distance only"
    )
    screen.add_argument("--h1-ft", type=float, required=True, help="Antenna 1 height AGL (ft)")
    screen.add_argument("--h2-ft", type=float, required=True, help="Antenna 2 height AGL (ft)")
    screen.add_argument("--distance-mi", type=float, required=True, help="Path length (mi)")
    screen.add_argument("--h1-asl-ft", type=float, help="Ground elevation at antenna 1 (ft)")
    screen.add_argument("--h2-asl-ft", type=float, help="Ground elevation at antenna 2 (ft)")

    analyze = subparsers.add_parser(
        "analyze", help="Full terrain clearance analysis between two points"
    )
    source = analyze.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--home",
        nargs=2,
        type=float,
        metavar=("LAT", "LON"),
        help="Home location; requires --target",
    )
    source.add_argument("--profile", help="Name of a stored .profile file")
    source.add_argument("--profile-json", help="Profile JSON exported by the LOS service")
    analyze.add_argument("--target", nargs=2, type=float, metavar=("LAT", "LON"))
    analyze.add_argument("--home-agl-m", type=float, help="Home antenna height AGL (m)")
    analyze.add_argument("--target-agl-m", type=float, help="Repeater antenna height AGL (m)")
    analyze.add_argument("--step-m", type=float, help="Sample spacing (m)")
    analyze.add_argument("--k-factor", type=float, help="Effective earth radius factor")
    analyze.add_argument(
        "--force",
        action="store_true",
        help="Analyse terrain even if the quick screen drops the path",
    )

    for sub in (screen, analyze):
        sub.add_argument("--freq-mhz", type=float, help="Frequency (MHz)")
        sub.add_argument("--fresnel-fraction", type=float, help="Required Fresnel fraction")
        sub.add_argument(
            "--save-json",
            action="store_true",
            help="Save JSON output to a file in the output directory",
        )
        sub.add_argument("--name", default="los", help="Base name for saved output")

    return parser


def emit(args: argparse.Namespace, deps: AppDependencies, **parts) -> None:
    if args.save_json:
        json_output = JSONOutputFormatter(include_profile=True).format_result(**parts)
        os.makedirs(deps.settings.output_dir, exist_ok=True)
        file_path = os.path.join(deps.settings.output_dir, f"{args.name}.json")
        with open(file_path, "w") as f:
            f.write(json_output)
        print(f"✅ JSON output saved to {file_path}")
    else:
        deps.output_formatter.format_result(**parts)


def run_screen(args: argparse.Namespace, deps: AppDependencies) -> None:
    settings = deps.settings
    inputs = ScreenInputs(
        distance_mi=args.distance_mi,
        frequency_mhz=args.freq_mhz if args.freq_mhz is not None else settings.frequency_mhz,
        h1_agl_ft=args.h1_ft,
        h2_agl_ft=args.h2_ft,
        h1_asl_ft=args.h1_asl_ft,
        h2_asl_ft=args.h2_asl_ft,
        fresnel_fraction=(
            args.fresnel_fraction
            if args.fresnel_fraction is not None
            else settings.fresnel_fraction
        ),
        k_fresnel=settings.k_factor,
    )
    emit(args, deps, screen=QuickScreen().classify(inputs))


async def run_analysis(args: argparse.Namespace, deps: AppDependencies) -> None:
    params = deps.settings.path_parameters(
        step_m=args.step_m,
        frequency_mhz=args.freq_mhz,
        k_factor=args.k_factor,
        fresnel_fraction=args.fresnel_fraction,
    )

    if args.profile or args.profile_json:
        if args.profile:
            profile = await deps.storage.load(args.profile)
        else:
            profile = await deps.storage.load_json(args.profile_json)
        emit(args, deps, clearance=ProfileAnalyzer().analyze(profile, params))
        return

    if args.target is None:
        raise CoordinatesRequiredException("--target is required together with --home")
    if not deps.settings.elevation_api_url:
        raise InvalidInput("ELEVATION_API_URL must be set to fetch terrain")

    home = Endpoint(
        id="home",
        latitude=args.home[0],
        longitude=args.home[1],
        antenna_height_m=(
            args.home_agl_m if args.home_agl_m is not None else deps.settings.home_agl_m
        ),
    )
    target = Endpoint(
        id="target",
        latitude=args.target[0],
        longitude=args.target[1],
        antenna_height_m=(
            args.target_agl_m
            if args.target_agl_m is not None
            else deps.settings.target_agl_m
        ),
    )

    orchestrator = OrchestrationService(
        profile_service=PathProfileService(deps.elevations_api_client),
        storage=deps.storage,
    )
    assessment = await orchestrator.process(
        home, target, params, force=args.force, profile_name=args.name
    )
    emit(
        args,
        deps,
        screen=assessment.screen,
        clearance=assessment.clearance,
        home=home,
        target=target,
    )


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Load environment variables as early as possible within main()
    env = Env()
    env.read_env(".env")

    # Setup logging ONLY AFTER environment variables are loaded
    setup_logging(env, verbose=args.verbose)

    deps = AppDependencies(Settings.from_env(env))

    try:
        if args.command == "screen":
            run_screen(args, deps)
        else:
            await run_analysis(args, deps)
    except CoordinatesRequiredException as e:
        print(f"Error: {e}")
        return 2
    except FileNotFoundError as e:
        print(f"Error: profile not found: {e.filename}")
        return 1
    except ValueError as e:
        # InvalidInput is a ValueError
        print(f"Error: {e}")
        return 2
    except APIException as e:
        print(
            f"API Error: {e}\nPlease ensure ELEVATION_API_URL and ELEVATION_API_KEY "
            "in the .env file are correct."
        )
        return 3
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
