"""hyprscale command-line interface"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence, TextIO

from hyprscale import __version__
from hyprscale.common.app_logging import logging_setup
from hyprscale.common.config import AppConfig, ConfigLoader
from hyprscale.common.errors import ConfigError, HyprscaleError
from hyprscale.common.types import DetectionResult
from hyprscale.monitor.detector import ToolMonitorDetector, toolStatus_get
from hyprscale.monitor.factory import Services, services_create
from hyprscale.monitor.scaling import ppi_estimate, preferredOption_get, resolutionTier_get
from hyprscale.tui.view import monitorSummary_format

logger = logging.getLogger(__name__)

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_CONFIG: int = 2


def arguments_parse(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments

    Args:
        argv: Argument list; `sys.argv[1:]` when None.

    Returns:
        Parsed CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="hyprscale",
        description="Detect monitors, recommend scaling, and apply it to Hyprland",
    )

    parser.add_argument("--version", action="version", version=f"hyprscale {__version__}")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: search standard locations)",
    )

    parser.add_argument(
        "--no-hyprland-check",
        action="store_true",
        help="Apply changes even when HYPRLAND_INSTANCE_SIGNATURE is not set",
    )

    parser.add_argument(
        "--force-live",
        action="store_true",
        help="Apply changes for real even when detection fell back to demo data",
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="Print detected monitors and recommendations, then exit",
    )

    parser.add_argument(
        "--log-file", type=str, default=None, help="Write log output to this file (overrides config)"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (overrides config)"
    )

    parser.add_argument(
        "--info", action="store_true", help="Enable info logging (overrides config)"
    )

    parser.add_argument(
        "--warning", action="store_true", help="Enable warning logging (overrides config)"
    )

    return parser.parse_args(argv)


def logLevelOverride_get(args: argparse.Namespace) -> Optional[str]:
    """
    Resolve explicit log level override flags.

    Args:
        args: Parsed CLI args.

    Returns:
        Selected log level or None; the most restrictive flag wins.
    """
    if args.warning:
        return "WARNING"
    if args.info:
        return "INFO"
    if args.debug:
        return "DEBUG"
    return None


def config_build(args: argparse.Namespace) -> AppConfig:
    """
    Load configuration and apply CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Immutable application configuration.

    Raises:
        FileNotFoundError: explicit `--config` path does not exist.
        ConfigError: config file is invalid.
    """
    config_path = Path(args.config) if args.config else None
    return ConfigLoader.configWithOverrides_load(
        file_path=config_path,
        no_hyprland_check=True if args.no_hyprland_check else None,
        debug_mode=True if args.debug else None,
        force_live_mode=True if args.force_live else None,
        log_level=logLevelOverride_get(args),
        log_file=args.log_file,
    )


def report_write(
    detection: DetectionResult,
    services: Services,
    stream: TextIO,
) -> None:
    """
    Write the non-interactive monitor and recommendation report.

    Args:
        detection: Detection result.
        services: Services providing the scaling engine.
        stream: Output stream.
    """
    mode = "demo data" if detection.is_demo_mode else "live"
    stream.write(f"Detected {len(detection.monitors)} monitor(s) via {detection.source} ({mode})\n")
    for monitor in detection.monitors:
        options = services.engine.scalingOptions_get(monitor)
        preferred = preferredOption_get(options)
        stream.write("\n")
        stream.write(f"{monitorSummary_format(monitor)}\n")
        stream.write(
            f"  tier {resolutionTier_get(monitor).name}, ~{ppi_estimate(monitor):.0f} PPI\n"
        )
        for option in options:
            marker = "*" if option.is_recommended else " "
            stream.write(
                f"  {marker} {option.display_name:<16} scale {option.monitor_scale:.2f}"
                f"  GTK {option.gtk_scale}x  DPI {option.font_dpi}"
                f"  -> {option.effective_width}x{option.effective_height}\n"
            )
        if preferred is not None:
            stream.write(f"  preferred: {preferred.display_name} ({preferred.monitor_scale:.2f}x)\n")


def tui_run(config: AppConfig, services: Services, detection: DetectionResult) -> None:
    """
    Run the interactive curses session.

    Args:
        config: Application configuration.
        services: Production services.
        detection: Detection result for the initial state.

    Raises:
        HyprscaleError: interactive session requested in test mode.
    """
    if config.is_test_mode:
        raise HyprscaleError("interactive session disabled in test mode")

    from hyprscale.tui.app import session_run
    from hyprscale.tui.state import initialState_create

    tool_status: tuple[tuple[str, bool], ...] = ()
    if isinstance(services.detector, ToolMonitorDetector):
        tool_status = toolStatus_get(services.detector.strategies)

    is_demo_mode: bool = services.demoMode_resolve(detection.is_demo_mode)
    if is_demo_mode != detection.is_demo_mode:
        logger.info("Live mode forced over %s detection", detection.source)

    state = replace(
        initialState_create(detection, services.engine, tool_status),
        is_demo_mode=is_demo_mode,
    )
    applier = services.applier_create(is_demo_mode)
    session_run(state, services.engine, applier)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the hyprscale command

    Args:
        argv: Argument list; `sys.argv[1:]` when None.

    Returns:
        Process exit status.
    """
    args = arguments_parse(argv)

    try:
        config = config_build(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_CONFIG

    logging_setup(
        config.logging.level,
        config.logging.format,
        config.logging.file,
        console=args.list,
    )
    logger.info("hyprscale v%s", __version__)

    services = services_create(config)
    detection = services.detector.monitors_detect()

    if args.list:
        report_write(detection, services, sys.stdout)
        return EXIT_OK

    try:
        tui_run(config, services, detection)
    except KeyboardInterrupt:
        return EXIT_OK
    except HyprscaleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
