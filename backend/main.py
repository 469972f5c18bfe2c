# backend/main.py
"""
Command line entry point for camera parameter resolution.

Usage:
    # Resolve the default parameter file from settings
    python main.py

    # Resolve a specific file with overrides
    python main.py params.yaml --set exposure=2000 --set gige/mtu_size=1500

    # Change frame rate afterwards and save the store with write-backs
    python main.py params.yaml --frame-rate 10 --output resolved.yaml --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

import yaml

from config import get_settings
from errors import PylonParamError
from integrations.param_store import InMemoryParameterStore
from services.diagnostics import LoggingDiagnosticSink, configure_parameter_logging
from services.parameter_service import CameraParameterService

logger = logging.getLogger(__name__)


def parse_override(text: str) -> Tuple[str, Any]:
    """Split KEY=VALUE, parsing VALUE as a YAML scalar"""
    key, sep, raw = text.partition("=")
    key = key.strip()
    if not sep or not key.strip("/"):
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got '{text}'")
    if not raw.strip():
        return key, ""
    try:
        return key, yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid value for '{key}': {e}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve and validate Pylon camera parameters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py params/default.yaml
  python main.py params.yaml --set shutter_mode=global --json
  python main.py params.yaml --frame-rate -1 --output params.yaml
        """
    )

    parser.add_argument(
        'parameter_file',
        nargs='?',
        type=Path,
        help='YAML or JSON parameter file (default: PARAMETER_FILE setting)'
    )
    parser.add_argument(
        '--set',
        dest='overrides',
        action='append',
        default=[],
        type=parse_override,
        metavar='KEY=VALUE',
        help='Set a parameter before resolving (repeatable)'
    )
    parser.add_argument(
        '--frame-rate',
        type=float,
        help='Change the frame rate after resolving (-1 for free run)'
    )
    parser.add_argument(
        '--output',
        type=Path,
        help='Save the parameter store, including write-backs, to this file'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print parameters and diagnostics as JSON'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    settings = get_settings()
    args = build_parser().parse_args(argv)

    try:
        level = settings.log_level_value()
        logging.basicConfig(level=level, format=settings.log_format)
        configure_parameter_logging(level=level, format_string=settings.log_format)

        path = args.parameter_file or Path(settings.parameter_file)
        store = InMemoryParameterStore.from_file(path)
        for key, value in args.overrides:
            store.write(key, value)
        # Only write-backs from here on are reported
        store.writes.clear()

        sink = LoggingDiagnosticSink(context=path.name)
        service = CameraParameterService(sink)
        params = service.load(store)

        if args.frame_rate is not None:
            service.set_frame_rate(params, store, args.frame_rate)

        if args.output:
            store.save(args.output)

    except PylonParamError as e:
        logger.error(e.message)
        if e.recovery_hint:
            logger.error(f"Hint: {e.recovery_hint}")
        if settings.debug:
            logger.debug(json.dumps(e.to_dict(), indent=2))
        return 1

    if args.json:
        print(json.dumps({
            "parameters": params.to_dict(),
            **sink.to_dict(),
            "writes": [{"key": k, "value": v} for k, v in store.writes],
        }, indent=2))
    else:
        print(params.summary())

    return 0


if __name__ == "__main__":
    sys.exit(main())
