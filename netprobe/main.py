"""
netprobe - Main Entry Point.

Collects normalized telemetry from one device over SNMP and prints it.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import yaml

from .communicator import CompositionResolver
from .core.collection import collect_device
from .core.config import Config, get_default_config_path, setup_logging
from .core.errors import NetprobeError
from .core.models import Device
from .deviceclass import CAPABILITIES, build_registry
from .network.snmp_client import SNMPClient


logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Collect normalized device telemetry over SNMP"
    )

    parser.add_argument(
        "--host",
        help="Device to query"
    )

    parser.add_argument(
        "-d", "--device-class",
        default="generic",
        help="Device class of the device (default: generic)"
    )

    parser.add_argument(
        "--capability",
        action="append",
        dest="capabilities",
        choices=sorted(CAPABILITIES),
        help="Capability to collect (can be specified multiple times)"
    )

    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration file (YAML)"
    )

    parser.add_argument(
        "--community",
        default=None,
        help="SNMP community string (default: public)"
    )

    parser.add_argument(
        "--snmp-version",
        choices=["1", "2c", "3"],
        default=None,
        help="SNMP version"
    )

    parser.add_argument(
        "-p", "--port",
        type=int,
        default=None,
        help="SNMP port of the device (default: 161)"
    )

    parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="json",
        help="Output format"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="Generate a sample configuration file"
    )

    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Generate sample config if requested
    if args.generate_config:
        config = Config()
        config_path = "config/netprobe.yaml"
        Path("config").mkdir(exist_ok=True)
        config.to_yaml(config_path)
        print(f"Generated sample configuration: {config_path}")
        return 0

    if not args.host:
        print("--host is required", file=sys.stderr)
        return 2

    # Load configuration
    config_path = args.config or get_default_config_path()
    config = Config.from_yaml(config_path)

    # Apply command line overrides
    if args.community:
        config.snmp.community = args.community
    if args.snmp_version:
        config.snmp.version = args.snmp_version
    if args.port:
        config.snmp.port = args.port
    if args.verbose:
        config.logging.level = "DEBUG"

    setup_logging(config.logging)
    logger.info(f"Loaded configuration from {config_path}")

    try:
        registry = build_registry(config.device_classes.directories, config.device_classes.load_builtin)
        provider = CompositionResolver(registry).resolve(args.device_class)
    except NetprobeError as e:
        logger.error(f"Cannot resolve device class {args.device_class}: {e}")
        return 1

    result = await collect_device(
        provider,
        Device(device_class=args.device_class),
        SNMPClient(args.host, config.snmp),
        args.capabilities or config.collection.capabilities,
    )

    data = result.to_dict()
    if args.format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    else:
        print(json.dumps(data, indent=2))

    return 1 if result.errors else 0


def run():
    """Entry point for the application."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
