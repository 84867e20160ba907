"""Command line entry point: ``virtui`` serves the dashboard API and MCP tools."""

import argparse
import logging
import sys
from typing import Any

from virtui import __version__
from virtui.config import AuthMode, LogLevel, TransportMode, VirtUIConfig
from virtui.utils.errors import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# argparse dest -> (config field, converter)
FLAG_FIELDS: dict[str, tuple[str, Any]] = {
    "transport": ("transport", TransportMode),
    "host": ("host", str),
    "port": ("port", int),
    "auth_mode": ("auth_mode", AuthMode),
    "kubeconfig": ("kubeconfig_path", str),
    "context": ("kubeconfig_context", str),
    "namespace": ("default_namespace", str),
    "log_level": ("log_level", LogLevel),
}


def setup_logging(level: LogLevel) -> None:
    """Send log records to stderr; stdout is left to the transport."""
    logging.basicConfig(
        level=level.value,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Unset flags stay None so environment variables and defaults apply.
    """
    parser = argparse.ArgumentParser(
        prog="virtui",
        description="Operations dashboard API for KubeVirt, CDI and Kube-OVN",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    serving = parser.add_argument_group("serving")
    serving.add_argument(
        "--transport",
        choices=[mode.value for mode in TransportMode],
        help="MCP transport served next to the REST API (default: streamable-http)",
    )
    serving.add_argument("--host", help="Bind address (default: 127.0.0.1)")
    serving.add_argument("--port", type=int, help="Bind port (default: 3000)")

    cluster = parser.add_argument_group("cluster")
    cluster.add_argument(
        "--auth-mode",
        choices=[mode.value for mode in AuthMode],
        help="How credentials are found (default: auto, in-cluster then kubeconfig)",
    )
    cluster.add_argument("--kubeconfig", metavar="PATH", help="Kubeconfig file")
    cluster.add_argument("--context", help="Kubeconfig context")
    cluster.add_argument(
        "--namespace",
        help="Namespace for requests without ?namespace= (default: default)",
    )
    cluster.add_argument(
        "--read-only",
        action="store_true",
        help="Answer 403 to every create, delete, start and stop request",
    )

    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> VirtUIConfig:
    """Overlay the flags that were given on environment and .env settings."""
    overrides: dict[str, Any] = {
        field: convert(getattr(args, dest))
        for dest, (field, convert) in FLAG_FIELDS.items()
        if getattr(args, dest) is not None
    }
    if args.read_only:
        overrides["read_only_mode"] = True
    return VirtUIConfig(**overrides)


def main(argv: list[str] | None = None) -> int:
    """Run the server until the transport exits. Returns the process exit code."""
    config = build_config(parse_args(argv))
    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    try:
        for warning in config.validate_auth_config():
            logger.warning(warning)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    from virtui.server import create_server, get_server

    mcp = create_server(config)
    try:
        get_server().startup()
    except ConfigurationError as e:
        logger.error(f"Cannot reach the cluster: {e.message}")
        return 1

    logger.info(
        f"VirtUI v{__version__} serving on {config.host}:{config.port} "
        f"({config.transport.value}, namespace '{config.default_namespace}')"
    )
    try:
        mcp.run(transport=config.transport.value)
    finally:
        get_server().shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
