"""Command line tool for listing the container images of the CSI addon."""

import argparse
import asyncio
import logging
import sys
import traceback

from csi_images.config import RegistryConfig
from csi_images.context import registry_config
from csi_images.exceptions import CatalogException

from . import get, list as list_cmd

_LOGGER = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command line utility for inspecting CSI addon container images.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )
    parser.add_argument(
        "--registry-domain",
        default=None,
        help="Registry domain used for full image names",
    )
    parser.add_argument(
        "--registry-namespace",
        default=None,
        help="Registry namespace used for full image names",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    get.GetAction.register(subparsers)
    list_cmd.ListAction.register(subparsers)
    return parser


def _registry_config(args: argparse.Namespace) -> RegistryConfig:
    """Return the registry configuration from flags and the environment."""
    config = RegistryConfig.from_env()
    return RegistryConfig(
        domain=(
            args.registry_domain if args.registry_domain is not None else config.domain
        ),
        namespace=(
            args.registry_namespace
            if args.registry_namespace is not None
            else config.namespace
        ),
    )


def main(argv: list[str] | None = None) -> None:
    """csi-images command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    try:
        with registry_config(_registry_config(args)):
            asyncio.run(action.run(**vars(args)))
    except CatalogException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print(f"csi-images error: {err}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
