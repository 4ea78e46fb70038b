"""csi-images get action."""

import logging
from argparse import (
    ArgumentParser,
    BooleanOptionalAction,
    _SubParsersAction as SubParsersAction,
)
from typing import Any, cast

from csi_images import csi, images
from csi_images.image import Image, parse_image

from .format import PrintFormatter, structured_formatter

_LOGGER = logging.getLogger(__name__)

OUTPUT_CHOICES = ["table", "yaml", "json"]


def add_output_flags(args: ArgumentParser) -> None:
    """Add flags that control how images are printed."""
    args.add_argument(
        "--output",
        "-o",
        choices=OUTPUT_CHOICES,
        default="table",
        help="Output format of the command",
    )
    args.add_argument(
        "--full-name",
        default=False,
        action=BooleanOptionalAction,
        help="Include the registry prefix in table output",
    )


def image_name(image: Image, full_name: bool) -> str:
    """Return the name of the image to display."""
    return image.full_name() if full_name else image.base_name()


class GetVersionsAction:
    """Get the addon versions."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "versions",
                aliases=["version"],
                help="Get addon versions",
                description="Print all versions of the addon with known images",
            ),
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        results = [
            {"version": version, "latest": str(version == images.LATEST_VERSION).lower()}
            for version in images.versions()
        ]
        if not results:
            print("no addon versions found")
            return
        PrintFormatter(["version", "latest"]).print(results)


class GetComponentsAction:
    """Get the images of one addon version."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "components",
                aliases=["co", "component"],
                help="Get the images of an addon version",
                description="Print the component images needed by an addon version",
            ),
        )
        args.add_argument(
            "version",
            nargs="?",
            default=images.LATEST_VERSION,
            help="Addon version to print, defaults to the latest version",
        )
        add_output_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        version: str,
        output: str,
        full_name: bool,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        components = images.get(version)
        if output != "table":
            structured_formatter(output).print(
                {"version": version, "components": components.to_dict()}
            )
            return

        results: list[dict[str, Any]] = []
        for role in components.roles():
            image = cast(Image, components.get(role))
            if image.is_empty():
                continue
            results.append({"role": role, "image": image_name(image, full_name)})
        PrintFormatter(["role", "image"]).print(results)


class GetDriversAction:
    """Get the CSI drivers."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "drivers",
                aliases=["driver"],
                help="Get CSI drivers",
                description="Print the CSI drivers and their supported CSI versions",
            ),
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        results = [
            {"driver": driver, "csi-versions": ",".join(csi.csi_versions(driver))}
            for driver in csi.drivers()
        ]
        if not results:
            print("no CSI drivers found")
            return
        PrintFormatter(["driver", "csi-versions"]).print(results)


class GetCSIAction:
    """Get the sidecar images of a CSI driver."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "csi",
                help="Get the images of a CSI driver",
                description="Print the images needed by a CSI driver at a CSI version",
            ),
        )
        args.add_argument("driver", help="CSI driver type e.g. csi-rbd")
        args.add_argument("csi_version", help="CSI protocol version e.g. v1.0")
        add_output_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        driver: str,
        csi_version: str,
        output: str,
        full_name: bool,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        sidecars = csi.get(driver, csi_version)
        if output != "table":
            structured_formatter(output).print(
                {
                    "driver": driver,
                    "csi_version": csi_version,
                    "images": sidecars.to_dict(),
                }
            )
            return

        results: list[dict[str, Any]] = []
        for role in csi.ROLES:
            if value := sidecars.get(role):
                results.append(
                    {"role": role, "image": image_name(parse_image(value), full_name)}
                )
        PrintFormatter(["role", "image"]).print(results)


class GetAction:
    """csi-images get action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "get",
                help="Print information about known images",
                description="Print information about addon versions and CSI drivers",
            ),
        )
        subcmds = args.add_subparsers(
            title="Available commands",
            required=True,
        )
        GetVersionsAction.register(subcmds)
        GetComponentsAction.register(subcmds)
        GetDriversAction.register(subcmds)
        GetCSIAction.register(subcmds)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        # No-op given subcommands are always the dispatch target
