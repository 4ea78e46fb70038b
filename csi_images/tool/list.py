"""csi-images list action."""

import logging
from argparse import (
    ArgumentParser,
    BooleanOptionalAction,
    _SubParsersAction as SubParsersAction,
)
from typing import cast

from csi_images import images
from csi_images.image import parse_image

from .format import Formatter, TextFormatter, structured_formatter

_LOGGER = logging.getLogger(__name__)


class ListAction:
    """List every image referenced by the catalogs."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "list",
                aliases=["ls"],
                help="List all images",
                description="Print every image of every addon version and CSI driver",
            ),
        )
        args.add_argument(
            "--output",
            "-o",
            choices=["text", "yaml", "json"],
            default="text",
            help="Output format of the command",
        )
        args.add_argument(
            "--unique",
            default=False,
            action=BooleanOptionalAction,
            help="Remove duplicate images and sort the output",
        )
        args.add_argument(
            "--full-name",
            default=False,
            action=BooleanOptionalAction,
            help="Include the registry prefix in the image names",
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        output: str,
        unique: bool,
        full_name: bool,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        items = images.list_images()
        _LOGGER.debug("Found %d images", len(items))
        if unique:
            items = sorted(set(items))
        if full_name:
            items = [parse_image(item).full_name() for item in items]

        formatter: Formatter
        if output == "text":
            formatter = TextFormatter()
        else:
            formatter = structured_formatter(output)
        formatter.print(items)
