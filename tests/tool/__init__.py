"""Test helpers for csi-images tools."""

import contextlib
import io

from csi_images.tool.csi_images import main


def run_command(args: list[str]) -> str:
    """Run the command line tool and return what it printed."""
    stdout = io.StringIO()
    with contextlib.redirect_stdout(stdout):
        main(args)
    return stdout.getvalue()
