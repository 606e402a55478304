"""Console-script entry point (``fetch-gen``).

Installed through ``[project.scripts]``; the wrapper script imports this
module through the regular import system, so self-location asks
:mod:`importlib.resources` where the ``fetchgen`` package lives.
"""

from __future__ import annotations

import sys

from fetchgen.launcher import main as launch
from fetchgen.locator import locate_from_resources


def main() -> None:
    """Run the bundled binary and exit with its status."""
    sys.exit(launch(locate_from_resources))


if __name__ == "__main__":
    main()
