"""Module-execution entry point (``python -m fetchgen``).

Runs as a top-level script, so self-location reads this file's own
``__file__`` rather than going through the import system.
"""

from __future__ import annotations

import functools

from fetchgen.launcher import main
from fetchgen.locator import locate_from_file

if __name__ == "__main__":
    raise SystemExit(main(functools.partial(locate_from_file, __file__)))
