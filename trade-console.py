"""
Trade Console launcher.

Runs the desktop operator console from a source checkout without installing
the package (installed copies get the trade-console script instead).
"""

import sys
from pathlib import Path

_src = Path(__file__).resolve().parent / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from trade_console.app import main  # noqa: E402

if __name__ == "__main__":
    main()
