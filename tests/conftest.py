import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
for path in (
    ROOT / "bin",
    ROOT / "modules" / "range_merge",
    ROOT / "modules" / "range_subtract",
):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Plots are written to files only; never open a display.
os.environ.setdefault("MPLBACKEND", "Agg")
