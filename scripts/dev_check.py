#!/usr/bin/env python3
"""Run the unit tests, then lay out a throwaway folder of generated photos."""
from __future__ import annotations

import subprocess
import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from PIL import Image

from app.portfolio.main import format_layout, layout_folder

# (name, width, height): a landscape, a portrait, a panorama and a square
FIXTURE_SIZES = [
    ("01-landscape.jpg", 1600, 1200),
    ("02-portrait.jpg", 900, 1350),
    ("03-panorama.jpg", 4000, 800),
    ("04-square.jpg", 1000, 1000),
]


def run_tests() -> int:
    cmd = [sys.executable, "-m", "unittest", "discover", "-s", "tests", "-p", "test_*.py"]
    print("$", " ".join(cmd))
    return subprocess.run(cmd, check=False, cwd=ROOT).returncode


def smoke_layout() -> bool:
    with tempfile.TemporaryDirectory(prefix="portfolio-grid-") as tmp:
        for name, w, h in FIXTURE_SIZES:
            Image.new("RGB", (w, h), (90, 90, 90)).save(Path(tmp) / name)

        ok = True
        for width in (375, 800, 1440):
            result = layout_folder(tmp, container_width=width)
            print(f"\n-- gallery @ {width}px")
            for line in format_layout(result):
                print(line)
            if len(result.placements()) != len(FIXTURE_SIZES):
                print(f"expected {len(FIXTURE_SIZES)} placements, got {len(result.placements())}")
                ok = False
            for row in result.rows:
                if row.filled and row.pixel_width != width:
                    print(f"filled row spans {row.pixel_width}px, expected {width}px")
                    ok = False
        return ok


def main() -> int:
    code = run_tests()
    if code != 0:
        print("\n❌ dev_check failed (unit tests)")
        return code

    if not smoke_layout():
        print("\n❌ dev_check failed (layout smoke)")
        return 1

    print("\n✅ dev_check passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
