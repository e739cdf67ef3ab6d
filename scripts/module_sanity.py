#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path
import sys

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from textkit.lint import lint_modules  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate module manifests.")
    parser.add_argument(
        "--modules-dir",
        type=Path,
        default=ROOT_DIR / "modules",
        help="Directory holding module folders",
    )
    args = parser.parse_args(argv)

    results = lint_modules(args.modules_dir)
    failed = [result for result in results if not result["ok"]]

    if failed:
        print("Module sanity check failed:\n")
        for result in failed:
            print(f"[ERROR] {result['name']}")
            for issue in result["issues"]:
                print(f"  - {issue}")
        return 1

    print(f"Module sanity check passed ({len(results)} module(s)).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
