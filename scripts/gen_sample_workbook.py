#!/usr/bin/env python3
"""Sample workbook generation script.

Generates a synthetic manifest workbook in the layout the resolver expects:
- One sheet per game title plus the "MCC Base" sheet
- Row 1: header row (Slug, Name, AppID, DepotID, ManifestID, TotalSizeBytes,
  ReleaseDateFull, MCC Release)
- Row 2+: one row per patch build

Useful for trying the CLI and for larger local runs.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADER = [
    "Slug", "Name", "AppID", "DepotID", "ManifestID",
    "TotalSizeBytes", "ReleaseDateFull", "MCC Release",
]

DEFAULT_TITLES = ["Reach", "Halo CE", "Halo 2", "Halo 3", "ODST", "Halo 4"]


def _slug_prefix(title: str) -> str:
    return title.replace(" ", "")


def generate_workbook_frames(
    builds: int,
    titles: list[str],
    base_group: str = "MCC Base",
    seed: int = 42,
) -> dict[str, pd.DataFrame]:
    """Generate one header-less DataFrame per sheet.

    Base row N is released on day N; title sheets echo that date in their
    "MCC Release" column. Roughly one in ten title rows leaves it blank so the
    slug-ordinal fallback gets exercised.
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range("2019-12-03", periods=builds, freq="14D")
    labels = [d.strftime("%B %d %Y") for d in dates]

    frames: dict[str, pd.DataFrame] = {}
    base_rows: list[list[object]] = [HEADER]
    for n in range(1, builds + 1):
        base_rows.append([
            f"MCCBase_{n}", base_group, 976730, 976731,
            str(rng.integers(10**17, 10**18)),  # text: exceeds double precision
            int(rng.integers(10**9, 10**11)),
            labels[n - 1], "",
        ])
    frames[base_group] = pd.DataFrame(base_rows)

    for t, title in enumerate(titles):
        rows: list[list[object]] = [HEADER]
        for n in range(1, builds + 1):
            mcc_release = "" if rng.random() < 0.1 else labels[n - 1]
            rows.append([
                f"{_slug_prefix(title)}_{n}", title, 976730, 1064220 + t,
                str(rng.integers(10**17, 10**18)),  # text: exceeds double precision
                int(rng.integers(10**9, 10**10)),
                "", mcc_release,
            ])
        frames[title] = pd.DataFrame(rows)
    return frames


def create_workbook(output_path: Path, frames: dict[str, pd.DataFrame]) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        for sheet_name, df in frames.items():
            df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)

    print(f"Created workbook: {output_path}")
    print(f"  Sheets: {len(frames)} ({', '.join(frames)})")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic manifest workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 40 builds for the default titles
  %(prog)s data/ManifestDataSource.xlsx

  # Custom titles and size
  %(prog)s sample.xlsx --builds 200 --titles Reach "Halo 4"
        """
    )
    parser.add_argument("output", type=Path, help="Output workbook path")
    parser.add_argument("--builds", type=int, default=40, help="Builds per sheet (default: 40)")
    parser.add_argument("--titles", nargs="+", default=DEFAULT_TITLES, help="Title sheet names")
    parser.add_argument("--base-group", default="MCC Base", help="Base sheet name (default: 'MCC Base')")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args(argv)

    if args.builds <= 0:
        print("Error: --builds must be positive", file=sys.stderr)
        return 1

    frames = generate_workbook_frames(args.builds, args.titles, args.base_group, args.seed)
    create_workbook(args.output, frames)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
