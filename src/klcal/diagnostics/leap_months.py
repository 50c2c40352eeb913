#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import numpy as np

from klcal.api import get_engine


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "klcal[diagnostics]"') from e


def build_points(start_year: int, end_year: int) -> Tuple[np.ndarray, np.ndarray]:
    """(years, leap month numbers) for years with an intercalation month."""
    store = get_engine().table
    years = store.years()
    leaps = store.intercalation_months()
    mask = (years >= start_year) & (years <= end_year) & (leaps > 0)
    return years[mask], leaps[mask]


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Leap-month barcode diagram (square cell grid).")
    p.add_argument("--start-year", type=int, default=1900)
    p.add_argument("--end-year", type=int, default=2050)
    p.add_argument("--out", default="leapmonth_barcode.png")
    p.add_argument("--title", default="Korean lunar calendar: intercalation months")
    p.add_argument("--year-step", type=int, default=10, help="Label every k years (default: 10).")
    p.add_argument("--cell-edge", default="0.88", help="Cell border color (matplotlib gray string).")
    p.add_argument("--cell-lw", type=float, default=0.6, help="Cell border line width.")
    p.add_argument("--list", action="store_true", help="Also print year -> leap month pairs.")
    args = p.parse_args(argv)

    start_year, end_year = args.start_year, args.end_year
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")

    x, m = build_points(start_year, end_year)
    if args.list:
        for y, lm in zip(x.tolist(), m.tolist()):
            print(f"{y}  leap {lm}")

    plt = _need_matplotlib()
    from matplotlib.colors import ListedColormap

    fig, ax = plt.subplots(figsize=(16, 3.6))

    x_edges = np.arange(start_year - 0.5, end_year + 1.5, 1.0)
    y_edges = np.arange(0.5, 13.5, 1.0)
    Z = np.zeros((12, end_year - start_year + 1), dtype=float)

    ax.pcolormesh(
        x_edges,
        y_edges,
        Z,
        shading="flat",
        cmap=ListedColormap(["white"]),
        vmin=0, vmax=1,
        edgecolors=args.cell_edge,
        linewidth=float(args.cell_lw),
        antialiased=True,
        zorder=0,
    )

    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.set_ylim(0.5, 12.5)
    ax.grid(False)
    ax.tick_params(axis="both", which="both", length=0)

    step = max(1, int(args.year_step))
    xt = list(range(start_year, end_year + 1, step))
    ax.set_xticks(xt)
    ax.set_xticklabels([str(y) for y in xt])
    ax.set_xlabel("Lunar year")
    ax.set_yticks([1, 3, 6, 9, 12])
    ax.set_ylabel("Leap month")

    ax.scatter(x, m, s=22, marker="o", c="0.15", linewidths=0.0, zorder=5)

    ax.set_title(f"{args.title} ({len(x)} leap years)")
    fig.tight_layout()
    fig.savefig(args.out, dpi=250)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
