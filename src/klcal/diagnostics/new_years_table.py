from __future__ import annotations

import argparse
from datetime import date

import klcal

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
COLUMNS = (("Year", 5), ("Seollal", 10), ("Day", 4), ("Leap", 4), ("Days", 4), ("Name", 6))


def seollal_rows(y0: int, y1: int, script: str = "korean"):
    """Yield (year, new-year date, leap month, lunar year length, year name)."""
    for y in range(y0, y1 + 1):
        d = klcal.new_year_day(y)
        n_days = sum(n for _, _, n in klcal.months_in_year(y))
        name = klcal.gapja_string(d, basis="lunar", script=script).split(" ")[0]
        yield y, d, klcal.intercalation_month(y), n_days, name


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Gregorian dates of lunar New Year (Seollal) with leap months and year names."
    )
    p.add_argument("--from-year", type=int, default=2000)
    p.add_argument("--to-year", type=int, default=2030)
    p.add_argument("--dates", choices=("mmdd", "iso"), default="mmdd", help="New Year column format.")
    p.add_argument("--script", choices=("korean", "chinese"), default="korean")
    args = p.parse_args(argv)

    if args.to_year < args.from_year:
        raise SystemExit("--to-year must be >= --from-year")

    def fmt(d: date) -> str:
        return d.isoformat() if args.dates == "iso" else d.strftime("%m-%d")

    head = "  ".join(h.ljust(w) for h, w in COLUMNS)
    print(head)
    print("-" * len(head))

    seen = []
    for y, d, leap, n_days, name in seollal_rows(args.from_year, args.to_year, args.script):
        row = (str(y), fmt(d), WEEKDAYS[d.weekday()], str(leap) if leap else "-", str(n_days), name)
        print("  ".join(c.ljust(w) for c, (_, w) in zip(row, COLUMNS)))
        seen.append((d.month, d.day, y))

    # normally Jan 21..Feb 20
    lo, hi = min(seen), max(seen)
    print(f"\nearliest: {lo[0]:02d}-{lo[1]:02d} ({lo[2]})   latest: {hi[0]:02d}-{hi[1]:02d} ({hi[2]})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
