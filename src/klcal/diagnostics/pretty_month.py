from __future__ import annotations

import argparse
import calendar as pycal
from datetime import date, timedelta

import klcal

CELL_W = 6
DOW = {
    "en": ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"),
    "ko": ("월", "화", "수", "목", "금", "토", "일"),
}

Cell = tuple[str, str]


def header(lang: str) -> str:
    # Hangul glyphs print double width
    w = CELL_W - 1 if lang == "ko" else CELL_W
    return " ".join(name.ljust(w) for name in DOW[lang]).rstrip()


def layout(first: date, cells: list[Cell]) -> list[list[Cell]]:
    """Pad ``cells`` so that ``first`` lands on its weekday, then cut into rows of 7."""
    blank: Cell = ("", "")
    padded = [blank] * first.weekday() + cells
    padded += [blank] * (-len(padded) % 7)
    return [padded[i:i + 7] for i in range(0, len(padded), 7)]


def render(title: str, rows: list[list[Cell]], lang: str = "en") -> str:
    head = header(lang)
    out = [title, head, "-" * max(len(head), 7 * (CELL_W + 1) - 1)]
    for row in rows:
        for part in (0, 1):
            out.append(" ".join(c[part][:CELL_W].ljust(CELL_W) for c in row).rstrip())
    return "\n".join(out) + "\n"


def days_between(d0: date, d1: date):
    d = d0
    while d <= d1:
        yield d
        d += timedelta(days=1)


def lunar_month_calendar(Y: int, M: int, is_leap: bool, lang: str = "en") -> str:
    d0, d1 = klcal.month_bounds(Y, M, is_intercalation=is_leap)
    cells = [(f"{i:2d}", f"{d.month:02d}-{d.day:02d}") for i, d in enumerate(days_between(d0, d1), 1)]
    tag = "L" if is_leap else ""
    title = f"lunar month {Y}-{M:02d}{tag}  ({d0} .. {d1}, {len(cells)} days)"
    return render(title, layout(d0, cells), lang)


def gregorian_month_calendar(gy: int, gm: int, lang: str = "en") -> str:
    first = date(gy, gm, 1)
    last = first.replace(day=pycal.monthrange(gy, gm)[1])
    cells = []
    for d in days_between(first, last):
        t = klcal.to_lunar(d)
        tag = "L" if t.is_intercalation else ""
        cells.append((f"{d.day:2d}", f"{t.month:02d}{tag}-{t.day:02d}"))
    return render(f"Gregorian month {gy}-{gm:02d}", layout(first, cells), lang)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Lunar-month and Gregorian-month grids, each day labelled with its counterpart date."
    )
    p.add_argument("--lunar", nargs=2, type=int, metavar=("Y", "M"), help="Lunar month, e.g. 2023 2")
    p.add_argument("--leap", action="store_true", help="Use the intercalation month of --lunar.")
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"), help="Gregorian month, e.g. 2023 3")
    p.add_argument("--lang", choices=sorted(DOW), default="en", help="Weekday header language.")
    args = p.parse_args(argv)

    lunar, greg, leap = args.lunar, args.greg, args.leap
    if not lunar and not greg:
        lunar, greg, leap = (2023, 2), (2023, 3), True

    if lunar:
        print(lunar_month_calendar(lunar[0], lunar[1], leap, args.lang))
    if greg:
        print(gregorian_month_calendar(greg[0], greg[1], args.lang))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
