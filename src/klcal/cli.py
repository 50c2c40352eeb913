from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

from .core.config import dev_mode
from .core.errors import InvalidDate
from .core.time import parse_ymd


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if (verbose or dev_mode()) else logging.WARNING
    logging.basicConfig(level=level, format="[klcal] %(name)s: %(message)s")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _print_pair(cal, script: str) -> None:
    print(f"solar : {cal.solar_iso()}")
    print(f"lunar : {cal.lunar_iso()}")
    print(f"gapja : {cal.gapja_string('lunar', script)}")
    print(f"gapja (solar basis): {cal.gapja_string('solar', script)}")


def cmd_solar(argv: list[str]) -> int:
    from .lunar_calendar import KoreanLunarCalendar

    p = argparse.ArgumentParser(prog="klcal solar", description="Gregorian -> Korean lunar date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--script", choices=("korean", "chinese"), default="korean")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    cal = KoreanLunarCalendar()
    try:
        y, m, d = parse_ymd(args.date)
    except ValueError as e:
        print(f"klcal: {e}", file=sys.stderr)
        return 2
    if not cal.set_solar_date(y, m, d):
        print(f"klcal: invalid or unsupported solar date {args.date}", file=sys.stderr)
        return 2
    _print_pair(cal, args.script)
    return 0


def cmd_lunar(argv: list[str]) -> int:
    from .lunar_calendar import KoreanLunarCalendar

    p = argparse.ArgumentParser(prog="klcal lunar", description="Korean lunar -> Gregorian date")
    p.add_argument("date", help="YYYY-MM-DD (lunar)")
    p.add_argument("--leap", action="store_true", help="date lies in the intercalation (leap) month")
    p.add_argument("--script", choices=("korean", "chinese"), default="korean")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    cal = KoreanLunarCalendar()
    try:
        y, m, d = parse_ymd(args.date)
    except ValueError as e:
        print(f"klcal: {e}", file=sys.stderr)
        return 2
    if not cal.set_lunar_date(y, m, d, args.leap):
        leap = " (leap)" if args.leap else ""
        print(f"klcal: invalid or unsupported lunar date {args.date}{leap}", file=sys.stderr)
        return 2
    _print_pair(cal, args.script)
    return 0


def cmd_info(argv: list[str]) -> int:
    import klcal

    p = argparse.ArgumentParser(prog="klcal info", description="Print lunar table metadata")
    p.parse_args(argv)
    for k, v in klcal.engine_info().items():
        print(f"{k:16s} {v}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `klcal YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_solar(argv)

    p = argparse.ArgumentParser(prog="klcal", description="Korean lunar calendar toolkit CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("solar", help="Gregorian -> Korean lunar date")
    sub.add_parser("lunar", help="Korean lunar -> Gregorian date")
    sub.add_parser("info", help="Print lunar table metadata")

    # diagnostics
    sub.add_parser("new-years", help="Print lunar New Year (Seollal) table")
    sub.add_parser("leap-months", help="Plot intercalation months per year (needs matplotlib)")
    sub.add_parser("pretty-month", help="Print lunar/Gregorian month grids")
    p_diag = sub.add_parser("diag", help="Consistency checks")
    p_diag.add_argument("tool", choices=["round-trip"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    try:
        if args.cmd == "solar":
            return cmd_solar(rest)

        if args.cmd == "lunar":
            return cmd_lunar(rest)

        if args.cmd == "info":
            return cmd_info(rest)

        if args.cmd == "new-years":
            return _run_module_main("klcal.diagnostics.new_years_table", rest)

        if args.cmd == "leap-months":
            return _run_module_main("klcal.diagnostics.leap_months", rest)

        if args.cmd == "pretty-month":
            return _run_module_main("klcal.diagnostics.pretty_month", rest)

        if args.cmd == "diag":
            tool_map = {
                "round-trip": "klcal.diagnostics.round_trip",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except InvalidDate as e:
        print(f"klcal: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
