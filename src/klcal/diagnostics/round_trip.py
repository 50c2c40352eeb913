from __future__ import annotations

import argparse
import random
from datetime import date, timedelta

import klcal


def parse_date(s: str) -> date:
    y, m, d = s.split("-")
    return date(int(y), int(m), int(d))


def random_date(start: date, end: date) -> date:
    span = (end - start).days
    return start + timedelta(days=random.randint(0, span))


def roundtrip_test(N: int, start: date, end: date, seed: int, *, max_failures: int) -> int:
    random.seed(seed)
    failures = 0

    for _ in range(N):
        d0 = random_date(start, end)
        t = klcal.to_lunar(d0)
        back = klcal.to_solar(t.year, t.month, t.day, t.is_intercalation)
        if back != d0:
            failures += 1
            print("\nFAIL")
            print("d0:", d0)
            print("lunar:", t.isoformat())
            print("back:", back)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random solar -> lunar -> solar round-trip check.")
    p.add_argument("--n", type=int, default=2000)
    p.add_argument("--start", default="1000-02-13")
    p.add_argument("--end", default="2050-12-31")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--max-failures", type=int, default=10)
    args = p.parse_args(argv)

    start, end = parse_date(args.start), parse_date(args.end)
    if end < start:
        raise SystemExit("--end must be >= --start")

    failures = roundtrip_test(args.n, start, end, args.seed, max_failures=args.max_failures)
    print(f"\nround-trip: N={args.n} failures={failures}")
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
