#!/usr/bin/env python3
"""
Standard coin denominations used to synthesize random wallets.

The set is the union of three families, all in base units (1 coin = 10^8):
  - binary:          1, 2, 4, 8, ...
  - ternary (1-2):   1, 2, 3, 6, 9, 18, ...
  - preferred (1-2-5): 1, 2, 5, 10, 20, 50, ...
Each family stops at MAX_AMOUNT. Values at or below DUST are dropped.

Usage:
  python standard_denominations.py
  python standard_denominations.py --as-coins
"""

from __future__ import annotations
import argparse
from decimal import Decimal
from typing import Iterable, Iterator, List, Sequence, Union

COIN = 100_000_000


def coins(amount: Union[int, str, Decimal]) -> int:
    """Convert a coin amount to base units, truncating below one base unit."""
    return int(Decimal(amount) * COIN)


MAX_AMOUNT = coins(8)
DUST = coins("0.000009")


# ---------- Families ----------

def powers_of(base: int, ceiling: int = MAX_AMOUNT) -> Iterator[int]:
    value = 1
    while value <= ceiling:
        yield value
        value *= base


def multiples(coefficients: Sequence[int], values: Iterable[int], ceiling: int = MAX_AMOUNT) -> Iterator[int]:
    """Yield c * v for every value and coefficient, stopping at the first product above ceiling."""
    for v in values:
        for c in coefficients:
            x = c * v
            if x > ceiling:
                return
            yield x


def generate(ceiling: int = MAX_AMOUNT, dust: int = DUST) -> List[int]:
    binary = powers_of(2, ceiling)
    ternary = multiples((1, 2), powers_of(3, ceiling), ceiling)
    preferred_value_series = multiples((1, 2, 5), powers_of(10, ceiling), ceiling)

    values = set(binary) | set(ternary) | set(preferred_value_series)
    return sorted(x for x in values if x > dust)


# Computed once; read-only for the lifetime of the process.
STANDARD_DENOMINATIONS = tuple(generate())


# ---------- Main ----------

def main():
    ap = argparse.ArgumentParser(description="Print the standard coin denominations.")
    ap.add_argument("--as-coins", action="store_true", default=False,
                    help="Print values in coins instead of base units.")
    args = ap.parse_args()

    for v in STANDARD_DENOMINATIONS:
        if args.as_coins:
            print(f"{Decimal(v) / COIN:f}")
        else:
            print(v)
    print(f"\n{len(STANDARD_DENOMINATIONS)} denominations in ({DUST}, {MAX_AMOUNT}]")


if __name__ == "__main__":
    main()
