"""
Coin selection without change: find coins whose sum lands in [target, target + tolerance].

The walk is greedy with a one-step chronological backtrack over a wallet sorted
descending:
  - while short of the target, take the next (largest remaining) coin;
  - when the total overshoots target + tolerance, drop the last coin taken.
A dropped coin is never reconsidered, so every coin is visited at most once.
This can miss selections that an exhaustive subset-sum search would find;
the result is "found by this order", not "none exists".
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple


def search(wallet: Sequence[int], target: int, tolerance: int) -> Optional[List[int]]:
    """Return the selected coins in the order taken, or None if the walk fails.

    An empty list is a success (target 0), distinct from None.
    """
    remaining = list(reversed(wallet))  # pop() yields the largest coin first
    selection: List[int] = []
    total = 0
    upper = target + tolerance

    while True:
        if total < target and remaining:
            coin = remaining.pop()
            selection.append(coin)
            total += coin
        elif target <= total <= upper:
            return list(selection)
        elif total > upper and selection:
            total -= selection.pop()
        else:
            return None


def try_solve(wallet: Sequence[int], target: int, tolerance: int) -> Tuple[bool, List[int]]:
    selection = search(wallet, target, tolerance)
    if selection is None:
        return (False, [])
    return (True, selection)
