#!/usr/bin/env python3
"""
Estimate how often a payment can be made without change, by wallet size and tolerance.

For every wallet size in the sweep this script:
  - Builds one random wallet (standard denominations or uniform random amounts)
  - For every tolerance, draws --runs random payment targets below the wallet balance
  - Runs the coin selection walk (bnb.search) for each target
  - Records the success rate (selections summing into [target, target + tolerance])

The result is a tab-separated matrix (one row per wallet size, one column per
tolerance). By default it is wrapped in a gnuplot script that renders a surface plot.

Usage examples:
  python no_change_payments.py > bnb.gp && gnuplot bnb.gp
  python no_change_payments.py --max-wallet-size 50 --max-tolerance 20000 --runs 500 --seed 7
  python no_change_payments.py --random-denoms --no-plot --outfile rates.tsv
"""

from __future__ import annotations
import argparse
import os
import random
import sys
from dataclasses import dataclass, field
from typing import List, Optional

from bnb import search
from standard_denominations import STANDARD_DENOMINATIONS, coins

RANDOM_MIN_AMOUNT = coins("0.000009")
RANDOM_MAX_AMOUNT = coins(10)


@dataclass
class SweepConfig:
    min_wallet_size: int = 0
    max_wallet_size: int = 100
    inc_wallet_size: int = 1
    min_tolerance: int = 0
    max_tolerance: int = 100_000
    inc_tolerance: int = 1_000
    runs: int = 100
    denoms: str = "std"

    def wallet_sizes(self) -> List[int]:
        return list(range(self.min_wallet_size, self.max_wallet_size + 1, self.inc_wallet_size))

    def tolerances(self) -> List[int]:
        return list(range(self.min_tolerance, self.max_tolerance + 1, self.inc_tolerance))


@dataclass
class SweepResult:
    wallet_sizes: List[int]
    tolerances: List[int]
    rates: List[List[float]] = field(default_factory=list)  # rates[i][j]: wallet_sizes[i], tolerances[j]


# ---------- Option parsing ----------

def non_negative_int(s: str) -> int:
    try:
        v = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {s!r}")
    if v < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {v}")
    return v


def positive_int(s: str) -> int:
    v = non_negative_int(s)
    if v == 0:
        raise argparse.ArgumentTypeError("expected a positive integer, got 0")
    return v


# ---------- Wallets ----------

def generate_random_wallet(size: int, denoms: str, rng: random.Random) -> List[int]:
    """
    Draw `size` coins and return them sorted descending.
      std: uniform pick among the standard denominations except the largest one
      rnd: uniform amount in [RANDOM_MIN_AMOUNT, RANDOM_MAX_AMOUNT)
    """
    if denoms == "std":
        pool = STANDARD_DENOMINATIONS
        wallet = [pool[rng.randrange(len(pool) - 1)] for _ in range(size)]
    elif denoms == "rnd":
        wallet = [rng.randrange(RANDOM_MIN_AMOUNT, RANDOM_MAX_AMOUNT) for _ in range(size)]
    else:
        raise ValueError(f"Unknown denomination source {denoms!r} (expected 'std' or 'rnd').")
    wallet.sort(reverse=True)
    return wallet


# ---------- Sweep ----------

def success_rate(wallet: List[int], tolerance: int, runs: int, rng: random.Random) -> float:
    balance = sum(wallet)
    successes = 0
    for _ in range(runs):
        target = int(rng.random() * balance)
        if search(wallet, target, tolerance) is not None:
            successes += 1
    return successes / runs


def run_sweep(config: SweepConfig, rng: random.Random, progress: int = 0) -> SweepResult:
    result = SweepResult(wallet_sizes=config.wallet_sizes(), tolerances=config.tolerances())
    for idx, size in enumerate(result.wallet_sizes, start=1):
        wallet = generate_random_wallet(size, config.denoms, rng)
        result.rates.append([success_rate(wallet, tol, config.runs, rng) for tol in result.tolerances])

        if progress and (idx % progress == 0):
            print(f"Processed {idx}/{len(result.wallet_sizes)} wallet sizes...", file=sys.stderr)
    return result


# ---------- Output ----------

def format_rate(rate: float) -> str:
    """At most three decimals, no trailing zeros: 0.5, 1, 0, 0.123."""
    return f"{rate:.3f}".rstrip("0").rstrip(".")


def format_matrix(result: SweepResult) -> List[str]:
    return ["".join(f"{format_rate(r)}\t" for r in row) for row in result.rates]


def gnuplot_terminal(image: str) -> str:
    ext = os.path.splitext(image)[1].lower()
    return "ps" if ext == ".ps" else "png"


def render_report(result: SweepResult, config: SweepConfig, plot: bool = True,
                  image: str = "bnb-output.png") -> List[str]:
    rows = format_matrix(result)
    if not plot:
        return rows

    return [
        "$data << EOD",
        *rows,
        "EOD",
        "",
        "set title 'Building Txs with no change (success rate)'",
        "unset key",
        'set zlabel "Success\\nrate"',
        "set xlabel 'Tolerance'",
        "set ylabel 'Wallet size'",
        "set surface",
        "set hidden3d",
        f"set term {gnuplot_terminal(image)}",
        f"set output '{image}'",
        f"splot $data matrix using ({config.min_tolerance}+$1*{config.inc_tolerance})"
        f":({config.min_wallet_size}+$2*{config.inc_wallet_size}):3 w lines",
    ]


# ---------- Main ----------

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Success rate of no-change payments by wallet size and tolerance.")
    ap.add_argument("--min-wallet-size", type=non_negative_int, default=0, help="First wallet size (default: 0).")
    ap.add_argument("--max-wallet-size", type=non_negative_int, default=100,
                    help="Last wallet size, inclusive (default: 100).")
    ap.add_argument("--inc-wallet-size", type=positive_int, default=1, help="Wallet size step (default: 1).")
    ap.add_argument("--min-tolerance", type=non_negative_int, default=0,
                    help="First tolerance in base units (default: 0).")
    ap.add_argument("--max-tolerance", type=non_negative_int, default=100_000,
                    help="Last tolerance in base units, inclusive (default: 100000).")
    ap.add_argument("--inc-tolerance", type=positive_int, default=1_000, help="Tolerance step (default: 1000).")
    ap.add_argument("--runs", type=positive_int, default=100, help="Random payments per grid cell (default: 100).")
    ap.add_argument("--random-denoms", dest="denoms", action="store_const", const="rnd", default="std",
                    help="Fill wallets with uniform random amounts.")
    ap.add_argument("--standard-denoms", dest="denoms", action="store_const", const="std",
                    help="Fill wallets with standard denominations (default).")
    ap.add_argument("--plot", dest="plot", action="store_true", default=True,
                    help="Wrap the matrix in a gnuplot script (default: on).")
    ap.add_argument("--no-plot", dest="plot", action="store_false",
                    help="Print the bare tab-separated matrix.")
    ap.add_argument("--output", type=str, default="bnb-output.png",
                    help="Image written by the gnuplot script; .ps selects PostScript (default: bnb-output.png).")
    ap.add_argument("--seed", type=non_negative_int, default=None, help="Random seed for reproducible runs.")
    ap.add_argument("--outfile", type=str, default=None, help="Write the report here instead of stdout.")
    ap.add_argument("--progress", type=non_negative_int, default=0,
                    help="Print progress to stderr every K wallet sizes (0 = silent).")
    return ap


def main(argv: Optional[List[str]] = None):
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.min_wallet_size > args.max_wallet_size:
        ap.error("--min-wallet-size must not exceed --max-wallet-size")
    if args.min_tolerance > args.max_tolerance:
        ap.error("--min-tolerance must not exceed --max-tolerance")

    config = SweepConfig(
        min_wallet_size=args.min_wallet_size,
        max_wallet_size=args.max_wallet_size,
        inc_wallet_size=args.inc_wallet_size,
        min_tolerance=args.min_tolerance,
        max_tolerance=args.max_tolerance,
        inc_tolerance=args.inc_tolerance,
        runs=args.runs,
        denoms=args.denoms,
    )
    rng = random.Random(args.seed)

    result = run_sweep(config, rng, progress=args.progress)
    report = "\n".join(render_report(result, config, plot=args.plot, image=args.output)) + "\n"

    if args.outfile:
        with open(args.outfile, "w", newline="") as f:
            f.write(report)
        print(f"Results saved to: {args.outfile}", file=sys.stderr)
    else:
        sys.stdout.write(report)


if __name__ == "__main__":
    main()
