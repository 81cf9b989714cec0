import random

import pytest

from no_change_payments import (
    RANDOM_MAX_AMOUNT,
    RANDOM_MIN_AMOUNT,
    SweepConfig,
    SweepResult,
    format_rate,
    generate_random_wallet,
    gnuplot_terminal,
    main,
    render_report,
    run_sweep,
    success_rate,
)
from standard_denominations import STANDARD_DENOMINATIONS


SMALL = SweepConfig(
    min_wallet_size=1,
    max_wallet_size=5,
    inc_wallet_size=2,
    min_tolerance=0,
    max_tolerance=2_000,
    inc_tolerance=1_000,
    runs=10,
)


def test_standard_wallet_is_sorted_and_drawn_from_standard_set() -> None:
    wallet = generate_random_wallet(200, "std", random.Random(0))
    assert len(wallet) == 200
    assert wallet == sorted(wallet, reverse=True)
    assert set(wallet) <= set(STANDARD_DENOMINATIONS[:-1])


def test_random_wallet_amounts_in_range() -> None:
    wallet = generate_random_wallet(200, "rnd", random.Random(0))
    assert wallet == sorted(wallet, reverse=True)
    assert all(RANDOM_MIN_AMOUNT <= c < RANDOM_MAX_AMOUNT for c in wallet)


def test_empty_wallet() -> None:
    assert generate_random_wallet(0, "std", random.Random(0)) == []


def test_unknown_denomination_source() -> None:
    with pytest.raises(ValueError):
        generate_random_wallet(3, "lognormal", random.Random(0))


def test_success_rate_bounds() -> None:
    assert success_rate([], 0, 10, random.Random(0)) == 1.0
    rate = success_rate([50, 30, 10, 5], 0, 50, random.Random(0))
    assert 0.0 <= rate <= 1.0


def test_sweep_grid_shape() -> None:
    result = run_sweep(SMALL, random.Random(5))
    assert result.wallet_sizes == [1, 3, 5]
    assert result.tolerances == [0, 1_000, 2_000]
    assert len(result.rates) == 3
    assert all(len(row) == 3 for row in result.rates)
    assert all(0.0 <= r <= 1.0 for row in result.rates for r in row)


def test_sweep_is_reproducible_with_seed() -> None:
    a = run_sweep(SMALL, random.Random(42))
    b = run_sweep(SMALL, random.Random(42))
    assert a.rates == b.rates


@pytest.mark.parametrize(
    "rate,text",
    [(0.0, "0"), (1.0, "1"), (0.5, "0.5"), (0.25, "0.25"), (0.123, "0.123"), (2 / 3, "0.667")],
)
def test_format_rate(rate, text) -> None:
    assert format_rate(rate) == text


@pytest.mark.parametrize(
    "image,term",
    [("bnb-output.png", "png"), ("out.ps", "ps"), ("out.PS", "ps"), ("out.svg", "png"), ("out", "png")],
)
def test_gnuplot_terminal(image, term) -> None:
    assert gnuplot_terminal(image) == term


def test_render_report_without_plot() -> None:
    result = SweepResult(wallet_sizes=[1, 2], tolerances=[0, 1_000], rates=[[0.5, 1.0], [0.0, 0.25]])
    assert render_report(result, SMALL, plot=False) == ["0.5\t1\t", "0\t0.25\t"]


def test_render_report_with_plot() -> None:
    result = SweepResult(wallet_sizes=[1], tolerances=[0], rates=[[0.5]])
    lines = render_report(result, SMALL, plot=True, image="rates.ps")
    assert lines[:4] == ["$data << EOD", "0.5\t", "EOD", ""]
    assert "set term ps" in lines
    assert "set output 'rates.ps'" in lines
    assert 'set zlabel "Success\\nrate"' in lines
    assert lines[-1] == "splot $data matrix using (0+$1*1000):(1+$2*2):3 w lines"


def test_main_prints_matrix(capsys) -> None:
    main(["--min-wallet-size", "1", "--max-wallet-size", "3", "--max-tolerance", "2000",
          "--runs", "5", "--seed", "3", "--no-plot"])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert all(line.endswith("\t") and line.count("\t") == 3 for line in lines)


def test_main_writes_outfile(tmp_path) -> None:
    out = tmp_path / "bnb.gp"
    main(["--max-wallet-size", "2", "--max-tolerance", "0", "--runs", "3", "--seed", "1",
          "--random-denoms", "--outfile", str(out)])
    text = out.read_text()
    assert text.startswith("$data << EOD\n")
    assert "set term png" in text


@pytest.mark.parametrize(
    "argv",
    [
        ["--runs", "0"],
        ["--inc-tolerance", "0"],
        ["--min-tolerance", "-1"],
        ["--max-wallet-size", "ten"],
        ["--min-wallet-size", "5", "--max-wallet-size", "4"],
        ["--min-tolerance", "10", "--max-tolerance", "9"],
    ],
)
def test_main_rejects_invalid_options(argv) -> None:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2
