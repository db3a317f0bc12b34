import pyarrow.parquet as pq
import pytest

from simm_core.errors import DataInsufficiencyError
from simm_core.record import Record
from simm_analyse.corruptability import generate_corruptability
from simm_analyse.flip_rates import generate_flip_rates
from simm_analyse.report import (
    UNDEFINED,
    format_number,
    render_corruptability,
    render_flip_rates,
    render_report,
    write_parquet,
)


def rec(delay, locations, diffs=None):
    return Record(delay=delay, corrupted_locations=tuple(locations), bit_flip_count=len(locations) if diffs is None else diffs)


@pytest.mark.parametrize(
    "value,text",
    [
        (0.5, "0.5"),
        (1.0, "1"),
        (0.0, "0"),
        (1 / 3, "0.3333333333333333"),
        (3 / 32768, "0.000091552734375"),
    ],
)
def test_format_number(value, text):
    assert format_number(value) == text


def test_render_corruptability():
    table = generate_corruptability([rec(10, ["A", "B"]), rec(10, ["A"]), rec(20, ["C"])])
    assert render_corruptability(table) == [
        ", 10, 20",
        "A, 1, 0",
        "B, 0.5, 0",
        "C, 0, 1",
    ]


def test_render_empty_corruptability():
    assert render_corruptability(generate_corruptability([rec(1, [])])) == [", "]


def test_undefined_cell_marker(truncated_locations):
    table = generate_corruptability([rec(5, truncated_locations, diffs=40), rec(7, ["M"])])
    with pytest.warns(UserWarning, match="location M at delay 5"):
        lines = render_corruptability(table)
    assert lines[-1] == f"M, {UNDEFINED}, 1"


def test_undefined_cell_strict(truncated_locations):
    table = generate_corruptability([rec(5, truncated_locations, diffs=40), rec(7, ["M"])])
    with pytest.raises(DataInsufficiencyError):
        render_corruptability(table, strict=True)


def test_render_flip_rates():
    rates = generate_flip_rates([rec(5, ["A", "B", "C"]), rec(5, ["A", "B", "C", "D", "E"]), rec(1, [])], tested_bits=8)
    assert render_flip_rates(rates) == ["1,5", "0,0.5"]


def test_render_report_layout():
    records = [rec(10, ["A", "B"]), rec(10, ["A"]), rec(20, ["C"])]
    text = render_report(generate_corruptability(records), generate_flip_rates(records))
    assert text == (
        ", 10, 20\n"
        "A, 1, 0\n"
        "B, 0.5, 0\n"
        "C, 0, 1\n"
        "\n"
        "10,20\n"
        "0.0000457763671875,0.000030517578125\n"
    )


def test_write_parquet(tmp_path, truncated_locations):
    records = [rec(5, truncated_locations, diffs=40), rec(7, ["M"])]
    table = generate_corruptability(records)
    rates = generate_flip_rates(records)

    written = write_parquet(table, rates, tmp_path / "out")
    assert [p.name for p in written] == ["corruptability.parquet", "flip_rates.parquet"]

    corr = pq.read_table(tmp_path / "out" / "corruptability.parquet")
    assert corr.num_rows == 2 * 32
    assert corr.column("fraction").null_count == 1

    flips = pq.read_table(tmp_path / "out" / "flip_rates.parquet").to_pandas()
    assert flips["delay"].tolist() == [5, 7]
    assert flips["flips"].tolist() == [40, 1]
