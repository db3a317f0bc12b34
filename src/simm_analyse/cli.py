"""SIMM Retention Analysis - Test log to decay statistics."""
from __future__ import annotations

from pathlib import Path

import click
import pyarrow as pa

from simm_core.errors import SimmError
from simm_core.protocol import TESTED_BITS
from simm_core.record import load_records
from simm_analyse.corruptability import generate_corruptability
from simm_analyse.flip_rates import generate_flip_rates
from simm_analyse.report import render_report, write_parquet


def analyse_log(
    log_path: Path,
    strict: bool = False,
    tested_bits: int = TESTED_BITS,
    parquet_dir: Path | None = None,
) -> str:
    """Parse a test log and return the two-table report text."""
    text = Path(log_path).read_text(encoding="utf-8")
    records = load_records(text)

    table = generate_corruptability(records)
    rates = generate_flip_rates(records, tested_bits=tested_bits)
    report = render_report(table, rates, strict=strict)

    if parquet_dir is not None:
        for p in write_parquet(table, rates, parquet_dir):
            click.echo(f"Wrote {p}", err=True)
    return report


@click.command()
@click.argument("log", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, help="Fail instead of writing 'undefined' for cells with no eligible readbacks")
@click.option(
    "--tested-bits",
    type=click.IntRange(min=1),
    default=TESTED_BITS,
    show_default=True,
    help="Bits in the tested region, per readback",
)
@click.option(
    "--parquet",
    "parquet_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Also write both tables as Parquet files into this directory",
)
def main(log: Path, strict: bool, tested_bits: int, parquet_dir: Path | None) -> None:
    """Turn a retention test log into corruptability and flip-rate tables."""
    try:
        report = analyse_log(log, strict=strict, tested_bits=tested_bits, parquet_dir=parquet_dir)
    except (SimmError, OSError, UnicodeDecodeError, pa.ArrowException) as e:
        # Fail closed, with a single-line reason.
        click.echo(f"FATAL: {e}", err=True)
        raise SystemExit(1)
    click.echo(report, nl=False)


if __name__ == "__main__":
    main()
