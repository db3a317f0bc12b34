from __future__ import annotations

from pathlib import Path
from warnings import warn

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq

from .corruptability import CorruptabilityTable
from .flip_rates import FlipRates

UNDEFINED = "undefined"

CORRUPTABILITY_SCHEMA = pa.schema(
    [
        ("delay", pa.int64()),
        ("location", pa.string()),
        ("numerator", pa.int64()),
        ("denominator", pa.int64()),
        ("fraction", pa.float64()),
    ]
)

FLIP_RATES_SCHEMA = pa.schema(
    [
        ("delay", pa.int64()),
        ("flips", pa.int64()),
        ("observations", pa.int64()),
        ("tested_bits", pa.int64()),
        ("rate", pa.float64()),
    ]
)


def format_number(x: float) -> str:
    """Shortest round-trip decimal, never in exponent form (0.5, 1, 0.000091552734375)."""
    return np.format_float_positional(x, trim="-")


def render_corruptability(table: CorruptabilityTable, strict: bool = False) -> list[str]:
    """One header line of delays, then one line per location."""
    lines = [", " + ", ".join(str(d) for d in table.delays)]
    for loc, cells in table.rows():
        out = [loc]
        for d, c in zip(table.delays, cells):
            if c.defined or strict:
                # fraction() raises DataInsufficiencyError in strict mode.
                out.append(format_number(c.fraction(d, loc)))
            else:
                warn(f"No eligible observations for location {loc} at delay {d}; writing '{UNDEFINED}'")
                out.append(UNDEFINED)
        lines.append(", ".join(out))
    return lines


def render_flip_rates(rates: FlipRates) -> list[str]:
    return [
        ",".join(str(d) for d in rates.delays),
        ",".join(format_number(r) for r in rates.rates),
    ]


def render_report(table: CorruptabilityTable, rates: FlipRates, strict: bool = False) -> str:
    lines = render_corruptability(table, strict=strict)
    lines.append("")
    lines.extend(render_flip_rates(rates))
    return "\n".join(lines) + "\n"


def write_parquet(table: CorruptabilityTable, rates: FlipRates, out_path: Path) -> list[Path]:
    """Write both tables under out_path. Returns the written files."""
    out_path = Path(out_path)
    out_path.mkdir(parents=True, exist_ok=True)

    written = []
    for df, schema, filename in [
        (table.to_frame(), CORRUPTABILITY_SCHEMA, "corruptability.parquet"),
        (rates.to_frame(), FLIP_RATES_SCHEMA, "flip_rates.parquet"),
    ]:
        pq.write_table(pa.Table.from_pandas(df, schema=schema, preserve_index=False), out_path / filename)
        written.append(out_path / filename)
    return written
