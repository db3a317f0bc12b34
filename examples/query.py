"""Query exported tables - most corruptable locations at a delay."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python query.py <parquet_dir> <delay> [limit]")
        print("Example: python query.py out/ 1000 10")
        sys.exit(1)

    tables = Path(sys.argv[1])
    delay = int(sys.argv[2])
    limit = int(sys.argv[3]) if len(sys.argv) > 3 else 10

    con = duckdb.connect(":memory:")

    con.execute(f"CREATE VIEW corruptability AS SELECT * FROM '{tables}/corruptability.parquet'")
    con.execute(f"CREATE VIEW flip_rates AS SELECT * FROM '{tables}/flip_rates.parquet'")

    sql = """
    SELECT
        c.location,
        c.numerator,
        c.denominator,
        c.fraction
    FROM corruptability c
    WHERE c.delay = ?
      AND c.fraction IS NOT NULL
    ORDER BY c.fraction DESC, c.location
    LIMIT ?
    """

    rate = con.execute("SELECT rate, observations FROM flip_rates WHERE delay = ?", [delay]).fetchone()

    print(f"--- Delay {delay} ---")
    if rate is not None:
        print(f"--- Flip rate {rate[0]:.3e} over {rate[1]} readbacks ---\n")

    df = con.execute(sql, [delay, limit]).fetchdf()
    if df.empty:
        print("No corrupted locations at this delay.")
    else:
        for _, row in df.iterrows():
            print(f"LOCATION: {row['location']}")
            print(f"  Corrupted: {row['numerator']}/{row['denominator']} ({row['fraction']:.1%})")
            print()


if __name__ == "__main__":
    main()
