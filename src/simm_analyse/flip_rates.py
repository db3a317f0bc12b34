from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from simm_core.protocol import TESTED_BITS
from simm_core.record import Record


@dataclass(frozen=True)
class FlipRates:
    """Average fraction of tested bits flipped, per delay (ascending)."""

    delays: tuple[int, ...]
    flips: tuple[int, ...]
    observations: tuple[int, ...]
    tested_bits: int = TESTED_BITS

    @property
    def rates(self) -> tuple[float, ...]:
        return tuple(f / (n * self.tested_bits) for f, n in zip(self.flips, self.observations))

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "delay": list(self.delays),
                "flips": list(self.flips),
                "observations": list(self.observations),
                "tested_bits": [self.tested_bits] * len(self.delays),
                "rate": list(self.rates),
            },
            columns=["delay", "flips", "observations", "tested_bits", "rate"],
        )


def generate_flip_rates(records: list[Record], tested_bits: int = TESTED_BITS) -> FlipRates:
    if tested_bits <= 0:
        raise ValueError(f"tested_bits must be positive, got {tested_bits}")

    df = pd.DataFrame(
        [{"delay": r.delay, "bit_flip_count": r.bit_flip_count} for r in records],
        columns=["delay", "bit_flip_count"],
    )
    grouped = (
        df.groupby("delay")["bit_flip_count"]
        .agg(["sum", "size"])
        .sort_index()
    )
    return FlipRates(
        delays=tuple(int(d) for d in grouped.index),
        flips=tuple(int(s) for s in grouped["sum"]),
        observations=tuple(int(n) for n in grouped["size"]),
        tested_bits=tested_bits,
    )
