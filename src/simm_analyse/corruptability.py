from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import pandas as pd

from simm_core.errors import DataInsufficiencyError
from simm_core.record import Record


@dataclass
class Cell:
    numerator: int = 0
    denominator: int = 0

    @property
    def defined(self) -> bool:
        return self.denominator > 0

    def fraction(self, delay: int | None = None, location: str | None = None) -> float:
        if not self.defined:
            detail = "" if location is None else f"location {location} at delay {delay}"
            raise DataInsufficiencyError("E_DATA_INSUFFICIENT", detail)
        return self.numerator / self.denominator

    def clean_percent(self) -> int:
        """Integer percentage of clean observations. Kept integral so it sorts stably."""
        return 100 - self.numerator * 100 // self.denominator


@dataclass
class CorruptabilityTable:
    """Fraction of readbacks corrupting each location, per delay.

    `delays` are ascending. `locations` are ordered by the delay at which
    they first corrupt, then by how often they corrupt at that delay.
    """

    delays: list[int]
    locations: list[str]
    cells: dict[tuple[int, str], Cell] = field(default_factory=dict)

    def cell(self, delay: int, location: str) -> Cell:
        return self.cells[(delay, location)]

    def fraction(self, delay: int, location: str) -> float:
        return self.cell(delay, location).fraction(delay, location)

    def undefined_cells(self) -> list[tuple[int, str]]:
        return [
            (d, loc)
            for loc in self.locations
            for d in self.delays
            if not self.cell(d, loc).defined
        ]

    def rows(self) -> Iterable[tuple[str, list[Cell]]]:
        for loc in self.locations:
            yield loc, [self.cell(d, loc) for d in self.delays]

    def to_frame(self) -> pd.DataFrame:
        data = []
        for loc in self.locations:
            for d in self.delays:
                c = self.cell(d, loc)
                data.append({
                    "delay": d,
                    "location": loc,
                    "numerator": c.numerator,
                    "denominator": c.denominator,
                    "fraction": c.numerator / c.denominator if c.defined else None,
                })
        return pd.DataFrame(data, columns=["delay", "location", "numerator", "denominator", "fraction"])


def generate_corruptability(records: list[Record]) -> CorruptabilityTable:
    """Build the location x delay corruption table for a batch."""
    # Every location ever corrupted, and every delay at which anything was.
    locations = {loc for r in records for loc in r.corrupted_locations}
    delays = sorted({r.delay for r in records if r.corrupted_locations})

    # Seed all pairs up front so every cell starts at 0/0.
    cells: dict[tuple[int, str], Cell] = {}
    by_delay: dict[int, list[tuple[str, Cell]]] = {d: [] for d in delays}
    for loc in locations:
        for d in delays:
            c = Cell()
            cells[(d, loc)] = c
            by_delay[d].append((loc, c))

    for r in records:
        # Numerators: the location is in the corrupted list.
        for loc in r.corrupted_locations:
            cells[(r.delay, loc)].numerator += 1

        # Denominators: every location at or below the ceiling. Past it the
        # readback is unknown, so it counts for neither side.
        ceiling = r.truncation_ceiling
        for loc, c in by_delay.get(r.delay, ()):
            if ceiling is None or loc <= ceiling:
                c.denominator += 1

    # First delay each location corrupts at, with its clean percentage there.
    first_seen: dict[str, tuple[int, int]] = {}
    for r in records:
        for loc in r.corrupted_locations:
            seen = first_seen.get(loc)
            if seen is None or seen[0] > r.delay:
                first_seen[loc] = (r.delay, cells[(r.delay, loc)].clean_percent())

    ordered = sorted(first_seen, key=lambda loc: (first_seen[loc], loc))
    return CorruptabilityTable(delays=delays, locations=ordered, cells=cells)
