"""SIMM Retention Analysis - Test log records."""
from __future__ import annotations

from dataclasses import dataclass
from warnings import warn

from .errors import InputFormatError
from .protocol import (
    BLOCK_LINES,
    BLOCK_SEPARATOR,
    DELAY_LINE_RE,
    DIFFS_LINE_RE,
    LOCATION_DELIMITER,
    MAX_RECORDED_LOCATIONS,
)


@dataclass(frozen=True)
class Record:
    """One readback of the test region after a retention delay.

    `corrupted_locations` keeps the order the tester wrote them in and is
    cut off at MAX_RECORDED_LOCATIONS entries; `bit_flip_count` is not.
    Construction checks the invariants and raises InputFormatError.
    """

    delay: int
    corrupted_locations: tuple[str, ...]
    bit_flip_count: int
    block: int | None = None

    def __post_init__(self) -> None:
        locs = tuple(self.corrupted_locations)
        object.__setattr__(self, "corrupted_locations", locs)

        seen: set[str] = set()
        for loc in locs:
            if not loc:
                raise InputFormatError("E_LOCATION_EMPTY", repr(LOCATION_DELIMITER.join(locs)), self.block)
            if loc in seen:
                raise InputFormatError("E_LOCATION_DUPLICATE", loc, self.block)
            seen.add(loc)

        if len(locs) == MAX_RECORDED_LOCATIONS:
            # The ceiling must be the largest recorded location.
            if locs[-1] != max(locs):
                raise InputFormatError("E_CEILING_ORDER", locs[-1], self.block)
        elif self.bit_flip_count != len(locs):
            raise InputFormatError(
                "E_TRUNCATION", f"{self.bit_flip_count} diffs, {len(locs)} locations", self.block
            )

    @property
    def truncated(self) -> bool:
        return len(self.corrupted_locations) == MAX_RECORDED_LOCATIONS

    @property
    def truncation_ceiling(self) -> str | None:
        """Largest location known for this readback, or None if all are known."""
        if self.truncated:
            return self.corrupted_locations[-1]
        return None


# Line of the block each Record check points at, relative to the Delay line.
_CHECK_LINE = {
    "E_LOCATION_EMPTY": 1,
    "E_LOCATION_DUPLICATE": 1,
    "E_CEILING_ORDER": 1,
    "E_TRUNCATION": 2,
}


def _parse_locations(line: str, block: int | None, lineno: int | None) -> tuple[str, ...]:
    locs = line.split(LOCATION_DELIMITER)
    # Comma-terminated, so the final segment is always empty.
    last = locs.pop()
    if last:
        raise InputFormatError("E_LOCATIONS_UNTERMINATED", repr(line), block, lineno)
    return tuple(locs)


def parse_record(text: str, block: int | None = None, line: int | None = None) -> Record:
    """Parse one block of the log into a Record.

    `block` and `line` only feed error messages. Raises InputFormatError.
    """
    lines = text.split("\n")

    # Should be 3 lines, but allow an extra blank line at the end of the file.
    if not (len(lines) == BLOCK_LINES or (len(lines) == BLOCK_LINES + 1 and lines[-1] == "")):
        raise InputFormatError("E_BLOCK_LINES", f"found {len(lines)}", block, line)

    def lineno(offset: int) -> int | None:
        return None if line is None else line + offset

    # "Delay: n, Pattern: m" - only n is kept.
    m = DELAY_LINE_RE.fullmatch(lines[0])
    if m is None:
        raise InputFormatError("E_DELAY_LINE", repr(lines[0]), block, lineno(0))
    delay = int(m.group(1))

    locations = _parse_locations(lines[1], block, lineno(1))

    # Diffs counts bit changes, locations are only logged up to the limit.
    m = DIFFS_LINE_RE.fullmatch(lines[2])
    if m is None:
        raise InputFormatError("E_DIFFS_LINE", repr(lines[2]), block, lineno(2))
    diffs = int(m.group(1))

    try:
        return Record(delay=delay, corrupted_locations=locations, bit_flip_count=diffs, block=block)
    except InputFormatError as e:
        raise InputFormatError(e.code, e.detail, block, lineno(_CHECK_LINE[e.code])) from None


def split_blocks(text: str) -> list[tuple[int, str]]:
    """Split a log into (starting line, block text) pairs."""
    blocks = []
    cur = 1
    for chunk in text.split(BLOCK_SEPARATOR):
        blocks.append((cur, chunk))
        # Block lines, then the separator line.
        cur += chunk.count("\n") + 2
    return blocks


def load_records(text: str) -> list[Record]:
    """Parse a whole log. Fails on the first bad block."""
    records = [
        parse_record(chunk, block=i, line=start)
        for i, (start, chunk) in enumerate(split_blocks(text), start=1)
    ]

    truncated = sum(1 for r in records if r.truncated and r.bit_flip_count > MAX_RECORDED_LOCATIONS)
    if truncated:
        warn(
            f"{truncated} of {len(records)} records hold more flips than the "
            f"{MAX_RECORDED_LOCATIONS} recorded locations"
        )
    return records
