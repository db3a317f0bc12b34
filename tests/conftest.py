import pytest

from simm_core.protocol import BLOCK_SEPARATOR


def _block(delay, locations, diffs=None, pattern=0):
    if diffs is None:
        diffs = len(locations)
    locs = "".join(f"{loc}," for loc in locations)
    return f"Delay: {delay}, Pattern: {pattern}\n{locs}\nDiffs: {diffs}"


def _log(*blocks):
    return BLOCK_SEPARATOR.join(blocks) + "\n"


@pytest.fixture
def make_block():
    return _block


@pytest.fixture
def make_log():
    return _log


@pytest.fixture
def truncated_locations():
    # 31 sorted locations, the most the tester ever records.
    return [f"L{i:02d}" for i in range(31)]
