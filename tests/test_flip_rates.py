import pytest

from simm_core.protocol import TESTED_BITS
from simm_core.record import Record
from simm_analyse.flip_rates import generate_flip_rates


def rec(delay, diffs):
    # One recorded location per flipped bit, well under the recording limit.
    locs = tuple(f"{i:08X}" for i in range(diffs))
    return Record(delay=delay, corrupted_locations=locs, bit_flip_count=diffs)


def test_example_rate():
    rates = generate_flip_rates([rec(5, 3), rec(5, 5)], tested_bits=8)
    assert rates.delays == (5,)
    assert rates.rates == (0.5,)
    assert rates.observations == (2,)
    assert rates.flips == (8,)


def test_denominator_uses_group_size():
    rates = generate_flip_rates([rec(1, 0), rec(2, 4), rec(1, 2), rec(1, 1)])
    assert rates.delays == (1, 2)
    assert rates.observations == (3, 1)
    assert rates.rates == (3 / (3 * TESTED_BITS), 4 / TESTED_BITS)


def test_delays_ascending():
    rates = generate_flip_rates([rec(900, 1), rec(0, 0), rec(45, 2)])
    assert rates.delays == (0, 45, 900)
    assert rates.rates[0] == 0.0


def test_tested_bits_must_be_positive():
    with pytest.raises(ValueError):
        generate_flip_rates([rec(1, 1)], tested_bits=0)


def test_to_frame():
    df = generate_flip_rates([rec(5, 3), rec(5, 5)], tested_bits=8).to_frame()
    assert list(df.columns) == ["delay", "flips", "observations", "tested_bits", "rate"]
    assert df.to_dict("records") == [{"delay": 5, "flips": 8, "observations": 2, "tested_bits": 8, "rate": 0.5}]
