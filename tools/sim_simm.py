import random
from pathlib import Path

from simm_core.protocol import (
    BLOCK_SEPARATOR,
    LOCATION_DELIMITER,
    MAX_RECORDED_LOCATIONS,
    TESTED_BITS,
)

# --- CONFIGURATION ---
DELAYS = [0, 250, 500, 1000, 2000, 4000]  # ms without refresh
WEAK_CELLS = 64
MEAN_RETENTION = 2500.0  # ms
NOISE_RATE = 0.02  # chance a weak cell reads back wrong before its retention time


def make_cells(rng: random.Random) -> dict[str, float]:
    """Weak bit addresses and the delay each one stops holding its charge at."""
    bits = rng.sample(range(TESTED_BITS), WEAK_CELLS)
    return {f"{b:08X}": rng.expovariate(1.0 / MEAN_RETENTION) for b in bits}


def read_back(cells: dict[str, float], delay: int, rng: random.Random) -> list[str]:
    return sorted(
        loc for loc, retention in cells.items()
        if retention < delay or rng.random() < NOISE_RATE
    )


def format_block(delay: int, pattern: int, corrupted: list[str]) -> str:
    # Tester firmware only logs the first locations, but counts them all.
    logged = corrupted[:MAX_RECORDED_LOCATIONS]
    locs = "".join(loc + LOCATION_DELIMITER for loc in logged)
    return f"Delay: {delay}, Pattern: {pattern}\n{locs}\nDiffs: {len(corrupted)}"


def generate_log(output: str, runs: int = 3, seed: int | None = None) -> Path:
    rng = random.Random(seed)
    cells = make_cells(rng)

    blocks = []
    for _ in range(runs):
        for delay in DELAYS:
            pattern = rng.randint(0, 255)
            blocks.append(format_block(delay, pattern, read_back(cells, delay, rng)))

    out = Path(output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(BLOCK_SEPARATOR.join(blocks) + "\n", encoding="utf-8")

    print(f"GENERATED: {out} ({len(blocks)} blocks)")
    return out

if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/sim_simm.py OUT_FILE [--runs N] [--seed S]

    args = [a for a in sys.argv[1:] if a]

    def pop_option(arg_list: list[str], opt: str) -> tuple[str | None, list[str]]:
        """Remove `opt VALUE` from an argv-style list."""
        if opt not in arg_list:
            return None, arg_list
        i = arg_list.index(opt)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{opt} requires a value")
        return arg_list[i + 1], arg_list[:i] + arg_list[i + 2:]

    runs, args = pop_option(args, "--runs")
    seed, args = pop_option(args, "--seed")

    out = args[0] if len(args) > 0 else "simm_test.log"
    generate_log(out, runs=int(runs) if runs else 3, seed=int(seed) if seed else None)
