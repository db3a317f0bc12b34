"""SIMM retention-test log protocol constants.

Single source of truth for the log layout written by the tester.
Keep this file stable. Tester firmware and analyser must remain synchronized.
"""
import re

# Blocks are separated by a line of exactly 32 hyphens
SEPARATOR_WIDTH = 32
BLOCK_SEPARATOR = "\n" + "-" * SEPARATOR_WIDTH + "\n"

# Block layout: [Delay line | Location list | Diffs line]
BLOCK_LINES = 3
DELAY_LINE_RE = re.compile(r"Delay: ([0-9]+), Pattern: ([0-9]+)")
DIFFS_LINE_RE = re.compile(r"Diffs: ([0-9]+)")
LOCATION_DELIMITER = ","

# The tester only logs the first 31 corrupted locations of a readback
MAX_RECORDED_LOCATIONS = 31

# Test region sizing
TESTED_BYTES = 4096
TESTED_BITS = TESTED_BYTES * 8
