"""SIMM Core - Retention test log model and parser."""
from .errors import ERRORS, SimmError, InputFormatError, DataInsufficiencyError
from .record import Record, parse_record, split_blocks, load_records

__all__ = [
    "ERRORS",
    "SimmError",
    "InputFormatError",
    "DataInsufficiencyError",
    "Record",
    "parse_record",
    "split_blocks",
    "load_records",
]
