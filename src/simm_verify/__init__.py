"""SIMM Verify - Whole-log validation verdicts."""
from .logic import check_log, check_text

__all__ = ["check_log", "check_text"]
