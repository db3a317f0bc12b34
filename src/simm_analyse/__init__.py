"""SIMM Analyse - Corruptability and flip-rate statistics."""
from .corruptability import Cell, CorruptabilityTable, generate_corruptability
from .flip_rates import FlipRates, generate_flip_rates
from .report import render_corruptability, render_flip_rates, render_report, write_parquet

__all__ = [
    "Cell",
    "CorruptabilityTable",
    "generate_corruptability",
    "FlipRates",
    "generate_flip_rates",
    "render_corruptability",
    "render_flip_rates",
    "render_report",
    "write_parquet",
]
