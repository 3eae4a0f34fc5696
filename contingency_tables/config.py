"""Static configuration shared by the tabulation engine, adapters and CLI."""

from __future__ import annotations

from typing import Literal, Optional, Tuple, TypedDict

Dimension = Literal["row", "col"]


class CsvReadConfig(TypedDict):
    sep: str
    encoding: str
    na_values: Tuple[str, ...]


# Label used for the missing bucket when results are rendered as tables.
MISSING_LABEL = "missing"

# Accepted normalization dimensions; None means "divide by the grand total".
VALID_DIMENSIONS: Tuple[Optional[Dimension], ...] = (None, "row", "col")

# Tolerance used when checking that proportions/marginals add up.
DEFAULT_TOLERANCE = 1e-9

# ---------------------------------------------------------------------------
# CSV payload used by the loader.

CSV_DEFAULTS: CsvReadConfig = {
    "sep": ",",
    "encoding": "utf-8",
    "na_values": ("", "NA", "missing"),
}


__all__ = [
    "CSV_DEFAULTS",
    "CsvReadConfig",
    "DEFAULT_TOLERANCE",
    "Dimension",
    "MISSING_LABEL",
    "VALID_DIMENSIONS",
]
