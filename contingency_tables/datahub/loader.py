"""Load delimited files into frames ready for tabulation."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from ..config import CSV_DEFAULTS, CsvReadConfig


def load_csv(
    path: Path,
    categorical: Sequence[str] = (),
    ordered: Sequence[str] = (),
    config: Optional[CsvReadConfig] = None,
) -> pd.DataFrame:
    """Read a CSV file, converting the named columns to categorical dtypes.

    Columns listed in ``ordered`` become ordered categoricals whose levels
    follow the sorted distinct values; ``categorical`` columns are unordered.
    """
    cfg = config or CSV_DEFAULTS
    if not path.exists():
        raise FileNotFoundError(f"No such file: {path}")

    print(f"[datahub] Loading {path}")
    frame = pd.read_csv(path, sep=cfg["sep"], encoding=cfg["encoding"], na_values=list(cfg["na_values"]))

    for column in (*categorical, *ordered):
        if column not in frame.columns:
            raise ValueError(f"Column {column!r} not found in {path}")
    for column in categorical:
        frame[column] = frame[column].astype(pd.CategoricalDtype(ordered=False))
    for column in ordered:
        frame[column] = frame[column].astype(pd.CategoricalDtype(ordered=True))

    print(f"[datahub] Loaded {len(frame)} rows x {len(frame.columns)} columns")
    return frame


__all__ = ["load_csv"]
