from .frames import (
    axis_labels,
    column_values,
    counts_frame,
    expected_frame,
    proportions_frame,
    request_from_frame,
)
from .loader import load_csv

__all__ = [
    "axis_labels",
    "column_values",
    "counts_frame",
    "expected_frame",
    "load_csv",
    "proportions_frame",
    "request_from_frame",
]
