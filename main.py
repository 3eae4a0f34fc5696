from pathlib import Path
from typing import List, Optional

import pandas as pd
import typer

from contingency_tables.datahub import (
    counts_frame,
    expected_frame,
    load_csv,
    proportions_frame,
    request_from_frame,
)
from contingency_tables.tabulation import TabulationError, TwoWayRequest, expected_frequency, proportion_table, tabulate

app = typer.Typer()


def _load_request(
    path: Path,
    column: str,
    by: Optional[str],
    weights: Optional[str],
    skip_missing: bool,
    categorical: List[str],
    ordered: List[str],
):
    try:
        frame = load_csv(path, categorical=categorical, ordered=ordered)
        return request_from_frame(frame, column, by=by, weights=weights, skip_missing=skip_missing)
    except (KeyError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def _emit(frame: pd.DataFrame) -> None:
    typer.echo(frame.to_string(index=False))


PathArgument = typer.Argument(
    ...,
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
    help="CSV file holding the observations.",
)
ColumnOption = typer.Option(..., "--column", "-c", help="Column tabulated along the first axis.")
ByOption = typer.Option(None, "--by", "-b", help="Optional column cross-tabulated along the second axis.")
WeightsOption = typer.Option(None, "--weights", "-w", help="Column holding non-negative observation weights.")
SkipMissingOption = typer.Option(False, "--skip-missing", help="Drop observations with a missing value.")
CategoricalOption = typer.Option([], "--categorical", help="Columns to treat as unordered categoricals.")
OrderedOption = typer.Option([], "--ordered", help="Columns to treat as ordered categoricals.")


@app.command()
def counts(
    path: Path = PathArgument,
    column: str = ColumnOption,
    by: Optional[str] = ByOption,
    weights: Optional[str] = WeightsOption,
    skip_missing: bool = SkipMissingOption,
    categorical: List[str] = CategoricalOption,
    ordered: List[str] = OrderedOption,
) -> None:
    """
    Print the frequency table of one column, or the cross-table of two.
    """
    request = _load_request(path, column, by, weights, skip_missing, categorical, ordered)
    try:
        result = tabulate(request)
    except TabulationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _emit(counts_frame(result))


@app.command()
def proportions(
    path: Path = PathArgument,
    column: str = ColumnOption,
    by: Optional[str] = ByOption,
    weights: Optional[str] = WeightsOption,
    skip_missing: bool = SkipMissingOption,
    categorical: List[str] = CategoricalOption,
    ordered: List[str] = OrderedOption,
    dims: Optional[str] = typer.Option(
        None,
        "--dims",
        help="Normalize by 'row' or 'col' totals instead of the grand total.",
    ),
) -> None:
    """
    Print total, row or column proportions.
    """
    request = _load_request(path, column, by, weights, skip_missing, categorical, ordered)
    try:
        result = proportion_table(request, dims=dims)
    except TabulationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if result.dimension:
        print(f"[tables] Normalized by {result.dimension} totals")
    _emit(proportions_frame(result))


@app.command()
def expected(
    path: Path = PathArgument,
    column: str = ColumnOption,
    by: str = typer.Option(..., "--by", "-b", help="Column cross-tabulated along the second axis."),
    weights: Optional[str] = WeightsOption,
    skip_missing: bool = SkipMissingOption,
    categorical: List[str] = CategoricalOption,
    ordered: List[str] = OrderedOption,
) -> None:
    """
    Print expected frequencies assuming the two columns are independent.
    """
    request = _load_request(path, column, by, weights, skip_missing, categorical, ordered)
    if not isinstance(request, TwoWayRequest):
        raise typer.BadParameter("Expected frequencies need two columns.")
    try:
        result = expected_frequency(tabulate(request))
    except TabulationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _emit(expected_frame(result))


if __name__ == "__main__":
    app()
