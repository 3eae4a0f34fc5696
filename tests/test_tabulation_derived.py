"""Tests for proportion tables and expected frequencies."""

from __future__ import annotations

from pathlib import Path
import sys

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from contingency_tables.config import DEFAULT_TOLERANCE
from contingency_tables.tabulation import (
    MISSING,
    Categorical,
    InvalidArgumentError,
    OneWayRequest,
    TwoWayRequest,
    contingency_table,
    cross_proportions,
    cross_table,
    expected_frequency,
    proportion_table,
    proportions,
    value_proportions,
)
from contingency_tables.tabulation.normalization import (
    ColumnNormalization,
    RowNormalization,
    TotalNormalization,
    normalization_for,
)

ROWS = [1, 2, 2, 3, 1, 3, 3, 2]
COLS = ["A", "B", "A", "B", "B", "A", "A", "A"]


# ---------------------------------------------------------------------------
# Normalization policies


def test_normalization_for_resolves_policies() -> None:
    assert isinstance(normalization_for(None), TotalNormalization)
    assert isinstance(normalization_for("row"), RowNormalization)
    assert isinstance(normalization_for("col"), ColumnNormalization)


@pytest.mark.parametrize("dims", ["bogus", "rows", "none", 1, ("row",)])
def test_normalization_for_rejects_unknown_dims(dims: object) -> None:
    with pytest.raises(InvalidArgumentError):
        normalization_for(dims)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# One-way proportions


def test_one_way_proportions() -> None:
    result = proportion_table(OneWayRequest.of([1, 2, 2, 3, 3, 3]))
    assert result.proportions.tolist() == pytest.approx([1 / 6, 1 / 3, 1 / 2])
    assert result.proportions.dtype == np.float64
    assert result.count_type is float
    assert result.dimension is None
    assert result.axes[0].values == (1, 2, 3)


def test_one_way_proportions_from_existing_table() -> None:
    table = contingency_table([1, 2, 2, 3, 3, 3])
    result = proportions(table)
    assert result.proportions.sum() == pytest.approx(1.0, abs=DEFAULT_TOLERANCE)
    assert table.counts.tolist() == [1, 2, 3]


@pytest.mark.parametrize("dims", [None, "row", "col"])
def test_one_way_dims_reduce_to_total(dims: str | None) -> None:
    result = proportions(contingency_table([1, 2, 2, 3]), dims)
    assert result.proportions.tolist() == pytest.approx([0.25, 0.5, 0.25])
    assert result.dimension is None


def test_one_way_proportions_with_missing_and_weights() -> None:
    result = proportion_table(OneWayRequest.of([1, None, 2, None, 2]))
    assert result.axes[0].values == (1, 2, MISSING)
    assert result.proportions.sum() == pytest.approx(1.0)

    weighted = proportion_table(OneWayRequest.of(["A", "B", "B"], weights=[2.0, 1.0, 2.0]))
    assert weighted.proportions[1] == pytest.approx(0.6)


def test_one_way_proportions_keep_categorical_metadata() -> None:
    source = Categorical.from_values(["A", "B", "B", "C"], ordered=True)
    result = proportion_table(OneWayRequest.of(source))
    assert result.ordered == (True,)
    assert result.levels == (("A", "B", "C"),)
    assert result.value_type is str


# ---------------------------------------------------------------------------
# Two-way proportions


def test_total_proportions_sum_to_one() -> None:
    result = proportion_table(TwoWayRequest.of(ROWS, COLS))
    assert result.proportions.sum() == pytest.approx(1.0, abs=DEFAULT_TOLERANCE)
    assert result.dimension is None
    assert result.proportions.shape == (3, 2)


def test_row_proportions_sum_to_one_per_row() -> None:
    result = proportion_table(TwoWayRequest.of(ROWS, COLS), dims="row")
    assert np.allclose(result.proportions.sum(axis=1), 1.0, atol=DEFAULT_TOLERANCE)
    assert result.dimension == "row"


def test_col_proportions_sum_to_one_per_column() -> None:
    result = proportion_table(TwoWayRequest.of(ROWS, COLS), dims="col")
    assert np.allclose(result.proportions.sum(axis=0), 1.0, atol=DEFAULT_TOLERANCE)
    assert result.dimension == "col"


def test_proportions_carry_forward_provenance() -> None:
    rows = Categorical.from_values(["X", "Y", "X"], ordered=True)
    table = cross_table(rows, [1, 2, 1], weights=[1.0, 2.0, 3.0])
    result = proportions(table, "row")
    assert result.axes == table.axes
    assert result.levels == table.levels
    assert result.ordered == (True, False)
    assert result.value_type == (str, int)
    assert result.count_type is float
    assert np.allclose(result.proportions.sum(axis=1), 1.0)


def test_proportions_are_idempotent() -> None:
    table = cross_table(ROWS, COLS)
    for dims in (None, "row", "col"):
        first = proportions(table, dims)
        second = proportions(table, dims)
        assert first is not second
        assert np.array_equal(first.proportions, second.proportions, equal_nan=True)


def test_zero_row_total_propagates_nan() -> None:
    table = cross_table(["a", "b"], [1, 2], weights=[1.0, 0.0])
    by_row = proportions(table, "row")
    assert by_row.proportions[0].tolist() == pytest.approx([1.0, 0.0])
    assert np.isnan(by_row.proportions[1]).all()

    by_col = proportions(table, "col")
    assert by_col.proportions[:, 0].tolist() == pytest.approx([1.0, 0.0])
    assert np.isnan(by_col.proportions[:, 1]).all()


def test_invalid_dims_raise_before_counting() -> None:
    with pytest.raises(InvalidArgumentError):
        proportion_table(TwoWayRequest.of([1, 2, 2], ["A", "B", "B"]), dims="bogus")
    with pytest.raises(InvalidArgumentError):
        proportions(cross_table([1, 2], ["A", "B"]), dims="bogus")
    with pytest.raises(InvalidArgumentError):
        proportion_table(OneWayRequest.of([]), dims="bogus")


def test_proportions_do_not_mutate_source() -> None:
    table = cross_table(ROWS, COLS)
    before = table.counts.copy()
    proportions(table, "col")
    assert np.array_equal(table.counts, before)
    assert table.counts.dtype == np.int64


def test_value_proportions_from_raw_values() -> None:
    result = value_proportions([1, 2, 2, 3, 3, 3])
    assert result.axes[0].values == (1, 2, 3)
    assert result.proportions.tolist() == pytest.approx([1 / 6, 1 / 3, 1 / 2])
    assert result.dimension is None


def test_cross_proportions_match_proportion_table() -> None:
    shortcut = cross_proportions(ROWS, COLS, dims="row")
    full = proportion_table(TwoWayRequest.of(ROWS, COLS), dims="row")
    assert shortcut.dimension == "row"
    assert np.allclose(shortcut.proportions, full.proportions)
    assert np.allclose(shortcut.proportions.sum(axis=1), 1.0)


def test_cross_proportions_skip_missing_with_weights() -> None:
    result = cross_proportions([1, None, 2], ["A", "B", "A"], skip_missing=True, weights=[1.0, 5.0, 3.0])
    assert result.axes[1].values == ("A",)
    assert np.allclose(result.proportions, [[0.25], [0.75]])


# ---------------------------------------------------------------------------
# Expected frequencies


def test_expected_balanced_design() -> None:
    result = expected_frequency(cross_table(["A", "A", "B", "B"], [1, 2, 1, 2]))
    assert np.allclose(result.frequencies, [[1.0, 1.0], [1.0, 1.0]])


def test_expected_matches_independence_formula() -> None:
    table = cross_table(["A", "A", "B", "B", "B"], [1, 2, 1, 2, 2])
    result = expected_frequency(table)
    # Observed [[1, 1], [1, 2]]: rows 2/3, cols 2/3, total 5.
    assert np.allclose(result.frequencies, [[0.8, 1.2], [1.2, 1.8]])
    assert result.axes == table.axes


@pytest.mark.parametrize("weighted", [False, True])
def test_expected_preserves_marginals(weighted: bool) -> None:
    rng = np.random.default_rng(11)
    rows = rng.integers(0, 5, size=60).tolist()
    cols = rng.integers(0, 3, size=60).tolist()
    weights = rng.random(60) if weighted else None
    table = cross_table(rows, cols, weights=weights)
    result = expected_frequency(table)

    observed = table.counts.astype(float)
    assert np.allclose(result.frequencies.sum(axis=1), observed.sum(axis=1), atol=DEFAULT_TOLERANCE)
    assert np.allclose(result.frequencies.sum(axis=0), observed.sum(axis=0), atol=DEFAULT_TOLERANCE)
    assert result.frequencies.sum() == pytest.approx(observed.sum(), abs=DEFAULT_TOLERANCE)


def test_expected_one_way_returns_observed_counts() -> None:
    table = contingency_table([1, 2, 2])
    result = expected_frequency(table)
    assert result.frequencies.tolist() == table.counts.tolist()
    assert result.axes == table.axes


def test_expected_empty_table_yields_nan() -> None:
    table = cross_table(["a", "b"], [1, 2], weights=[0.0, 0.0])
    result = expected_frequency(table)
    assert np.isnan(result.frequencies).all()


def test_expected_result_is_read_only() -> None:
    result = expected_frequency(cross_table([1, 2], [1, 2]))
    with pytest.raises(ValueError):
        result.frequencies[0, 0] = 3.0
