"""Value domains: the canonical ordering of distinct values along one table axis.

A domain is either declared up-front by a categorical source (its levels) or
derived from the observations themselves (sorted distinct values). In both
cases a trailing ``MISSING`` bucket is appended when missing observations are
kept and at least one occurs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Protocol, Sequence, Tuple, runtime_checkable

import pandas as pd


class MissingMarker:
    """Singleton standing in for a missing observation inside a domain."""

    _instance: Optional["MissingMarker"] = None

    def __new__(cls) -> "MissingMarker":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        return "MISSING"


MISSING = MissingMarker()


@runtime_checkable
class HasUnderlyingValue(Protocol):
    """Domain-aware value wrapping a raw value (e.g. a categorical level)."""

    def unwrap(self) -> Any: ...


@runtime_checkable
class DeclaresLevels(Protocol):
    """Value source that fixes its admissible values ahead of observation."""

    levels: Tuple[Any, ...]
    ordered: bool


def is_missing(value: Any) -> bool:
    """True for None, NaN, pandas NA/NaT and the ``MISSING`` sentinel."""
    if value is None or value is MISSING:
        return True
    if isinstance(value, HasUnderlyingValue):
        return False
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def unwrap(value: Any) -> Any:
    """Return the raw value behind a domain-aware wrapper, or the value itself."""
    if isinstance(value, HasUnderlyingValue):
        return value.unwrap()
    return value


@dataclass(frozen=True)
class CategoricalValue:
    """One observation drawn from a :class:`Categorical` source."""

    value: Any

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Categorical:
    """Observation source with a fixed, duplicate-free level sequence."""

    values: Tuple[Any, ...]
    levels: Tuple[Any, ...]
    ordered: bool = False

    def __post_init__(self) -> None:
        values = tuple(MISSING if is_missing(value) else unwrap(value) for value in self.values)
        levels = tuple(self.levels)
        if len(set(levels)) != len(levels):
            raise ValueError("Categorical levels must be distinct.")
        if any(is_missing(level) for level in levels):
            raise ValueError("Categorical levels cannot contain missing values.")
        admissible = set(levels)
        unknown = [value for value in values if value is not MISSING and value not in admissible]
        if unknown:
            raise ValueError(f"Values {unknown[:3]!r} are not among the declared levels {levels!r}.")
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "levels", levels)
        object.__setattr__(self, "ordered", bool(self.ordered))

    @classmethod
    def from_values(
        cls,
        values: Iterable[Any],
        levels: Optional[Sequence[Any]] = None,
        ordered: bool = False,
    ) -> "Categorical":
        """Build a categorical source; levels default to the sorted distinct values."""
        materialized = tuple(values)
        if levels is None:
            levels = sort_distinct(dict.fromkeys(unwrap(v) for v in materialized if not is_missing(v)))
        return cls(materialized, tuple(levels), ordered)

    @classmethod
    def from_pandas(cls, data: Any) -> "Categorical":
        """Convert a ``pandas.Categorical`` (or a categorical Series) keeping levels and order."""
        if isinstance(data, pd.Series):
            if not isinstance(data.dtype, pd.CategoricalDtype):
                raise TypeError(f"Series {data.name!r} does not have a categorical dtype.")
            data = data.array
        if not isinstance(data, pd.Categorical):
            raise TypeError(f"Expected a pandas Categorical, received {type(data)}")
        return cls(tuple(data.tolist()), tuple(data.categories.tolist()), bool(data.ordered))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Any]:
        for value in self.values:
            yield MISSING if value is MISSING else CategoricalValue(value)


@dataclass(frozen=True)
class ValueDomain:
    """Ordered distinct values of one axis plus a value -> position index."""

    values: Tuple[Any, ...]
    index: Mapping[Any, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        values = tuple(self.values)
        index = {value: position for position, value in enumerate(values)}
        if len(index) != len(values):
            raise ValueError("Domain values must be pairwise distinct.")
        if MISSING in index and index[MISSING] != len(values) - 1:
            raise ValueError("The missing bucket must be the last domain entry.")
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "index", MappingProxyType(index))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    @property
    def has_missing(self) -> bool:
        return bool(self.values) and self.values[-1] is MISSING

    def index_of(self, value: Any) -> int:
        """Position of a raw value, mapping every missing flavour to the missing bucket."""
        if is_missing(value):
            return self.index[MISSING]
        return self.index[unwrap(value)]


def sort_distinct(distinct: Mapping[Any, Any]) -> List[Any]:
    """Sort distinct values ascending, falling back to first-seen order.

    Values without a natural total order (e.g. a mix of ``int`` and ``str``)
    keep the order in which they were first observed.
    """
    try:
        return sorted(distinct)
    except TypeError:
        return list(distinct)


def resolve_domain(
    values: Iterable[Any],
    levels: Optional[Sequence[Any]] = None,
    skip_missing: bool = False,
) -> ValueDomain:
    """Compute the canonical ordered domain of one observation source."""
    saw_missing = False
    if levels is not None:
        ordered_values: List[Any] = list(levels)
        if not skip_missing:
            saw_missing = any(is_missing(value) for value in values)
    else:
        distinct: Dict[Any, None] = {}
        for value in values:
            if is_missing(value):
                saw_missing = True
                continue
            distinct.setdefault(unwrap(value), None)
        ordered_values = sort_distinct(distinct)

    if saw_missing and not skip_missing:
        ordered_values.append(MISSING)
    return ValueDomain(tuple(ordered_values))


def declared_levels(source: Any) -> Optional[Tuple[Any, ...]]:
    """Levels fixed by the source, or None when the domain must be observed."""
    if isinstance(source, DeclaresLevels):
        return tuple(source.levels)
    return None


def declared_ordered(source: Any) -> bool:
    if isinstance(source, DeclaresLevels):
        return bool(source.ordered)
    return False


__all__ = [
    "Categorical",
    "CategoricalValue",
    "DeclaresLevels",
    "HasUnderlyingValue",
    "MISSING",
    "MissingMarker",
    "ValueDomain",
    "declared_levels",
    "declared_ordered",
    "is_missing",
    "resolve_domain",
    "sort_distinct",
    "unwrap",
]
