"""Client-side filtering of a loaded list"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Accessor = Callable[[Any], Any]

# Filter values meaning "no constraint"
SENTINELS = frozenset({"all", "%"})
CODE_SENTINELS = SENTINELS | {"0"}


class FieldMatch(str, Enum):
    TEXT = "text"  # case-insensitive substring
    CODE = "code"  # exact match


@dataclass(frozen=True)
class FilterField:
    accessor: Accessor
    match: FieldMatch = FieldMatch.TEXT


def field_accessor(name: str) -> Accessor:
    """Read ``name`` from a mapping or an attribute of a record"""

    def read(row: Any) -> Any:
        if isinstance(row, Mapping):
            return row.get(name)
        return getattr(row, name, None)

    return read


def is_sentinel(value: Any, match: FieldMatch = FieldMatch.TEXT) -> bool:
    """True when a criterion value places no constraint on the list"""
    if value is None:
        return True
    if isinstance(value, str):
        text = value.strip().lower()
        if not text:
            return True
        return text in (CODE_SENTINELS if match is FieldMatch.CODE else SENTINELS)
    if match is FieldMatch.CODE and isinstance(value, int) and not isinstance(value, bool):
        return value == 0
    return False


def _matches(actual: Any, wanted: Any, match: FieldMatch) -> bool:
    if actual is None:
        return False
    if match is FieldMatch.TEXT:
        return str(wanted).strip().lower() in str(actual).lower()
    if isinstance(actual, (int, float)) and not isinstance(actual, bool):
        try:
            return float(actual) == float(wanted)
        except (TypeError, ValueError):
            return False
    return str(actual).strip() == str(wanted).strip()


def apply_filters(
    rows: Sequence[T],
    criteria: Mapping[str, Any],
    fields: Mapping[str, FilterField],
) -> list[T]:
    """
    Return the rows matching every non-sentinel criterion (AND semantics).

    ``fields`` maps a criterion name to how it is read from a row and matched.
    Empty or all-sentinel criteria return the input rows unchanged.
    """
    active: list[tuple[FilterField, Any]] = []
    for name, wanted in criteria.items():
        filter_field = fields.get(name)
        if filter_field is None:
            logger.debug(f"Ignoring unknown filter criterion {name!r}")
            continue
        if is_sentinel(wanted, filter_field.match):
            continue
        active.append((filter_field, wanted))

    if not active:
        return list(rows)

    return [
        row
        for row in rows
        if all(_matches(filter_field.accessor(row), wanted, filter_field.match) for filter_field, wanted in active)
    ]


def keyword_filter(rows: Sequence[T], keyword: Optional[str], accessors: Iterable[Accessor]) -> list[T]:
    """Keep rows where any of the given columns contains ``keyword``"""
    if is_sentinel(keyword):
        return list(rows)
    needle = keyword.strip().lower()
    accessors = list(accessors)
    result = []
    for row in rows:
        for read in accessors:
            value = read(row)
            if value is not None and needle in str(value).lower():
                result.append(row)
                break
    return result
