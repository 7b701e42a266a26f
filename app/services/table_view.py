"""Searchable, sortable projection of an in-memory record list.

``TableViewModel`` holds the search query and sort state for one table and
derives the visible rows from them on demand. Records can be mappings or
plain objects (pydantic models included); a column may also compute its
value through an accessor.

Ordering rules:

* text compares by Python ``str`` ordering (code points, case-sensitive,
  locale-independent); numbers numerically; datetimes chronologically
  (naive values are taken as UTC)
* a record without a value for the sort column sorts last when ascending
  and first when descending
* records with equal values keep their source order in both directions
"""

import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class ColumnKind(str, enum.Enum):
    TEXT = "text"
    NUMBER = "number"
    DATETIME = "datetime"


class IntentAction(str, enum.Enum):
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"


def field_value(record: Any, key: str) -> Any:
    """Read ``key`` from a mapping or an object; None when absent."""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


@dataclass(frozen=True)
class Column:
    key: str
    label: str = ""
    sortable: bool = True
    kind: ColumnKind = ColumnKind.TEXT
    accessor: Optional[Callable[[Any], Any]] = None

    def value(self, record: Any) -> Any:
        if self.accessor is not None:
            return self.accessor(record)
        return field_value(record, self.key)


@dataclass(frozen=True)
class TableIntent:
    """Request for the presentation layer to open a create/edit/delete flow"""
    action: IntentAction
    record: Any = None


IntentHandler = Callable[[TableIntent], None]


class TableViewModel:
    def __init__(
        self,
        records: Iterable[Any],
        columns: Sequence[Column],
        search_keys: Sequence[str],
        on_intent: Optional[IntentHandler] = None,
    ) -> None:
        self._records: List[Any] = list(records)
        self._columns = {column.key: column for column in columns}
        self.columns: Tuple[Column, ...] = tuple(columns)
        self.search_keys: Tuple[str, ...] = tuple(search_keys)
        self._on_intent = on_intent

        self.search_query = ""
        self.sort_key: Optional[str] = None
        self.sort_direction = SortDirection.ASC

    @property
    def sortable_keys(self) -> List[str]:
        return [column.key for column in self.columns if column.sortable]

    # State

    def set_search_query(self, query: Optional[str]) -> None:
        self.search_query = query or ""

    def set_sort(self, key: str) -> None:
        """
        Sort by ``key``. Reselecting the current key flips the direction,
        a new key starts ascending. Unknown or non-sortable keys are ignored.
        """
        column = self._columns.get(key)
        if column is None or not column.sortable:
            logger.debug("Ignoring sort on non-sortable column", extra={"sort_key": key})
            return
        if key == self.sort_key:
            self.sort_direction = self.sort_direction.toggled()
        else:
            self.sort_key = key
            self.sort_direction = SortDirection.ASC

    def set_sort_direction(self, direction: SortDirection) -> None:
        self.sort_direction = SortDirection(direction)

    def clear_sort(self) -> None:
        self.sort_key = None
        self.sort_direction = SortDirection.ASC

    def set_source(self, records: Iterable[Any]) -> None:
        """Replace the source rows, e.g. after the store was re-listed."""
        self._records = list(records)

    def discard(self, record_id: Any) -> bool:
        """
        Drop a stale row (its target reported NotFound) from this model's own
        copy of the source. The caller's collection is left untouched.
        """
        before = len(self._records)
        self._records = [r for r in self._records if field_value(r, "id") != record_id]
        return len(self._records) != before

    # Projection

    def visible_rows(self) -> List[Any]:
        """Rows matching the search query, in sort order. Same state, same output."""
        rows = [record for record in self._records if self._matches(record)]
        if self.sort_key is None:
            return rows
        column = self._columns[self.sort_key]
        return sorted(
            rows,
            key=lambda record: _sort_key(column, record),
            reverse=self.sort_direction is SortDirection.DESC,
        )

    def _matches(self, record: Any) -> bool:
        needle = self.search_query.lower()
        if not needle:
            return True
        for key in self.search_keys:
            text = _search_text(self._lookup(record, key))
            if text is not None and needle in text.lower():
                return True
        return False

    def _lookup(self, record: Any, key: str) -> Any:
        column = self._columns.get(key)
        if column is not None:
            return column.value(record)
        return field_value(record, key)

    # Intents

    def request_create(self) -> TableIntent:
        return self._emit(TableIntent(IntentAction.CREATE))

    def request_edit(self, record: Any) -> TableIntent:
        return self._emit(TableIntent(IntentAction.EDIT, record))

    def request_delete(self, record: Any) -> TableIntent:
        return self._emit(TableIntent(IntentAction.DELETE, record))

    def _emit(self, intent: TableIntent) -> TableIntent:
        if self._on_intent is not None:
            self._on_intent(intent)
        return intent


def _search_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _sort_key(column: Column, record: Any) -> Tuple[bool, Any]:
    value = _normalize(column.kind, column.value(record))
    if value is None:
        return (True, 0)
    return (False, value)


def _normalize(kind: ColumnKind, value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, enum.Enum):
        value = value.value
    if kind is ColumnKind.NUMBER:
        if isinstance(value, bool):
            return int(value)
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
    if kind is ColumnKind.DATETIME:
        return _timestamp(value)
    return str(value)


def _timestamp(value: Any) -> Optional[float]:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp()
    return None
