"""Dynamic SQL query building for the advocates listing."""

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from advocates.lib.enums import SortOption

ADVOCATE_COLUMNS = (
    "id, first_name, last_name, city, degree, payload AS specialties, "
    "years_of_experience, phone_number"
)

SEARCH_COLUMNS = ("first_name", "last_name", "city")
SPECIALTIES_COLUMN = "payload"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class FilterBuilder:
    """Build parameterized SQL WHERE clauses dynamically.

    Usage:
        builder = FilterBuilder()
        builder.add('city', params.city, partial_match=True)
        builder.add('degree', params.degree)
        builder.add_min('years_of_experience', params.min_exp)

        query = f"SELECT * FROM advocates {builder.where_sql}"
        results = await conn.fetch(query, *builder.params)
    """

    def __init__(self, start_idx: int = 1):
        """Initialize FilterBuilder.

        Args:
            start_idx: Starting parameter index (default $1).
        """
        self.filters: List[str] = []
        self.params: List[Any] = []
        self._param_idx = start_idx

    def _placeholder(self, value: Any) -> str:
        placeholder = f"${self._param_idx}"
        self.params.append(value)
        self._param_idx += 1
        return placeholder

    def add(
        self,
        column: str,
        value: Optional[Any],
        partial_match: bool = False,
    ) -> 'FilterBuilder':
        """Add a filter condition.

        Args:
            column: SQL column name.
            value: Filter value (None values are skipped).
            partial_match: Case-insensitive substring match.

        Returns:
            Self for method chaining.
        """
        if value is None:
            return self

        value = getattr(value, "value", value)

        if isinstance(value, str) and not value.strip():
            return self

        if partial_match:
            pattern = f"%{escape_like(str(value).strip())}%"
            self.filters.append(f"LOWER({column}) LIKE LOWER({self._placeholder(pattern)})")
        else:
            cleaned = value.strip() if isinstance(value, str) else value
            self.filters.append(f"{column} = {self._placeholder(cleaned)}")

        return self

    def add_min(self, column: str, value: Optional[int]) -> 'FilterBuilder':
        """Add an inclusive lower bound (``column >= value``)."""
        if value is None:
            return self
        self.filters.append(f"{column} >= {self._placeholder(value)}")
        return self

    def add_contains_all(self, column: str, values: Optional[Iterable[str]]) -> 'FilterBuilder':
        """Require a JSONB array column to hold every value (order-independent)."""
        wanted = [v for v in (values or []) if v]
        if not wanted:
            return self
        self.filters.append(f"{column} @> {self._placeholder(json.dumps(wanted))}::jsonb")
        return self

    def add_search(
        self,
        text: Optional[str],
        columns: Iterable[str] = SEARCH_COLUMNS,
        array_column: Optional[str] = SPECIALTIES_COLUMN,
    ) -> 'FilterBuilder':
        """Add a free-text search.

        The text is split on whitespace. Each token must match at least one
        column (case-insensitive substring), or one element of the JSONB
        ``array_column``; every token must match.
        """
        tokens = (text or "").split()
        for token in tokens:
            placeholder = self._placeholder(f"%{escape_like(token)}%")
            alternatives = [f"{column} ILIKE {placeholder}" for column in columns]
            if array_column:
                alternatives.append(
                    f"EXISTS (SELECT 1 FROM jsonb_array_elements_text({array_column}) AS tag(value) "
                    f"WHERE tag.value ILIKE {placeholder})"
                )
            self.filters.append(f"({' OR '.join(alternatives)})")
        return self

    def add_raw(self, clause: str, *values: Any) -> 'FilterBuilder':
        """Add a pre-built clause.

        ``{0}``, ``{1}``... in ``clause`` are replaced with the placeholders
        bound to ``values``; each may appear more than once.
        """
        placeholders = [self._placeholder(v) for v in values]
        self.filters.append(clause.format(*placeholders))
        return self

    @property
    def where_sql(self) -> str:
        """The full ``WHERE ...`` clause, or an empty string if there are no filters."""
        return "WHERE " + " AND ".join(self.filters) if self.filters else ""

    @property
    def next_param_idx(self) -> int:
        """Get the next available parameter index."""
        return self._param_idx


@dataclass(frozen=True)
class SortSpec:
    """How one sort mode orders rows and continues from a cursor."""
    expression: str
    direction: str
    cursor_field: str
    value_template: str = "{}"

    @property
    def order_by(self) -> str:
        return f"{self.expression} {self.direction} NULLS LAST, id ASC"

    @property
    def comparison(self) -> str:
        return "<" if self.direction == "DESC" else ">"


SORT_SPECS: Dict[SortOption, SortSpec] = {
    SortOption.YEARS_DESC: SortSpec("years_of_experience", "DESC", "years"),
    SortOption.YEARS_ASC: SortSpec("years_of_experience", "ASC", "years"),
    SortOption.NAME_ASC: SortSpec("LOWER(last_name)", "ASC", "lastName", "LOWER({})"),
}


def add_keyset_condition(
    builder: FilterBuilder,
    sort: SortOption,
    keys: Mapping[str, Any],
) -> FilterBuilder:
    """Restrict to rows strictly after the cursor row in ``sort`` order.

    Ties on the primary key are broken by ``id > cursor id`` because the
    secondary order is always ascending id. Nulls sort last, so a non-null
    cursor value also admits every null row, and a null cursor value admits
    only later null rows.
    """
    spec = SORT_SPECS[SortOption(sort)]
    value = keys.get(spec.cursor_field)
    expr = spec.expression

    if value is None:
        return builder.add_raw(f"({expr} IS NULL AND id > {{0}})", keys["id"])

    bound = spec.value_template.format("{0}")
    return builder.add_raw(
        f"({expr} {spec.comparison} {bound} "
        f"OR ({expr} = {bound} AND id > {{1}}) "
        f"OR {expr} IS NULL)",
        value,
        keys["id"],
    )


@dataclass
class AdvocateQuery:
    """A ready-to-run listing query."""
    sql: str
    params: List[Any]
    fetch_limit: int


def build_advocate_query(
    params: Any,
    cursor_keys: Optional[Mapping[str, Any]] = None,
) -> AdvocateQuery:
    """Compose filters, cursor continuation, ordering and limit.

    Args:
        params: Validated listing parameters (``AdvocateQueryParams``).
        cursor_keys: Keys of a validated cursor, if continuing a listing.

    Returns:
        AdvocateQuery fetching ``params.limit + 1`` rows so the caller can
        tell whether another page exists.
    """
    sort = SortOption(params.sort)
    spec = SORT_SPECS[sort]

    builder = FilterBuilder()
    builder.add_search(params.q)
    builder.add('city', params.city, partial_match=True)
    builder.add('degree', params.degree)
    builder.add_min('years_of_experience', params.min_exp)
    builder.add_contains_all(SPECIALTIES_COLUMN, params.specialties)

    if cursor_keys is not None:
        add_keyset_condition(builder, sort, cursor_keys)

    fetch_limit = params.limit + 1
    sql = (
        f"SELECT {ADVOCATE_COLUMNS} FROM advocates "
        f"{builder.where_sql} "
        f"ORDER BY {spec.order_by} "
        f"LIMIT ${builder.next_param_idx}"
    )
    return AdvocateQuery(sql=" ".join(sql.split()), params=builder.params + [fetch_limit], fetch_limit=fetch_limit)
