"""
In-memory narrowing of an already-fetched list.

A row is kept when the search term is a case-insensitive substring of at
least one designated field AND every selected value matches exactly.
"all" / "todos" / empty selections do not filter.
"""

NO_FILTER = frozenset({"", "all", "todos"})

SEARCH_FIELDS = {
    "ticket":          ("title", "description", "category"),
    "prescription":    ("patientName", "doctorName", "product"),
    "order":           ("orderNumber", "customerName"),
    "sample":          ("code", "description"),
    "financial_event": ("title", "category"),
    "module":          ("name", "description"),
}


def _is_unset(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in NO_FILTER)


def matches_search(row: dict, term, fields) -> bool:
    if _is_unset(term):
        return True
    needle = term.strip().casefold()
    for name in fields:
        value = row.get(name)
        if value is not None and needle in str(value).casefold():
            return True
    return False


def matches_selection(row: dict, selected: dict) -> bool:
    for name, wanted in selected.items():
        if _is_unset(wanted):
            continue
        if str(row.get(name)) != str(wanted):
            return False
    return True


def filter_rows(rows, *, term=None, fields=(), selected=None) -> list[dict]:
    selected = selected or {}
    return [
        row for row in rows or []
        if matches_search(row, term, fields) and matches_selection(row, selected)
    ]


def filter_entities(entity_type: str, rows, *, term=None, **selected) -> list[dict]:
    """filter_rows() with the designated search fields of entity_type."""
    return filter_rows(rows, term=term, fields=SEARCH_FIELDS.get(entity_type, ()), selected=selected)
