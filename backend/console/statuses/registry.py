"""
Status registry: entity type → StatusTable.

The only place a status is turned into a label and a style. Views and
serializers call describe(); nothing re-implements the mapping per page.
"""

from ..exceptions import ValidationError
from .types import StatusBadge, StatusTable


def _build_registry() -> dict[str, StatusTable]:
    from .tables import (
        FINANCIAL_EVENT_STATUS,
        MODULE_ACTIVATION,
        ORDER_STATUS,
        PRESCRIPTION_STATUS,
        SAMPLE_PRIORITY,
        SAMPLE_STATUS,
        TICKET_PRIORITY,
        TICKET_STATUS,
    )

    return {
        "ticket":          TICKET_STATUS,
        "ticket_priority": TICKET_PRIORITY,
        "prescription":    PRESCRIPTION_STATUS,
        "order":           ORDER_STATUS,
        "sample":          SAMPLE_STATUS,
        "sample_priority": SAMPLE_PRIORITY,
        "financial_event": FINANCIAL_EVENT_STATUS,
        "module":          MODULE_ACTIVATION,
    }


def known_entity_types() -> list[str]:
    return list(_build_registry().keys())


def get_status_table(entity_type: str) -> StatusTable:
    """
    Return the table registered for entity_type.

    Raises:
        ValidationError: unknown entity type
    """
    registry = _build_registry()
    table = registry.get(entity_type)

    if table is None:
        raise ValidationError(
            message=f"Unknown entity type: {entity_type!r}.",
            code="UNKNOWN_ENTITY_TYPE",
            detail={"known_entity_types": list(registry.keys())},
        )

    return table


def describe(entity_type: str, value) -> StatusBadge:
    """Badge for value; unknown values come back as the raw string, neutral style."""
    return get_status_table(entity_type).describe(value)


def registry_snapshot() -> dict:
    """Every table as plain dicts, for the front-end to cache once."""
    return {
        entity_type: [badge.as_dict() for badge in table.entries.values()]
        for entity_type, table in _build_registry().items()
    }
