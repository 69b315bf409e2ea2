from .registry import describe, get_status_table, known_entity_types, registry_snapshot
from .types import StatusBadge, StatusTable
from .workflows import Workflow, check_transition, get_workflow

__all__ = [
    "StatusBadge",
    "StatusTable",
    "Workflow",
    "check_transition",
    "describe",
    "get_status_table",
    "get_workflow",
    "known_entity_types",
    "registry_snapshot",
]
