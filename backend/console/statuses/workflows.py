"""
Workflow rules: which status changes the console exposes per entity type.

A state with no outgoing transitions is terminal. check_transition() is
consulted before any status mutation is sent upstream.
"""

import logging
from dataclasses import dataclass, field

from ..exceptions import BlockError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workflow:
    entity_type: str
    initial: str
    transitions: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def states(self) -> tuple[str, ...]:
        return tuple(self.transitions)

    def allowed_targets(self, current: str) -> tuple[str, ...]:
        return self.transitions.get(current, ())

    def is_terminal(self, value: str) -> bool:
        return value in self.transitions and not self.transitions[value]


def _free_form(states, terminal=()) -> dict[str, tuple[str, ...]]:
    """Every non-terminal state may move to any other state."""
    return {
        state: () if state in terminal else tuple(s for s in states if s != state)
        for state in states
    }


# Admins pick any status from a select; closed tickets expose nothing.
TICKET_WORKFLOW = Workflow(
    entity_type='ticket',
    initial='novo',
    transitions=_free_form(
        ['novo', 'em_analise', 'em_desenvolvimento', 'aguardando_resposta',
         'resolvido', 'fechado', 'cancelado'],
        terminal=('resolvido', 'fechado', 'cancelado'),
    ),
)

TICKET_PRIORITY_WORKFLOW = Workflow(
    entity_type='ticket_priority',
    initial='media',
    transitions=_free_form(['baixa', 'media', 'alta', 'critica']),
)

PRESCRIPTION_WORKFLOW = Workflow(
    entity_type='prescription',
    initial='pending',
    transitions={
        'pending':  ('approved', 'rejected'),
        'approved': (),
        'rejected': (),
    },
)

ORDER_WORKFLOW = Workflow(
    entity_type='order',
    initial='pending',
    transitions={
        'awaiting_payment':  ('payment_confirmed', 'canceled'),
        'payment_confirmed': ('in_preparation', 'shipped', 'canceled', 'refunded'),
        'pending':           ('processing', 'canceled'),
        'processing':        ('shipped', 'canceled', 'refunded'),
        'in_preparation':    ('shipped', 'canceled', 'refunded'),
        'shipped':           ('delivered', 'canceled', 'refunded'),
        'delivered':         ('refunded',),
        'canceled':          (),
        'refunded':          (),
    },
)

SAMPLE_WORKFLOW = Workflow(
    entity_type='sample',
    initial='registered',
    transitions={
        'registered':       ('collected', 'rejected'),
        'collected':        ('received', 'rejected'),
        'received':         ('in_progress', 'rejected'),
        'in_progress':      ('pending_approval', 'rejected'),
        'pending_approval': ('completed', 'rejected'),
        'completed':        ('archived',),
        'rejected':         ('archived',),
        'archived':         (),
    },
)

# The financial calendar lets any payment status be picked at any time.
FINANCIAL_EVENT_WORKFLOW = Workflow(
    entity_type='financial_event',
    initial='pendente',
    transitions=_free_form(['pendente', 'pago', 'atrasado', 'cancelado']),
)

_WORKFLOWS = {
    wf.entity_type: wf
    for wf in (
        TICKET_WORKFLOW,
        TICKET_PRIORITY_WORKFLOW,
        PRESCRIPTION_WORKFLOW,
        ORDER_WORKFLOW,
        SAMPLE_WORKFLOW,
        FINANCIAL_EVENT_WORKFLOW,
    )
}


def get_workflow(entity_type: str) -> Workflow:
    workflow = _WORKFLOWS.get(entity_type)
    if workflow is None:
        raise ValidationError(
            message=f"Entity type {entity_type!r} has no status workflow.",
            code="UNKNOWN_ENTITY_TYPE",
            detail={"known_entity_types": list(_WORKFLOWS.keys())},
        )
    return workflow


def check_transition(entity_type: str, current, target) -> Workflow:
    """
    Refuse status changes the console does not expose.

    - target not a string or outside the vocabulary → ValidationError (400)
    - current == target                      → BlockError STATUS_UNCHANGED
    - target not reachable from current      → BlockError INVALID_TRANSITION
    A current value the vocabulary does not know (legacy upstream data) is let
    through; the upstream API has the final word.
    """
    workflow = get_workflow(entity_type)

    if not isinstance(target, str) or target not in workflow.transitions:
        raise ValidationError(
            message=f"Status {target!r} is not valid for {entity_type}.",
            code="UNKNOWN_STATUS",
            detail={"entity_type": entity_type, "status": target, "allowed": list(workflow.states)},
        )

    if current is None:
        return workflow

    if not isinstance(current, str) or current not in workflow.transitions:
        logger.warning("[Workflow] %s has unknown current status %r, skipping check", entity_type, current)
        return workflow

    if current == target:
        raise BlockError(
            message=f"O status já é '{target}'.",
            code="STATUS_UNCHANGED",
            detail={"entity_type": entity_type, "status": target},
        )

    allowed = workflow.allowed_targets(current)
    if target not in allowed:
        raise BlockError(
            message=f"Transição de '{current}' para '{target}' não permitida.",
            code="INVALID_TRANSITION",
            detail={
                "entity_type": entity_type,
                "current": current,
                "target": target,
                "allowed": list(allowed),
            },
        )

    return workflow
