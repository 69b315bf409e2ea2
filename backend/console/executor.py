"""
TransitionExecutor — the one way a status change reaches the upstream API.

execute():
  1. check_transition() against the workflow (nothing is sent on refusal)
  2. one write request to the endpoint that owns the entity
  3. on success: invalidate the entity's cache root, success toast
  4. on failure: error toast with the server message, re-raise

The displayed status is never changed locally; views only ever show what the
next (refetched) read returns. Failed writes are not retried.
"""

import logging
from dataclasses import dataclass

from .context import ConsoleContext
from .exceptions import UpstreamError, ValidationError
from .statuses import check_transition, describe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusEndpoint:
    method: str
    path: str                    # formatted with entity_id
    root: str                    # cache root invalidated after a write
    field: str = "status"        # payload key carrying the target value
    notes_key: str | None = None
    notes_required: bool = False  # send notes even when empty
    extra_keys: tuple[str, ...] = ()
    success_title: str = "Status atualizado com sucesso"
    error_title: str = "Erro ao atualizar status"


TICKETS_ROOT = "/api/tickets"
PRESCRIPTIONS_ROOT = "/api/pharmacist/prescriptions"
ORDERS_ROOT = "/api/organization/orders"
SAMPLES_ROOT = "/api/laboratory/samples"
FINANCIAL_EVENTS_ROOT = "/api/financial/events"


def _build_registry() -> dict[str, StatusEndpoint]:
    return {
        "ticket": StatusEndpoint(
            method="PATCH", path="/api/tickets/{id}/status", root=TICKETS_ROOT,
        ),
        "ticket_priority": StatusEndpoint(
            method="PATCH", path="/api/tickets/{id}/priority", root=TICKETS_ROOT,
            field="priority",
            success_title="Prioridade atualizada com sucesso",
            error_title="Erro ao atualizar prioridade",
        ),
        "prescription": StatusEndpoint(
            method="PATCH", path="/api/pharmacist/prescriptions/{id}", root=PRESCRIPTIONS_ROOT,
            notes_key="notes", notes_required=True,
            success_title="Prescrição revisada com sucesso",
            error_title="Erro ao revisar prescrição",
        ),
        "order": StatusEndpoint(
            method="PATCH", path="/api/organization/orders/{id}/status", root=ORDERS_ROOT,
            notes_key="note", extra_keys=("trackingCode",),
            success_title="Status do pedido atualizado",
        ),
        "sample": StatusEndpoint(
            method="PUT", path="/api/laboratory/samples/{id}/status", root=SAMPLES_ROOT,
            notes_key="notes",
            success_title="Status da amostra atualizado",
        ),
        "financial_event": StatusEndpoint(
            method="PATCH", path="/api/financial/events/{id}/status", root=FINANCIAL_EVENTS_ROOT,
            success_title="Status do pagamento atualizado",
        ),
    }


def get_status_endpoint(entity_type: str) -> StatusEndpoint:
    registry = _build_registry()
    endpoint = registry.get(entity_type)
    if endpoint is None:
        raise ValidationError(
            message=f"Entity type {entity_type!r} has no status endpoint.",
            code="UNKNOWN_ENTITY_TYPE",
            detail={"known_entity_types": list(registry.keys())},
        )
    return endpoint


class TransitionExecutor:

    def __init__(self, ctx: ConsoleContext):
        self.ctx = ctx

    @staticmethod
    def build_payload(endpoint: StatusEndpoint, target: str, notes=None, extra=None) -> dict:
        payload = {endpoint.field: target}
        if endpoint.notes_key:
            if notes is not None or endpoint.notes_required:
                payload[endpoint.notes_key] = notes or ""
        for key in endpoint.extra_keys:
            value = (extra or {}).get(key)
            if value not in (None, ""):
                payload[key] = value
        return payload

    def execute(self, entity_type: str, entity_id, target: str, *, current=None,
                notes=None, extra=None):
        """
        Send one status change upstream.

        Args:
            current: the entity's status as last read; None skips the
                     workflow's reachability check (the vocabulary is still checked)

        Returns the upstream response body (may be None).

        Raises:
            ValidationError: target not in the entity's vocabulary
            BlockError:      transition not exposed from current
            UpstreamError:   the write failed; nothing was invalidated
        """
        endpoint = get_status_endpoint(entity_type)
        check_transition(entity_type, current, target)

        path = endpoint.path.format(id=entity_id)
        payload = self.build_payload(endpoint, target, notes=notes, extra=extra)
        logger.info("[Executor] %s %s → %s", entity_type, entity_id, target)

        try:
            result = self.ctx.write(endpoint.method, path, json=payload)
        except UpstreamError as exc:
            logger.warning("[Executor] %s %s → %s failed: %s", entity_type, entity_id, target, exc.message)
            self.ctx.notifier.error(endpoint.error_title, exc.message)
            raise

        self.ctx.cache.invalidate(endpoint.root)
        label = describe(entity_type, target).label
        self.ctx.notifier.success(endpoint.success_title, label)
        return result
