"""
Console services — one function per operation the console exposes.

Every function takes the request's ConsoleContext first. Reads go through
the query cache; writes go out once, invalidate their cache root on success
and report through the notifier. Services raise, views format.
"""

import logging

from .context import ConsoleContext
from .exceptions import BlockError, UpstreamError, ValidationError
from .executor import (
    FINANCIAL_EVENTS_ROOT,
    ORDERS_ROOT,
    PRESCRIPTIONS_ROOT,
    SAMPLES_ROOT,
    TICKETS_ROOT,
    TransitionExecutor,
)
from .filters import filter_entities
from .intake.factory import get_intake
from .review import PrescriptionReview
from .statuses import get_workflow

logger = logging.getLogger(__name__)

MODULES_ROOT = "/api/modules"
MODULE_PLANS_ROOT = "/api/module-plans"
SUPPLIERS_ROOT = "/api/suppliers"
PARTNER_BENEFITS_ROOT = "/api/social/partner-benefits"


# ── shared helpers ─────────────────────────────────────────────────────────

def _intake(ctx: ConsoleContext, form: str, raw, files=None):
    """Run a form intake; a rejected form is reported before anything is sent."""
    try:
        return get_intake(form, raw, files=files).process()
    except ValidationError as exc:
        ctx.notifier.error("Dados incompletos", exc.message)
        raise


def _mutate(ctx: ConsoleContext, method: str, path: str, *, roots, success, error,
            description="", **kwargs):
    """
    One upstream write that is not a status transition.

    success / error are toast titles. The error toast carries the server
    message; the exception still propagates to the view.
    """
    try:
        result = ctx.write(method, path, **kwargs)
    except UpstreamError as exc:
        ctx.notifier.error(error, exc.message)
        raise
    ctx.cache.invalidate(*roots)
    ctx.notifier.success(success, description)
    return result


def _find(rows, entity_id, *, code: str, label: str) -> dict:
    for row in rows or []:
        if str(row.get("id")) == str(entity_id):
            return row
    raise BlockError(
        message=f"{label} não encontrado(a).",
        code=code,
        detail={"id": entity_id},
        http_status=404,
    )


def _read_detail(ctx: ConsoleContext, path: str, root: str, *, code: str, label: str):
    try:
        return ctx.read(path, root=root)
    except UpstreamError as exc:
        if exc.code == "UPSTREAM_NOT_FOUND":
            raise BlockError(
                message=f"{label} não encontrado(a).",
                code=code,
                detail={"path": path},
                http_status=404,
            ) from exc
        raise


# ── tickets ────────────────────────────────────────────────────────────────

def list_tickets(ctx: ConsoleContext, *, search=None, status=None, priority=None,
                 category=None) -> list[dict]:
    rows = ctx.read(TICKETS_ROOT, root=TICKETS_ROOT) or []
    return filter_entities(
        "ticket", rows, term=search, status=status, priority=priority, category=category,
    )


def get_ticket(ctx: ConsoleContext, ticket_id) -> dict:
    """{ticket, comments, attachments}"""
    detail = _read_detail(
        ctx, f"{TICKETS_ROOT}/{ticket_id}", TICKETS_ROOT,
        code="TICKET_NOT_FOUND", label="Ticket",
    ) or {}
    return {
        "ticket": detail.get("ticket") or {},
        "comments": detail.get("comments") or [],
        "attachments": detail.get("attachments") or [],
    }


def create_ticket(ctx: ConsoleContext, raw) -> dict:
    draft = _intake(ctx, "ticket", raw)
    result = _mutate(
        ctx, "POST", TICKETS_ROOT,
        roots=(TICKETS_ROOT,),
        success="Ticket criado com sucesso",
        error="Erro ao criar ticket",
        json=draft.to_payload(),
    ) or {}
    return result.get("ticket", result)


def add_ticket_comment(ctx: ConsoleContext, ticket_id, raw) -> dict:
    """
    Raises:
        BlockError 409 TICKET_CLOSED: resolvido / fechado / cancelado take no comments
    """
    status = get_ticket(ctx, ticket_id)["ticket"].get("status")
    if get_workflow("ticket").is_terminal(status):
        raise BlockError(
            message="Não é possível comentar em um ticket encerrado.",
            code="TICKET_CLOSED",
            detail={"ticket_id": ticket_id, "status": status},
        )

    draft = _intake(ctx, "ticket_comment", raw)
    # the server may move the ticket's status when a comment lands
    return _mutate(
        ctx, "POST", f"{TICKETS_ROOT}/{ticket_id}/comments",
        roots=(TICKETS_ROOT,),
        success="Comentário adicionado com sucesso",
        error="Erro ao adicionar comentário",
        json=draft.to_payload(),
    ) or {}


def change_ticket_status(ctx: ConsoleContext, ticket_id, target: str):
    current = get_ticket(ctx, ticket_id)["ticket"].get("status")
    return TransitionExecutor(ctx).execute("ticket", ticket_id, target, current=current)


def change_ticket_priority(ctx: ConsoleContext, ticket_id, priority: str):
    current = get_ticket(ctx, ticket_id)["ticket"].get("priority")
    return TransitionExecutor(ctx).execute("ticket_priority", ticket_id, priority, current=current)


def assign_ticket(ctx: ConsoleContext, ticket_id, assign_to_id):
    """assign_to_id None unassigns."""
    if assign_to_id in ("", None):
        assign_to_id = None
    else:
        try:
            assign_to_id = int(assign_to_id)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                message="assignToId must be a user id or null.",
                code="INVALID_ASSIGNEE",
                detail={"assignToId": assign_to_id},
            ) from exc

    return _mutate(
        ctx, "PATCH", f"{TICKETS_ROOT}/{ticket_id}/assign",
        roots=(TICKETS_ROOT,),
        success="Ticket atribuído com sucesso",
        error="Erro ao atribuir ticket",
        json={"assignToId": assign_to_id},
    )


# ── prescriptions ──────────────────────────────────────────────────────────

def list_prescriptions(ctx: ConsoleContext, *, organization_id=None, status=None,
                       search=None) -> list[dict]:
    rows = ctx.read(
        PRESCRIPTIONS_ROOT, params={"organizationId": organization_id}, root=PRESCRIPTIONS_ROOT,
    ) or []
    return filter_entities("prescription", rows, term=search, status=status)


def review_prescription(ctx: ConsoleContext, prescription_id, action: str, notes: str = "",
                        *, organization_id=None) -> dict:
    return PrescriptionReview(ctx, organization_id=organization_id).submit(
        prescription_id, action, notes,
    )


# ── organization orders ────────────────────────────────────────────────────

def list_orders(ctx: ConsoleContext, *, search=None, status=None) -> list[dict]:
    rows = ctx.read(ORDERS_ROOT, root=ORDERS_ROOT) or []
    return filter_entities("order", rows, term=search, status=status)


def get_order(ctx: ConsoleContext, order_id) -> dict:
    return _read_detail(
        ctx, f"{ORDERS_ROOT}/{order_id}", ORDERS_ROOT,
        code="ORDER_NOT_FOUND", label="Pedido",
    ) or {}


def change_order_status(ctx: ConsoleContext, order_id, target: str, *, tracking_code=None,
                        note=None):
    current = get_order(ctx, order_id).get("status")
    return TransitionExecutor(ctx).execute(
        "order", order_id, target,
        current=current,
        notes=note,
        extra={"trackingCode": tracking_code},
    )


# ── laboratory samples ─────────────────────────────────────────────────────

def list_samples(ctx: ConsoleContext, *, search=None, status=None, priority=None) -> list[dict]:
    rows = ctx.read(SAMPLES_ROOT, root=SAMPLES_ROOT) or []
    return filter_entities("sample", rows, term=search, status=status, priority=priority)


def change_sample_status(ctx: ConsoleContext, sample_id, target: str, *, notes=None):
    rows = ctx.read(SAMPLES_ROOT, root=SAMPLES_ROOT) or []
    sample = _find(rows, sample_id, code="SAMPLE_NOT_FOUND", label="Amostra")
    return TransitionExecutor(ctx).execute(
        "sample", sample_id, target, current=sample.get("status"), notes=notes,
    )


# ── modules ────────────────────────────────────────────────────────────────

def list_modules(ctx: ConsoleContext, *, search=None) -> list[dict]:
    rows = ctx.read(MODULES_ROOT, root=MODULES_ROOT) or []
    return [
        {**row, "activation": "active" if row.get("isActive") else "inactive"}
        for row in filter_entities("module", rows, term=search)
    ]


def list_module_plans(ctx: ConsoleContext) -> list[dict]:
    return ctx.read(MODULE_PLANS_ROOT, root=MODULE_PLANS_ROOT) or []


def set_module_active(ctx: ConsoleContext, module_id, is_active: bool):
    if not isinstance(is_active, bool):
        raise ValidationError(
            message="isActive must be true or false.",
            code="INVALID_ACTIVATION",
            detail={"isActive": is_active},
        )
    return _mutate(
        ctx, "PUT", f"{MODULES_ROOT}/{module_id}/status",
        roots=(MODULES_ROOT,),
        success="Módulo ativado" if is_active else "Módulo desativado",
        error="Erro ao atualizar módulo",
        json={"isActive": is_active},
    )


# ── financial events ───────────────────────────────────────────────────────

def list_financial_events(ctx: ConsoleContext, *, search=None, status=None,
                          event_type=None) -> list[dict]:
    rows = ctx.read(FINANCIAL_EVENTS_ROOT, root=FINANCIAL_EVENTS_ROOT) or []
    return filter_entities("financial_event", rows, term=search, status=status, type=event_type)


def create_financial_event(ctx: ConsoleContext, raw) -> dict:
    draft = _intake(ctx, "financial_event", raw)
    return _mutate(
        ctx, "POST", FINANCIAL_EVENTS_ROOT,
        roots=(FINANCIAL_EVENTS_ROOT,),
        success="Evento adicionado",
        error="Erro ao adicionar evento",
        description="O evento financeiro foi adicionado com sucesso",
        json=draft.to_payload(),
    ) or {}


def change_financial_event_status(ctx: ConsoleContext, event_id, target: str):
    rows = ctx.read(FINANCIAL_EVENTS_ROOT, root=FINANCIAL_EVENTS_ROOT) or []
    event = _find(rows, event_id, code="FINANCIAL_EVENT_NOT_FOUND", label="Evento")
    return TransitionExecutor(ctx).execute(
        "financial_event", event_id, target, current=event.get("status"),
    )


# ── suppliers / partner benefits ───────────────────────────────────────────

def create_supplier(ctx: ConsoleContext, raw, files=None) -> dict:
    draft = _intake(ctx, "supplier", raw, files=files)
    return _mutate(
        ctx, "POST", SUPPLIERS_ROOT,
        roots=(SUPPLIERS_ROOT,),
        success="Fornecedor cadastrado",
        error="Erro ao cadastrar fornecedor",
        description=draft.name,
        data=draft.to_form_data(),
        files=draft.to_files(),
    ) or {}


def create_partner_benefit(ctx: ConsoleContext, raw) -> dict:
    draft = _intake(ctx, "partner_benefit", raw)
    return _mutate(
        ctx, "POST", PARTNER_BENEFITS_ROOT,
        roots=(PARTNER_BENEFITS_ROOT,),
        success="Benefício cadastrado",
        error="Erro ao cadastrar benefício",
        description=draft.title,
        json=draft.to_payload(),
    ) or {}
