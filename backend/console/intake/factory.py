"""
Factory: return the intake for a console form.

To add a form:
  1. add the intake class in forms.py
  2. register it in _build_registry()
  Services and views need no other change.
"""

from ..exceptions import ValidationError
from .base import BaseFormIntake


def _build_registry() -> dict[str, type[BaseFormIntake]]:
    # lazy import, avoids a cycle through statuses
    from .forms import (
        CommentIntake,
        FinancialEventIntake,
        PartnerBenefitIntake,
        SupplierIntake,
        TicketIntake,
    )

    return {
        "financial_event": FinancialEventIntake,
        "ticket":          TicketIntake,
        "ticket_comment":  CommentIntake,
        "supplier":        SupplierIntake,
        "partner_benefit": PartnerBenefitIntake,
    }


def get_intake(form: str, raw, files: dict | None = None) -> BaseFormIntake:
    """
    Args:
        form:  registered form name, e.g. "financial_event"
        raw:   request.data (dict / QueryDict) or a raw JSON body
        files: uploaded files (request.FILES), only used by multipart forms

    Raises:
        ValidationError: unknown form
    """
    registry = _build_registry()
    intake_cls = registry.get(form)

    if intake_cls is None:
        raise ValidationError(
            message=f"Unknown form: {form!r}.",
            code="UNKNOWN_FORM",
            detail={"known_forms": list(registry.keys())},
        )

    return intake_cls(raw=raw, files=files)
