"""
Prescription review: pending → approved | rejected, both terminal.

The reviewer opens a pending prescription, optionally writes notes and
submits approve or reject. Both go through the TransitionExecutor as one
payload {status, notes}. There is no re-review: once a prescription left
pending it cannot be opened again.
"""

import logging

from .context import ConsoleContext
from .exceptions import BlockError, ValidationError
from .executor import PRESCRIPTIONS_ROOT, TransitionExecutor

logger = logging.getLogger(__name__)

REVIEW_ACTIONS = {
    "approve": "approved",
    "reject":  "rejected",
}


class PrescriptionReview:

    def __init__(self, ctx: ConsoleContext, organization_id=None):
        self.ctx = ctx
        self.organization_id = organization_id

    def _list(self) -> list[dict]:
        data = self.ctx.read(
            PRESCRIPTIONS_ROOT,
            params={"organizationId": self.organization_id},
            root=PRESCRIPTIONS_ROOT,
        )
        return data or []

    def open(self, prescription_id) -> dict:
        """
        Return the prescription to review.

        Raises:
            BlockError 404: not in the reviewer's list
            BlockError 409: already reviewed
        """
        prescription = next(
            (p for p in self._list() if str(p.get("id")) == str(prescription_id)),
            None,
        )
        if prescription is None:
            raise BlockError(
                message="Prescrição não encontrada.",
                code="PRESCRIPTION_NOT_FOUND",
                detail={"prescription_id": prescription_id},
                http_status=404,
            )

        status = prescription.get("status")
        if status != "pending":
            raise BlockError(
                message="Esta prescrição já foi revisada.",
                code="PRESCRIPTION_ALREADY_REVIEWED",
                detail={"prescription_id": prescription_id, "status": status},
            )
        return prescription

    def submit(self, prescription_id, action: str, notes: str = "") -> dict:
        target = REVIEW_ACTIONS.get(action) if isinstance(action, str) else None
        if target is None:
            raise ValidationError(
                message=f"Unknown review action: {action!r}.",
                code="INVALID_REVIEW_ACTION",
                detail={"allowed": list(REVIEW_ACTIONS)},
            )

        if notes is not None and not isinstance(notes, str):
            raise ValidationError(
                message="notes must be text.",
                code="INVALID_REVIEW_NOTES",
                detail={"notes": notes},
            )

        prescription = self.open(prescription_id)
        notes = (notes or "").strip()
        logger.info("[Review] prescription %s → %s", prescription_id, target)

        TransitionExecutor(self.ctx).execute(
            "prescription",
            prescription_id,
            target,
            current=prescription.get("status"),
            notes=notes,
        )
        return {"id": prescription.get("id"), "status": target, "notes": notes}
