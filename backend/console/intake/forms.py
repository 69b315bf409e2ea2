"""
Concrete form intakes.

To add a form: add a class here, then register it in factory.py.

Registered forms:
  financial_event  — FinancialEventIntake   (financial calendar, "novo evento")
  ticket           — TicketIntake           (support ticket creation)
  ticket_comment   — CommentIntake          (ticket conversation)
  supplier         — SupplierIntake         (multipart, optional logo)
  partner_benefit  — PartnerBenefitIntake   (discount club benefit)
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.utils import timezone
from django.utils.dateparse import parse_date

from ..statuses import get_status_table
from .base import BaseFormIntake
from .types import (
    CommentDraft,
    FinancialEventDraft,
    PartnerBenefitDraft,
    SupplierDraft,
    TicketDraft,
)

NON_DIGIT_RE = re.compile(r"\D")

FINANCIAL_EVENT_TYPES = ("receita", "despesa")
TICKET_CATEGORIES = (
    "bug", "melhoria", "duvida", "financeiro", "acesso", "seguranca", "performance", "outros",
)
DISCOUNT_TYPES = ("percentage", "fixed_value", "free_item")


def _to_bool(value, default=False) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "on", "yes", "sim")


class _FieldCoercion:
    """Coercions shared by the intakes; failures become field errors."""

    def decimal(self, key: str) -> Decimal | None:
        value = self._parsed.get(key)
        if value is None or value == "":
            return None
        if isinstance(value, str):
            value = value.strip().replace(",", ".")
        try:
            number = Decimal(str(value))
        except (InvalidOperation, ValueError):
            number = None
        if number is None or not number.is_finite():
            self.add_error(key, "Valor inválido.")
            return None
        return number

    def integer(self, key: str) -> int | None:
        value = self._parsed.get(key)
        if value is None or value == "":
            return None
        try:
            return int(str(value).strip())
        except ValueError:
            self.add_error(key, "Número inválido.")
            return None

    def day(self, key: str) -> date | None:
        value = self._parsed.get(key)
        if value is None or value == "":
            return None
        if isinstance(value, date):
            return value
        # "2025-03-10" or "2025-03-10T12:00:00Z"
        try:
            parsed = parse_date(str(value).strip()[:10])
        except ValueError:
            parsed = None
        if parsed is None:
            self.add_error(key, "Data inválida.")
        return parsed


# ── FinancialEventIntake ───────────────────────────────────────────────────
#
# {"title": "Aluguel", "date": "2025-03-10", "amount": 12500,
#  "type": "despesa", "category": "Aluguel", "status": "pendente"}

class FinancialEventIntake(_FieldCoercion, BaseFormIntake):
    form = "financial_event"

    def transform(self) -> FinancialEventDraft:
        title = self.required_text("title")

        event_date = self.day("date")
        if event_date is None and not any(e["field"] == "date" for e in self.errors):
            self.add_error("date", "Campo obrigatório.")

        amount = self.decimal("amount")
        # a zero amount is an unfilled field
        if amount is None or amount == 0:
            if not any(e["field"] == "amount" for e in self.errors):
                self.add_error("amount", "Campo obrigatório.")

        return FinancialEventDraft(
            title=title,
            date=event_date,
            amount=amount,
            type=self.text("type") or "despesa",
            category=self.text("category"),
            status=self.text("status") or "pendente",
            description=self.text("description"),
        )

    def validate(self, draft: FinancialEventDraft) -> None:
        if draft.type not in FINANCIAL_EVENT_TYPES:
            self.add_error("type", f"Tipo deve ser um de {', '.join(FINANCIAL_EVENT_TYPES)}.")
        if draft.status not in get_status_table("financial_event"):
            self.add_error("status", "Status inválido.")
        super().validate(draft)


# ── TicketIntake ───────────────────────────────────────────────────────────

class TicketIntake(_FieldCoercion, BaseFormIntake):
    form = "ticket"

    def transform(self) -> TicketDraft:
        return TicketDraft(
            title=self.required_text("title"),
            description=self.required_text("description"),
            category=self.required_text("category"),
            priority=self.text("priority") or "media",
            organization_id=self.integer("organizationId"),
        )

    def validate(self, draft: TicketDraft) -> None:
        if draft.title and not 5 <= len(draft.title) <= 100:
            self.add_error("title", "O título deve ter entre 5 e 100 caracteres.")
        if draft.description and len(draft.description) < 10:
            self.add_error("description", "A descrição deve ter pelo menos 10 caracteres.")
        if draft.category and draft.category not in TICKET_CATEGORIES:
            self.add_error("category", "Selecione uma categoria válida.")
        if draft.priority not in get_status_table("ticket_priority"):
            self.add_error("priority", "Selecione uma prioridade válida.")
        super().validate(draft)


# ── CommentIntake ──────────────────────────────────────────────────────────

class CommentIntake(BaseFormIntake):
    form = "ticket_comment"

    def transform(self) -> CommentDraft:
        return CommentDraft(
            content=self.required_text("content", "O comentário não pode estar vazio."),
            is_internal=_to_bool(self._parsed.get("isInternal")),
        )


# ── SupplierIntake ─────────────────────────────────────────────────────────
#
# multipart/form-data: name, cnpj ("12.345.678/0001-90"), email, ... + logo file

SUPPLIER_OPTIONAL_FIELDS = (
    "tradingName", "phone", "address", "city", "state", "zipCode",
    "contactName", "contactEmail", "contactPhone", "website", "description",
)


class SupplierIntake(BaseFormIntake):
    form = "supplier"

    def transform(self) -> SupplierDraft:
        return SupplierDraft(
            name=self.required_text("name"),
            cnpj=NON_DIGIT_RE.sub("", self.required_text("cnpj")),
            email=self.required_text("email"),
            fields={key: self.text(key) for key in SUPPLIER_OPTIONAL_FIELDS},
            logo=self._files.get("logo"),
        )

    def validate(self, draft: SupplierDraft) -> None:
        if draft.cnpj and len(draft.cnpj) != 14:
            self.add_error("cnpj", "CNPJ deve ter 14 números.")
        for key, value in (("email", draft.email), ("contactEmail", draft.fields.get("contactEmail"))):
            if not value:
                continue
            try:
                validate_email(value)
            except DjangoValidationError:
                self.add_error(key, "Email inválido.")
        super().validate(draft)


# ── PartnerBenefitIntake ───────────────────────────────────────────────────

class PartnerBenefitIntake(_FieldCoercion, BaseFormIntake):
    form = "partner_benefit"

    def transform(self) -> PartnerBenefitDraft:
        partner_id = self.integer("partnerId")
        if partner_id is None and not any(e["field"] == "partnerId" for e in self.errors):
            self.add_error("partnerId", "Parceiro obrigatório.")

        discount_value = self.decimal("discountValue")
        max_per_member = self.integer("maxUsesPerMember")

        return PartnerBenefitDraft(
            partner_id=partner_id,
            title=self.text("title"),
            description=self.text("description"),
            discount_type=self.text("discountType") or "percentage",
            discount_value=discount_value if discount_value is not None else Decimal("0"),
            redemption_instructions=self.text("redemptionInstructions"),
            max_uses_per_member=max_per_member if max_per_member is not None else 1,
            valid_from=self.day("validFrom") or timezone.localdate(),
            valid_until=self.day("validUntil"),
            minimum_purchase=self.decimal("minimumPurchase"),
            coupon_code=self.text("couponCode"),
            max_uses_total=self.integer("maxUsesTotal"),
            terms_and_conditions=self.text("termsAndConditions"),
            membership_type_required=self.text("membershipTypeRequired"),
            is_active=_to_bool(self._parsed.get("isActive"), default=True),
        )

    def validate(self, draft: PartnerBenefitDraft) -> None:
        if len(draft.title) < 3:
            self.add_error("title", "O título deve ter pelo menos 3 caracteres.")
        if len(draft.description) < 10:
            self.add_error("description", "Descrição muito curta.")
        if draft.discount_type not in DISCOUNT_TYPES:
            self.add_error("discountType", "Tipo de desconto inválido.")
        if draft.discount_value < 0:
            self.add_error("discountValue", "Valor inválido.")
        if draft.minimum_purchase is not None and draft.minimum_purchase < 0:
            self.add_error("minimumPurchase", "Valor inválido.")
        if not draft.redemption_instructions:
            self.add_error("redemptionInstructions", "Instruções de resgate obrigatórias.")
        if draft.max_uses_per_member < 1:
            self.add_error("maxUsesPerMember", "Valor inválido.")
        if draft.max_uses_total is not None and draft.max_uses_total < 0:
            self.add_error("maxUsesTotal", "Valor inválido.")
        if draft.valid_until and draft.valid_until < draft.valid_from:
            self.add_error("validUntil", "A data final não pode ser anterior à data inicial.")
        super().validate(draft)
