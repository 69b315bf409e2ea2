"""
Form drafts — the typed state every console form is reduced to.

Intakes build one of these from the raw request; services only ever send
draft.to_payload() upstream, never the raw request body.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from django.utils import timezone


def iso_timestamp(day: date) -> str:
    """Start of day in the console's time zone, ISO 8601."""
    return timezone.make_aware(datetime.combine(day, time.min)).isoformat()


@dataclass
class FinancialEventDraft:
    title: str
    date: date
    amount: Decimal
    type: str = "despesa"            # "receita" | "despesa"
    category: str = ""
    status: str = "pendente"
    description: str = ""

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "date": self.date.isoformat(),
            "amount": str(self.amount),
            "type": self.type,
            "category": self.category,
            "status": self.status,
            "description": self.description,
        }


@dataclass
class TicketDraft:
    title: str
    description: str
    category: str
    priority: str = "media"
    organization_id: int | None = None

    def to_payload(self) -> dict:
        payload = {
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "priority": self.priority,
        }
        if self.organization_id is not None:
            payload["organizationId"] = self.organization_id
        return payload


@dataclass
class CommentDraft:
    content: str
    is_internal: bool = False

    def to_payload(self) -> dict:
        return {"content": self.content, "isInternal": self.is_internal}


@dataclass
class SupplierDraft:
    """
    Sent as multipart form data. logo is the uploaded file object, if any;
    it travels in the files part, never in fields.
    """

    name: str
    cnpj: str                        # digits only
    email: str
    fields: dict[str, str] = field(default_factory=dict)   # optional text fields
    logo: Any = field(default=None, repr=False)

    def to_form_data(self) -> dict:
        data = {"name": self.name, "cnpj": self.cnpj, "email": self.email}
        data.update({k: v for k, v in self.fields.items() if v})
        return data

    def to_files(self) -> dict | None:
        if self.logo is None:
            return None
        name = getattr(self.logo, "name", "logo")
        content_type = getattr(self.logo, "content_type", None) or "application/octet-stream"
        return {"logo": (name, self.logo, content_type)}


@dataclass
class PartnerBenefitDraft:
    partner_id: int
    title: str
    description: str
    discount_type: str
    discount_value: Decimal
    redemption_instructions: str
    max_uses_per_member: int
    valid_from: date
    valid_until: date | None = None
    minimum_purchase: Decimal | None = None
    coupon_code: str = ""
    max_uses_total: int | None = None
    terms_and_conditions: str = ""
    membership_type_required: str = ""
    is_active: bool = True

    def to_payload(self) -> dict:
        payload = {
            "partnerId": self.partner_id,
            "title": self.title,
            "description": self.description,
            "discountType": self.discount_type,
            "discountValue": float(self.discount_value),
            "redemptionInstructions": self.redemption_instructions,
            "maxUsesPerMember": self.max_uses_per_member,
            "validFrom": iso_timestamp(self.valid_from),
            "validUntil": iso_timestamp(self.valid_until) if self.valid_until else None,
            "isActive": self.is_active,
        }
        if self.minimum_purchase is not None:
            payload["minimumPurchase"] = float(self.minimum_purchase)
        if self.max_uses_total is not None:
            payload["maxUsesTotal"] = self.max_uses_total
        for key, value in (
            ("couponCode", self.coupon_code),
            ("termsAndConditions", self.terms_and_conditions),
            ("membershipTypeRequired", self.membership_type_required),
        ):
            if value:
                payload[key] = value
        return payload
