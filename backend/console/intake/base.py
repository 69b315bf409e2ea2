"""
BaseFormIntake — abstract base of every console form.

Each form only needs:
1. subclass BaseFormIntake
2. implement transform() and validate()
3. register one line in factory._build_registry()

Views and services never touch the raw request body.
"""

import json
from abc import ABC, abstractmethod
from typing import Any

from ..exceptions import ValidationError


class BaseFormIntake(ABC):
    """
    Three-step pipeline: parse → transform → validate

    transform() coerces what it can and records field errors instead of
    raising; validate() adds business rules and raises once with every error.
    No upstream request is ever made for a form that fails here.
    """

    form: str = ""

    def __init__(self, raw: Any, files: dict | None = None):
        self._raw = raw
        self._files = files or {}
        self._parsed: dict = {}
        self.errors: list[dict] = []

    # ── field helpers ──────────────────────────────────────────────────────

    def add_error(self, field: str, message: str) -> None:
        self.errors.append({"field": field, "message": message})

    def text(self, key: str, default: str = "") -> str:
        value = self._parsed.get(key)
        if value is None:
            return default
        return str(value).strip()

    def required_text(self, key: str, message: str = "Campo obrigatório.") -> str:
        value = self.text(key)
        if not value:
            self.add_error(key, message)
        return value

    # ── steps ──────────────────────────────────────────────────────────────

    def parse(self) -> dict:
        """dict / QueryDict / JSON bytes → plain dict."""
        raw = self._raw
        if isinstance(raw, (bytes, str)):
            try:
                raw = json.loads(raw or "{}")
            except ValueError as exc:
                raise ValidationError(
                    message="Request body is not valid JSON.",
                    code="INVALID_JSON",
                ) from exc
        if hasattr(raw, "dict"):
            # QueryDict from a multipart/form request
            raw = raw.dict()
        if not isinstance(raw, dict):
            raise ValidationError(
                message="Request body must be an object.",
                code="INVALID_BODY",
            )
        self._parsed = raw
        return raw

    @abstractmethod
    def transform(self) -> Any:
        """self._parsed → draft dataclass."""

    def validate(self, draft: Any) -> None:
        """Subclasses add rules with add_error() and call super() last."""
        if self.errors:
            raise ValidationError(
                message="Preencha todos os campos obrigatórios.",
                code="VALIDATION_ERROR",
                detail={"form": self.form, "errors": list(self.errors)},
            )

    def process(self) -> Any:
        """parse → transform → validate, returns the validated draft."""
        self.parse()
        draft = self.transform()
        self.validate(draft)
        return draft
