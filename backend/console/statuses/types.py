"""
Badge structures returned by the status registry.

Every table answers with a StatusBadge, including for values it has never
seen: those get the raw value as label and the neutral style.
"""

from dataclasses import dataclass, field

DEFAULT_COLOR_CLASS = 'bg-gray-100 text-gray-800'
DEFAULT_VARIANT = 'outline'


@dataclass(frozen=True)
class StatusBadge:
    value: str
    label: str
    color_class: str = DEFAULT_COLOR_CLASS
    variant: str = DEFAULT_VARIANT

    def as_dict(self) -> dict:
        return {
            'value': self.value,
            'label': self.label,
            'color_class': self.color_class,
            'variant': self.variant,
        }


@dataclass(frozen=True)
class StatusTable:
    """One lookup table per entity type, keyed by the documented enum value."""

    entity_type: str
    entries: dict[str, StatusBadge] = field(default_factory=dict)

    def values(self) -> tuple[str, ...]:
        return tuple(self.entries)

    def __contains__(self, value) -> bool:
        return isinstance(value, str) and value in self.entries

    def describe(self, value) -> StatusBadge:
        if value in self:
            return self.entries[value]
        raw = '' if value is None else str(value)
        return StatusBadge(value=raw, label=raw)
