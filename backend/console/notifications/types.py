"""
Notification — the transient toast the front-end shows after an operation.
"""

from dataclasses import asdict, dataclass


@dataclass
class Notification:
    title: str
    description: str = ""
    variant: str = "default"      # "default" | "destructive"

    def as_dict(self) -> dict:
        return asdict(self)
