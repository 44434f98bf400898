"""User-facing notifications raised by the client state machines."""

from dataclasses import dataclass
from typing import List

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Toast:
    """A transient notification (variant "destructive" marks errors)."""

    title: str
    description: str = ""
    variant: str = DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == DESTRUCTIVE


def error_toast(title: str, description: str = "") -> Toast:
    return Toast(title, description, DESTRUCTIVE)


def latest(toasts: List[Toast]) -> Toast:
    """Most recent toast, or None when nothing has been raised."""
    return toasts[-1] if toasts else None
