"""Contact links offered for unsold entries."""

from __future__ import annotations

from typing import Callable
from urllib.parse import quote

ContactLinkBuilder = Callable[[int], str]

WHATSAPP_BASE_URL = "https://wa.me/"


def validate_message_template(message_template: str) -> str:
    """Return ``message_template`` if it formats with only ``{number}``.

    Raises
    ------
    ValueError
        If the template references other fields or has unbalanced braces.
    """
    try:
        message_template.format(number=1)
    except (KeyError, IndexError, ValueError, AttributeError) as exc:
        raise ValueError(
            f"Invalid contact message template {message_template!r}: "
            "only the {number} placeholder is supported"
        ) from exc
    return message_template


def whatsapp_link_builder(phone: str, message_template: str) -> ContactLinkBuilder:
    """Return a builder producing ``wa.me`` links for an entry number.

    Parameters
    ----------
    phone : str
        Seller phone number; every non-digit character is dropped.
    message_template : str
        Prefilled message; ``{number}`` is replaced with the entry number.

    Raises
    ------
    ValueError
        If ``phone`` has no digits or ``message_template`` is invalid.
    """

    digits = "".join(ch for ch in phone if ch.isdigit())
    if not digits:
        raise ValueError("phone must contain digits")
    validate_message_template(message_template)

    def build(number: int) -> str:
        message = message_template.format(number=number)
        return f"{WHATSAPP_BASE_URL}{digits}?text={quote(message)}"

    return build


__all__ = [
    "ContactLinkBuilder",
    "WHATSAPP_BASE_URL",
    "validate_message_template",
    "whatsapp_link_builder",
]
