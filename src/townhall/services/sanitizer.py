"""Sanitization of user-supplied text before it is stored."""

from __future__ import annotations

import nh3

from townhall.core.exceptions import ValidationFailure


def clean_text(raw: str) -> str:
    """Strip unsafe markup from ``raw``.

    Script and style elements are dropped together with their content; other
    disallowed tags are removed while their text is kept.
    """
    return nh3.clean(raw)


def require_text(raw: str, field: str) -> str:
    """Sanitize ``raw`` and reject it when nothing but whitespace remains.

    Args:
        raw: Text as submitted by the client.
        field: Field name used in the error message.

    Returns:
        The sanitized text, untrimmed.

    Raises:
        ValidationFailure: If the sanitized text is blank.
    """
    cleaned = clean_text(raw)
    if not cleaned.strip():
        raise ValidationFailure(f"{field} must not be empty")
    return cleaned
