"""Shared validators for command input.

These raise the domain :class:`ValidationError` so handlers can reject bad
input before a transaction is opened.
"""

from __future__ import annotations

from playlist_engine.domain.shared.exceptions import ValidationError


def validate_bounded_text(
    value: str,
    *,
    field_name: str,
    max_length: int,
    empty_message: str | None,
    too_long_message: str,
) -> str:
    """Trim ``value`` and enforce its length bounds.

    Pass ``empty_message=None`` for optional text that may be empty.
    """
    trimmed = (value or "").strip()
    if empty_message is not None and not trimmed:
        raise ValidationError(empty_message, field=field_name)
    if len(trimmed) > max_length:
        raise ValidationError(too_long_message.format(limit=max_length), field=field_name)
    return trimmed
