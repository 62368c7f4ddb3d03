from __future__ import annotations

from uuid import uuid4


def generate_id() -> str:
    return str(uuid4())


def normalize_id(value: object) -> str:
    """Identifier as a trimmed string; empty when missing."""
    return str(value or "").strip()


__all__ = ["generate_id", "normalize_id"]
