"""Form encoding for the Stripe REST API.

Stripe accepts ``application/x-www-form-urlencoded`` bodies and expresses nested
structures with bracket notation::

    {"metadata": {"plan": "growth"}}        -> metadata[plan]=growth
    {"expand": ["customer", "invoice"]}     -> expand[0]=customer&expand[1]=invoice
    {"line_items": [{"quantity": 1}]}       -> line_items[0][quantity]=1

``None`` values are dropped so optional fields can be passed straight through.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote


# Same unreserved set as JavaScript's encodeURIComponent.
_SAFE_CHARS = "-_.!~*'()"


def flatten_form_fields(data: Mapping[str, Any], prefix: str | None = None) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for key, value in data.items():
        field = f"{prefix}[{key}]" if prefix else str(key)
        pairs.extend(_flatten_value(field, value))
    return pairs


def _flatten_value(field: str, value: Any) -> list[tuple[str, str]]:
    if value is None:
        return []
    if isinstance(value, Mapping):
        return flatten_form_fields(value, field)
    if isinstance(value, (list, tuple)):
        pairs: list[tuple[str, str]] = []
        for idx, item in enumerate(value):
            pairs.extend(_flatten_value(f"{field}[{idx}]", item))
        return pairs
    return [(field, _stringify(value))]


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def form_encode(data: Mapping[str, Any]) -> str:
    return "&".join(
        f"{quote(key, safe=_SAFE_CHARS)}={quote(value, safe=_SAFE_CHARS)}"
        for key, value in flatten_form_fields(data)
    )
