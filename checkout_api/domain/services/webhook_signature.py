"""Stripe webhook signature header.

Every delivery carries a ``Stripe-Signature`` header such as::

    t=1700000000,v1=5257a869e7ecebeda32affa62cdca3fa51cad7e77a0e56ff536d0ce8e108d8bd,v0=...

``v1`` is the hex HMAC-SHA256 of ``"<t>.<raw body>"`` keyed with the endpoint
secret. The raw body must be the exact bytes received: re-serializing parsed
JSON changes whitespace and key order and breaks every signature.
"""
from __future__ import annotations

from dataclasses import dataclass


SIGNATURE_SCHEME = "v1"


@dataclass(frozen=True)
class SignatureHeader:
    timestamp: str
    signatures: tuple[str, ...]

    def normalized(self) -> str:
        parts = [f"t={self.timestamp}"]
        parts.extend(f"{SIGNATURE_SCHEME}={signature}" for signature in self.signatures)
        return ",".join(parts)


def parse_signature_header(header: str | None) -> SignatureHeader | None:
    parts = [part.strip() for part in (header or "").split(",")]
    timestamp = next((part[2:] for part in parts if part.startswith("t=")), "")
    prefix = f"{SIGNATURE_SCHEME}="
    signatures = tuple(part[len(prefix):] for part in parts if part.startswith(prefix) and part[len(prefix):])
    if not timestamp or not signatures:
        return None
    return SignatureHeader(timestamp=timestamp, signatures=signatures)
