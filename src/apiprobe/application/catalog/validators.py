"""Pure validation functions for catalog round trips."""

from __future__ import annotations

from typing import Any, List

from ...domain.catalog.entities import NewProduct, Product


def json_kind(value: Any) -> str:
    """Name the JSON type a decoded value would have on the wire."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    return "object"


def find_echo_mismatches(submitted: NewProduct, created: Product) -> List[str]:
    """Return one message per submitted field the catalog failed to echo.

    A field fails when its value differs or when its JSON kind differs.
    An empty list means every submitted field came back unchanged.
    """
    mismatches: List[str] = []
    for field, sent in submitted.model_dump().items():
        echoed = getattr(created, field, None)
        if json_kind(echoed) != json_kind(sent):
            mismatches.append(
                f"{field}: expected {json_kind(sent)}, got {json_kind(echoed)}"
            )
        elif echoed != sent:
            mismatches.append(f"{field}: expected {sent!r}, got {echoed!r}")
    return mismatches
