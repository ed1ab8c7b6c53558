"""Response error extraction for load test observability.

Every API error has the shape ``{"message": "...", "details": ["...", ...]}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a compact, human-readable message from an API error response."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and "message" in body:
        details = body.get("details") or []
        return " | ".join([body["message"], *details])

    return str(body)[:300]
