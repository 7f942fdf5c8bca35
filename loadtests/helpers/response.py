"""Response error extraction for load test observability.

Parses Order Management API error responses into human-readable messages.
Every error body uses one envelope:

- Request validation (400): {"error": {"field": ["msg"]}}
- Authentication and domain errors (400/401/403/404/409/500): {"error": "msg"}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except Exception:
        # Not JSON: raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    # Domain errors: {"error": "msg"} or {"error": {"field": "msg"}}
    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(f"{k}: {v}" for k, v in error.items())
        return str(error)

    # Unknown shape
    return str(body)[:300]
