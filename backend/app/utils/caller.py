"""
Caller identity resolution.

The hosting environment authenticates the caller and forwards its identity in
a request header. The value is opaque: it is only ever compared for equality,
never parsed.
"""

import os

from fastapi import HTTPException, Request

CALLER_ID_HEADER = os.getenv("CALLER_ID_HEADER", "X-Caller-Id")


def get_caller_id(request: Request) -> str:
    """Dependency returning the caller identity, or 401 when none was supplied."""
    caller_id = request.headers.get(CALLER_ID_HEADER, "").strip()
    if not caller_id:
        raise HTTPException(status_code=401, detail=f"Missing {CALLER_ID_HEADER} header")
    return caller_id
