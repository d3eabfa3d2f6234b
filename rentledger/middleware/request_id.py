# rentledger/middleware/request_id.py
"""Request id shared by the access-log middleware and the JSON log formatter."""
from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Mapping, Optional

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_REQUEST_ID_LEN = 128

request_id_ctx: ContextVar[Optional[str]] = ContextVar("rentledger_request_id", default=None)


def get_request_id() -> Optional[str]:
    return request_id_ctx.get()


def resolve_request_id(headers: Mapping[str, str]) -> str:
    """Reuse the caller's X-Request-ID when it is short and printable, else mint one."""
    rid = (headers.get(REQUEST_ID_HEADER) or "").strip()
    if rid and len(rid) <= _MAX_REQUEST_ID_LEN and rid.isprintable():
        return rid
    return str(uuid.uuid4())
