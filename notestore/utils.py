from __future__ import annotations

# notestore/utils.py
import datetime as dt
import uuid


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    # Fixed microsecond width keeps text order == time order.
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec="microseconds")
