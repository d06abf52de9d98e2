"""Convert between Python values and Firestore REST typed values.

Firestore REST wraps every value in a one-key object naming its type
({"stringValue": "x"}, {"integerValue": "3"}, ...). Timestamps are written
as UTC with microseconds and read back tz-aware; nanosecond digits beyond
microseconds are dropped.
"""

import base64
import re
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

_SUBMICRO_DIGITS = re.compile(r"(\.\d{6})\d+")


def _timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _parse_timestamp(raw: str) -> datetime:
    return datetime.fromisoformat(_SUBMICRO_DIGITS.sub(r"\1", raw.replace("Z", "+00:00")))


def to_value(v: Any) -> dict:
    """Encode one Python value. bool is checked before int (bool is an int)."""
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, datetime):
        return {"timestampValue": _timestamp(v)}
    if isinstance(v, bytes):
        return {"bytesValue": base64.b64encode(v).decode("ascii")}
    if isinstance(v, dict):
        return {"mapValue": {"fields": {str(k): to_value(x) for k, x in v.items()}}}
    if isinstance(v, (list, tuple)):
        return {"arrayValue": {"values": [to_value(x) for x in v]}}
    raise TypeError(f"Cannot store {type(v).__name__} in Firestore")


_DECODERS: dict[str, Callable[[Any], Any]] = {
    "nullValue": lambda _: None,
    "booleanValue": bool,
    "integerValue": int,
    "doubleValue": float,
    "stringValue": str,
    "timestampValue": _parse_timestamp,
    "bytesValue": base64.b64decode,
    "arrayValue": lambda a: [from_value(x) for x in a.get("values") or []],
    "mapValue": lambda m: {k: from_value(x) for k, x in (m.get("fields") or {}).items()},
}


def from_value(obj: dict) -> Any:
    """Decode one typed value; unknown types (geo points, references) become None."""
    for kind, decode in _DECODERS.items():
        if kind in obj:
            return decode(obj[kind])
    return None


def encode_document(data: dict[str, Any]) -> dict:
    """Python dict -> REST Document body ({"fields": ...})."""
    return {"fields": {k: to_value(v) for k, v in data.items()}}


def decode_document(document: dict | None) -> dict:
    """REST Document (with its "fields" key) -> Python dict."""
    if not document:
        return {}
    return {k: from_value(v) for k, v in (document.get("fields") or {}).items()}
