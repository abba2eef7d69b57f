"""
netkit.tier1_runtime.serialize
───────────────────────────────
JSON request/response codec. Request bodies may be plain JSON values or
Pydantic models; response bodies decode to plain values or, when a target
type is given, are validated into it via a Pydantic ``TypeAdapter``.

All failures are re-raised as EncodeError / DecodeError.
"""
from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError as PydanticValidationError

from netkit.tier0_core.errors import DecodeError, EncodeError


def encode_json(obj: Any) -> bytes:
    """
    Serialize a Pydantic model or JSON-compatible value to UTF-8 bytes.

    NaN/Infinity and unknown types are rejected rather than coerced.

    Usage:
        data = encode_json({"name": "test", "value": 42})
        data = encode_json(my_model)
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump_json().encode()
    try:
        return json.dumps(obj, allow_nan=False).encode()
    except (TypeError, ValueError) as exc:
        raise EncodeError(
            user_message="Request body is not JSON-serializable.",
            detail=str(exc),
        ) from exc


def decode_json(data: bytes | str, model: Any = None) -> Any:
    """
    Decode a JSON document. An empty (or all-whitespace) body is a DecodeError.

    If *model* is given (a Pydantic model, dataclass, ``list[Item]``, ...),
    the document is validated into that type; a mismatch raises DecodeError.

    Usage:
        payload = decode_json(raw_bytes)
        user = decode_json(raw_bytes, User)
    """
    if not data.strip():
        raise DecodeError(user_message="Response body is empty.", detail="expected a JSON document")

    if model is not None:
        try:
            return TypeAdapter(model).validate_json(data)
        except PydanticValidationError as exc:
            raise DecodeError(
                user_message=f"Response body does not match {getattr(model, '__name__', model)!s}.",
                detail=str(exc),
            ) from exc

    try:
        return json.loads(data)
    except ValueError as exc:
        raise DecodeError(
            user_message="Response body is not valid JSON.",
            detail=str(exc),
        ) from exc


__sdk_export__ = {
    "exports": ["encode_json", "decode_json"],
    "description": "JSON codec for request and response bodies, with Pydantic model support",
    "tier": "tier1_runtime",
    "module": "serialize",
}
