"""
Canonical serialization for signed payloads.

The signature in a sidecar covers canonical_json_bytes(payload.to_dict()),
so a verifier in any language can rebuild the message from the JSON alone.
Only JSON-stable values are accepted: floats have no single textual form
and are rejected.
"""

import json
from typing import Any

from .errors import InvalidInputError


def canonicalize(obj: Any) -> Any:
    """
    Normalize a payload tree before serialization.

    - dict keys sorted; non-string keys rejected
    - tuples become lists
    - bytes become lower-case hex
    - floats rejected
    """
    if isinstance(obj, dict):
        if not all(isinstance(k, str) for k in obj):
            raise InvalidInputError("Signed payload keys must be strings")
        return {k: canonicalize(obj[k]) for k in sorted(obj)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).hex()
    if isinstance(obj, float):
        raise InvalidInputError(f"Floats are not allowed in signed payloads: {obj!r}")
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    UTF-8 JSON with sorted keys and no whitespace.

    Non-ASCII characters (signer names, file names) are written as-is rather
    than as \\u escapes.
    """
    text = json.dumps(canonicalize(obj), separators=(",", ":"), ensure_ascii=False)
    return text.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    return canonical_json_bytes(obj).decode("utf-8")
