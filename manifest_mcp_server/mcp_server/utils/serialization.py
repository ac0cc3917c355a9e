"""
JSON Serialization Utilities

Serializes response envelopes to a single line of JSON for the stdio
transport.
"""

import json
from typing import Any


def safe_json_dumps(obj: Any) -> str:
    """
    Serialize an object to a single-line JSON string.

    Non-ASCII text is written as-is. A value that cannot be serialized still
    produces valid JSON describing the failure, so a response line is always
    emitted.

    Args:
        obj: Object to serialize to JSON

    Returns:
        JSON string representation of the object without embedded newlines
    """
    try:
        return json.dumps(obj, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        return json.dumps(
            {"error": f"Serialization failed: {str(e)}", "data": str(obj)}
        )
