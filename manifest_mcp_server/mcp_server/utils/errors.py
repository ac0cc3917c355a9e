"""
Error Handling Utilities

Sanitizes exception messages before they are placed in a JSON-RPC error
envelope, so manifest locations on disk are not disclosed to clients.
"""

import re
from pathlib import Path


def sanitize_error(error: Exception) -> str:
    """
    Sanitize error messages to prevent information disclosure.

    Replaces the home directory with ``~``, strips directory components from
    absolute paths and truncates messages longer than 200 characters.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message string

    Example:
        >>> error = FileNotFoundError("/srv/manifests/prompts/a.json not found")
        >>> sanitize_error(error)
        'a.json not found'
    """
    try:
        error_str = str(error)

        sanitized = error_str.replace(str(Path.home()), "~")

        # Keep only the final path component
        sanitized = re.sub(r"/[a-zA-Z0-9_/.-]*/", "", sanitized)

        if len(sanitized) > 200:
            sanitized = sanitized[:200] + "..."

        return sanitized

    except Exception:
        return "Internal server error occurred"
