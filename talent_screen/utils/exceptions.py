"""
Service exceptions.
"""

from typing import Optional


class ServiceError(Exception):
    """Failure of one step of a workflow, tagged with the component that raised it."""

    def __init__(self, message: str, component: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.component = component

    def __str__(self) -> str:
        return self.message


def error_message(error: BaseException) -> str:
    """
    Human readable message for an exception raised by a client library.

    Supabase storage errors carry a dict payload, function/postgrest errors
    expose a ``message`` attribute; everything else falls back to ``str()``.
    """
    message = getattr(error, "message", None)
    if message:
        return str(message)
    if error.args and isinstance(error.args[0], dict) and error.args[0].get("message"):
        return str(error.args[0]["message"])
    return str(error) or "Unknown error occurred"
