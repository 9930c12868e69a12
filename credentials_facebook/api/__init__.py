"""FastAPI integration helpers."""

from .errors import error_response, setup_error_handlers


__all__ = ["error_response", "setup_error_handlers"]
