"""Core utilities shared across the package."""

from .logging import get_logger, mask_token, setup_logging


__all__ = ["get_logger", "mask_token", "setup_logging"]
