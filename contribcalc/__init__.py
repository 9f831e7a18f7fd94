"""Social-insurance and housing-fund contribution calculator."""

from .core import get_logger, get_settings

__all__ = ["get_logger", "get_settings"]
