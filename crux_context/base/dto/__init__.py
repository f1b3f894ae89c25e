"""DTO validation package for the context pipeline."""

from .context_config import ContextConfig

__all__ = ["ContextConfig"]
