# Path: anki_outline/core/__init__.py
from .config import settings
from .logging_config import setup_logging

__all__ = ["settings", "setup_logging"]
