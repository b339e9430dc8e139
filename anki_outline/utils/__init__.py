# Path: anki_outline/utils/__init__.py
from .hashing import compute_hash, placeholder_for
from .text_utils import normalize_line_breaks, split_tags

__all__ = ["compute_hash", "placeholder_for", "split_tags", "normalize_line_breaks"]
