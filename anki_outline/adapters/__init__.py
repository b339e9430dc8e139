# Path: anki_outline/adapters/__init__.py
from .anki_connect import AnkiConnectAdapter
from .markdown_renderer import MarkdownRenderer
from .outline_parser import parse_outline, load_outline, save_outline

__all__ = ["AnkiConnectAdapter", "MarkdownRenderer", "parse_outline", "load_outline", "save_outline"]
