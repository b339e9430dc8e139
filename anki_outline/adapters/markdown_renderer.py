# Path: anki_outline/adapters/markdown_renderer.py
import logging
from markdown_it import MarkdownIt

__all__ = ["MarkdownRenderer"]

logger = logging.getLogger(__name__)

class MarkdownRenderer:
    """
    Renderer mặc định: Markdown -> HTML bằng markdown-it-py.
    Không hiểu công thức toán, nên luôn được gọi qua ContentRenderer.
    """

    def __init__(self, html: bool = True):
        self._md = MarkdownIt(
            "commonmark",
            {"html": html, "typographer": False},
        ).enable("table").enable("strikethrough")

    def __call__(self, text: str) -> str:
        return self.render(text)

    def render(self, text: str) -> str:
        html = self._md.render(text)
        logger.debug(f"Rendered {len(text)} chars of markdown into {len(html)} chars of HTML")
        return html.rstrip("\n")
