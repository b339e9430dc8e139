# Path: anki_outline/services/content_renderer.py
import logging
from typing import Callable, List, Optional
from pydantic import BaseModel, Field

from anki_outline.adapters.markdown_renderer import MarkdownRenderer
from anki_outline.models import ProtectedFragment
from anki_outline.services.latex_guard import LatexGuard
from anki_outline.utils.text_utils import normalize_line_breaks

__all__ = ["ContentRenderer", "RenderResult"]

logger = logging.getLogger(__name__)

class RenderResult(BaseModel):
    html: str
    # Fragment không restore được (renderer đã làm mất/escape placeholder)
    unrestored: List[ProtectedFragment] = Field(default_factory=list)

class ContentRenderer:
    """
    Render nội dung một field sang HTML: protect math -> render -> restore math.
    Renderer là một callable (text -> html) được inject vào, mặc định là MarkdownRenderer.
    """

    def __init__(self, renderer: Optional[Callable[[str], str]] = None, guard: Optional[LatexGuard] = None):
        self.renderer = renderer or MarkdownRenderer()
        self.guard = guard or LatexGuard()

    def render(self, source: str) -> str:
        return self.render_detailed(source).html

    def render_detailed(self, source: str) -> RenderResult:
        # Một số renderer lỗi với input rỗng
        if not source.strip():
            return RenderResult(html="")

        protected, table = self.guard.protect(normalize_line_breaks(source))
        html = self.renderer(protected)
        html = self.guard.restore(html, table)

        if len(table):
            logger.warning(f"{len(table)} math fragment(s) could not be restored")
        return RenderResult(html=html, unrestored=table.pending)
