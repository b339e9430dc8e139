# Path: anki_outline/services/latex_guard.py
import logging
import re
from bisect import bisect_right
from enum import Enum
from typing import List, Optional, Pattern, Tuple

from markdown_it import MarkdownIt

from anki_outline.models import FragmentKind, FragmentTable, ProtectedFragment
from anki_outline.utils.hashing import placeholder_for
from anki_outline.utils.text_utils import normalize_line_breaks

__all__ = ["LatexGuard", "Anchor"]

logger = logging.getLogger(__name__)

class Anchor(str, Enum):
    LEADING = "leading"
    TRAILING = "trailing"

# Thứ tự quan trọng: khi hai pattern bắt đầu cùng vị trí, pattern đứng trước thắng.
_FRAGMENT_PATTERNS: List[Tuple[Pattern, FragmentKind]] = [
    (re.compile(r"\\begin\{([A-Za-z]+\*?)\}.*?\\end\{\1\}", re.DOTALL), FragmentKind.BLOCK_MATH),
    (re.compile(r"(?<!\\)\$\$.+?(?<!\\)\$\$", re.DOTALL), FragmentKind.BLOCK_MATH),
    (re.compile(r"(?<!\\)\\\[.+?\\\]", re.DOTALL), FragmentKind.BLOCK_MATH),
    (re.compile(r"(?<!\\)\\\(.+?\\\)", re.DOTALL), FragmentKind.INLINE_MATH),
    # $...$: không bắt đầu/kết thúc bằng khoảng trắng, không theo sau bởi chữ số ("$5 và $6")
    (re.compile(r"(?<![\\$])\$(?=[^\s$])(?:\\.|[^$\\\n])+?(?<=[^\s\\])\$(?!\d)"), FragmentKind.INLINE_MATH),
]

# (pattern, kind, anchor, replacement): chỉ thay dấu mở/đóng, giữ nguyên phần ruột.
_DELIMITER_RULES: List[Tuple[Pattern, FragmentKind, Anchor, str]] = [
    (re.compile(r"^\$\$"), FragmentKind.BLOCK_MATH, Anchor.LEADING, "[$$]"),
    (re.compile(r"\$\$$"), FragmentKind.BLOCK_MATH, Anchor.TRAILING, "[/$$]"),
    (re.compile(r"^\\\["), FragmentKind.BLOCK_MATH, Anchor.LEADING, "[$$]"),
    (re.compile(r"\\\]$"), FragmentKind.BLOCK_MATH, Anchor.TRAILING, "[/$$]"),
    (re.compile(r"^\\\("), FragmentKind.INLINE_MATH, Anchor.LEADING, "[$]"),
    (re.compile(r"\\\)$"), FragmentKind.INLINE_MATH, Anchor.TRAILING, "[/$]"),
    (re.compile(r"^\$"), FragmentKind.INLINE_MATH, Anchor.LEADING, "[$]"),
    (re.compile(r"\$$"), FragmentKind.INLINE_MATH, Anchor.TRAILING, "[/$]"),
]

# Dấu ` bị escape (\`) không mở code span
_CODE_SPAN_RE = re.compile(r"(?<![`\\])(`+)(?!`).+?(?<!`)\1(?!`)", re.DOTALL)

_md = MarkdownIt("commonmark")


class LatexGuard:
    """
    Bảo vệ công thức toán khỏi renderer Markdown -> HTML.

    protect(): thay từng đoạn math bằng placeholder (hash), trả về text mới
    và FragmentTable của lần render đó.
    restore(): sau khi render HTML, thay placeholder bằng cú pháp math của Anki
    ([$]...[/$], [$$]...[/$$], hoặc [latex]...[/latex] cho environment).
    """

    def __init__(self, environment_tag: str = "latex"):
        self.environment_tag = environment_tag

    # =========================================================================
    # PROTECT
    # =========================================================================

    def protect(self, text: str) -> Tuple[str, FragmentTable]:
        table = FragmentTable()
        while True:
            found = self._find_first_fragment(text)
            if found is None:
                break
            start, end, kind = found
            original = text[start:end]
            placeholder = placeholder_for(kind, original)
            table.add(ProtectedFragment(placeholder=placeholder, kind=kind, original_text=original))
            text = text[:start] + placeholder + text[end:]

        if len(table):
            logger.debug(f"Protected {len(table)} math fragment(s)")
        return text, table

    def _find_first_fragment(self, text: str) -> Optional[Tuple[int, int, FragmentKind]]:
        """Tìm đoạn math đầu tiên (theo vị trí) nằm ngoài code block / code span."""
        excluded = _code_ranges(text)
        best: Optional[Tuple[int, int, FragmentKind]] = None

        for pattern, kind in _FRAGMENT_PATTERNS:
            pos = 0
            while True:
                match = pattern.search(text, pos)
                if match is None:
                    break
                if best is not None and match.start() >= best[0]:
                    break
                if not _overlaps(match.start(), match.end(), excluded):
                    best = (match.start(), match.end(), kind)
                    break
                pos = match.start() + 1
        return best

    # =========================================================================
    # RESTORE
    # =========================================================================

    def restore(self, html: str, table: FragmentTable) -> str:
        """
        Thay placeholder trong HTML bằng dạng cuối cùng của fragment.
        Placeholder không tìm thấy được giữ lại trong table (pending) và log warning.
        """
        for fragment in table:
            expected = table.count(fragment.placeholder)
            found = html.count(fragment.placeholder)
            if found == 0:
                logger.warning(f"Math fragment {fragment.original_text!r} was lost during rendering")
                continue

            html = html.replace(fragment.placeholder, self.final_form(fragment))
            if found < expected:
                logger.warning(
                    f"Math fragment {fragment.original_text!r} restored {found} of {expected} time(s)"
                )
                continue
            table.resolve(fragment.placeholder)
        return html

    def final_form(self, fragment: ProtectedFragment) -> str:
        text = fragment.original_text
        matched = set()
        for pattern, kind, anchor, replacement in _DELIMITER_RULES:
            if kind != fragment.kind or anchor in matched:
                continue
            match = pattern.search(text)
            if match is None:
                continue
            text = text[:match.start()] + replacement + text[match.end():]
            matched.add(anchor)

        if matched == {Anchor.LEADING, Anchor.TRAILING}:
            return text
        # Environment (\begin{...}...\end{...}) hoặc dạng không nhận ra
        return f"[{self.environment_tag}]{fragment.original_text}[/{self.environment_tag}]"


def _code_ranges(text: str) -> List[Tuple[int, int]]:
    """Các khoảng ký tự thuộc code block, fenced code và inline code span."""
    line_starts = [0]
    for line in text.split("\n"):
        line_starts.append(line_starts[-1] + len(line) + 1)
    last = len(line_starts) - 1

    blocks = []
    spans = []
    for token in _md.parse(normalize_line_breaks(text)):
        if not token.map:
            continue
        begin, end = token.map
        start, stop = line_starts[begin], min(line_starts[min(end, last)], len(text))
        if token.type in ("fence", "code_block"):
            blocks.append((start, stop))
        elif token.type == "inline":
            # Code span không vượt qua ranh giới của một block (paragraph, heading...)
            spans.extend(m.span() for m in _CODE_SPAN_RE.finditer(text, start, stop))
    return sorted(blocks + spans)

def _overlaps(start: int, end: int, ranges: List[Tuple[int, int]]) -> bool:
    idx = bisect_right(ranges, (start, float("inf")))
    if idx > 0 and ranges[idx - 1][1] > start:
        return True
    return idx < len(ranges) and ranges[idx][0] < end
