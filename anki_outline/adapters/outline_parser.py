# Path: anki_outline/adapters/outline_parser.py
import logging
import re
from pathlib import Path
from typing import Dict, List, Tuple
from markdown_it import MarkdownIt

from anki_outline.models import Heading, OutlineDocument
from anki_outline.utils.text_utils import normalize_line_breaks

__all__ = ["parse_outline", "load_outline", "save_outline"]

logger = logging.getLogger(__name__)

# "Title   :tag1:tag2:"
_TAGS_RE = re.compile(r"^(.*?)\s+(:(?:[\w@#%-]+:)+)\s*$")
_ATX_RE = re.compile(r"^\s{0,3}(#{1,6})(?:\s+|$)(.*)$")
# Dấu # đóng tuỳ chọn của ATX heading: "## Title ##"
_CLOSING_RE = re.compile(r"(?:^|\s+)#+\s*$")
_PROPERTY_RE = re.compile(r"^\s*:([^:\s]+):\s?(.*?)\s*$")

_md = MarkdownIt("commonmark")

def _heading_starts(text: str) -> List[Tuple[int, int]]:
    """
    Trả về (line index, level) của các ATX heading ở cấp ngoài cùng.
    Dùng token của markdown-it nên dòng '#' trong code block không bị tính.
    """
    starts = []
    for token in _md.parse(normalize_line_breaks(text)):
        if token.type != "heading_open" or token.level != 0 or not token.map:
            continue
        if not token.markup.startswith("#"):
            # Setext heading (=== / ---) được coi là nội dung thường
            continue
        starts.append((token.map[0], int(token.tag[1:])))
    return starts

def _split_heading_line(line: str) -> Tuple[str, List[str]]:
    match = _ATX_RE.match(line)
    content = match.group(2) if match else line.lstrip("#")
    content = _CLOSING_RE.sub("", content).strip()

    tags: List[str] = []
    tag_match = _TAGS_RE.match(content)
    if tag_match:
        content = tag_match.group(1).strip()
        tags = [t for t in tag_match.group(2).split(":") if t]
    elif content.startswith(":") and content.endswith(":") and len(content) > 1:
        # Heading chỉ có tag, không có tiêu đề
        tags = [t for t in content.split(":") if t]
        content = ""
    return content, tags

def _read_drawer(lines: List[str], start: int, end: int) -> Tuple[Dict[str, str], int]:
    """Đọc property drawer ngay dưới heading. Trả về (properties, dòng đầu tiên của body)."""
    if start >= end or lines[start].strip().upper() != ":PROPERTIES:":
        return {}, start

    properties: Dict[str, str] = {}
    for idx in range(start + 1, end):
        stripped = lines[idx].strip()
        if stripped.upper() == ":END:":
            return properties, idx + 1
        match = _PROPERTY_RE.match(stripped)
        if match:
            # Giữ nguyên cách viết của key, key trùng (không phân biệt hoa thường) thì dòng sau thắng
            key = next((k for k in properties if k.upper() == match.group(1).upper()), match.group(1))
            properties[key] = match.group(2)
        else:
            logger.debug(f"Ignoring malformed property line: {stripped!r}")

    # Drawer không đóng: coi như nội dung thường
    logger.warning(f"Unterminated property drawer at line {start + 1}")
    return {}, start

def _join(lines: List[str]) -> str:
    return "".join(line + "\n" for line in lines)

def parse_outline(text: str) -> OutlineDocument:
    """
    Parse nội dung Markdown thành cây heading.
    Chỉ tách dòng theo "\\n": "\\r" của file CRLF nằm lại cuối mỗi dòng và được ghi lại nguyên vẹn.
    """
    lines = text.split("\n")
    final_newline = text.endswith("\n")
    if final_newline:
        lines.pop()
    starts = _heading_starts(text)

    if not starts:
        return OutlineDocument(preamble=_join(lines), final_newline=final_newline)

    document = OutlineDocument(preamble=_join(lines[:starts[0][0]]), final_newline=final_newline)
    stack: List[Heading] = []

    for i, (line_no, level) in enumerate(starts):
        end = starts[i + 1][0] if i + 1 < len(starts) else len(lines)
        title, tags = _split_heading_line(lines[line_no])
        properties, body_start = _read_drawer(lines, line_no + 1, end)

        heading = Heading(
            title=title,
            level=level,
            tags=tags,
            properties=properties,
            body=_join(lines[body_start:end]),
        )
        heading.remember_source(lines[line_no], _join(lines[line_no + 1:body_start]))

        while stack and stack[-1].level >= level:
            stack.pop()
        if stack:
            stack[-1].children.append(heading)
        else:
            document.headings.append(heading)
        stack.append(heading)

    logger.debug(f"Parsed outline with {len(starts)} headings")
    return document

def load_outline(path: Path) -> OutlineDocument:
    if not path.exists():
        raise FileNotFoundError(f"Outline file not found at: {path}")
    # newline="" để giữ nguyên CRLF
    with open(path, "r", encoding="utf-8", newline="") as f:
        return parse_outline(f.read())

def save_outline(document: OutlineDocument, path: Path) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(document.to_text())
    logger.debug(f"Outline written back to {path}")
