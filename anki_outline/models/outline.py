# Path: anki_outline/models/outline.py
from typing import Dict, Iterator, List, Optional, Tuple
from pydantic import BaseModel, Field, PrivateAttr

__all__ = ["Heading", "OutlineDocument"]

class Heading(BaseModel):
    """
    Một heading trong outline cùng với property drawer, nội dung và các heading con.

    Property key giữ nguyên cách viết trong file; tra cứu không phân biệt hoa thường,
    key mới được ghi bằng chữ in hoa.
    Heading đọc từ file nhớ dòng heading và drawer gốc: phần nào không đổi thì được
    ghi lại y nguyên (khoảng trắng, CRLF), phần nào đổi thì được sinh lại.
    """

    title: str
    level: int = Field(..., ge=1, le=6)
    tags: List[str] = Field(default_factory=list)
    properties: Dict[str, str] = Field(default_factory=dict)
    # Mỗi dòng trong body đều kết thúc bằng "\n" (có thể kèm "\r" trước đó)
    body: str = ""
    children: List["Heading"] = Field(default_factory=list)

    _raw_line: Optional[str] = PrivateAttr(default=None)
    _raw_drawer: Optional[str] = PrivateAttr(default=None)
    _line_origin: Optional[Tuple] = PrivateAttr(default=None)
    _drawer_origin: Optional[Tuple] = PrivateAttr(default=None)

    def remember_source(self, raw_line: str, raw_drawer: str) -> None:
        """Ghi nhớ dòng heading (không có "\\n") và drawer gốc (kể cả "\\n") như trong file."""
        self._raw_line = raw_line
        self._raw_drawer = raw_drawer
        self._line_origin = self._line_state()
        self._drawer_origin = self._drawer_state()

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def _find_key(self, name: str) -> Optional[str]:
        wanted = name.upper()
        for key in self.properties:
            if key.upper() == wanted:
                return key
        return None

    def get_property(self, name: str) -> Optional[str]:
        key = self._find_key(name)
        return None if key is None else self.properties[key]

    def set_property(self, name: str, value: str) -> None:
        key = self._find_key(name) or name.upper()
        self.properties[key] = str(value)

    def remove_property(self, name: str) -> None:
        key = self._find_key(name)
        if key is not None:
            del self.properties[key]

    def walk(self) -> Iterator["Heading"]:
        """Duyệt heading này và toàn bộ heading con theo thứ tự tài liệu."""
        yield self
        for child in self.children:
            yield from child.walk()

    def _line_state(self) -> Tuple:
        return (self.level, self.title, tuple(self.tags))

    def _drawer_state(self) -> Tuple:
        return tuple(self.properties.items())

    def _line_ending(self) -> str:
        if self._raw_line is not None and self._raw_line.endswith("\r"):
            return "\r\n"
        return "\n"

    def heading_line(self) -> str:
        if self._raw_line is not None and self._line_origin == self._line_state():
            return self._raw_line.rstrip("\r")
        line = f"{'#' * self.level} {self.title}"
        if self.tags:
            line += "  :" + ":".join(self.tags) + ":"
        return line

    def source_text(self) -> str:
        """Body cùng các heading con, dạng Markdown (dùng làm nội dung field)."""
        return self.body + "".join(child.to_text() for child in self.children)

    def to_text(self) -> str:
        eol = self._line_ending()
        parts = [self.heading_line() + eol]
        if self._raw_drawer is not None and self._drawer_origin == self._drawer_state():
            parts.append(self._raw_drawer)
        elif self.properties:
            parts.append(":PROPERTIES:" + eol)
            for key, value in self.properties.items():
                parts.append(f":{key}: {value}{eol}")
            parts.append(":END:" + eol)
        parts.append(self.source_text())
        return "".join(parts)


class OutlineDocument(BaseModel):
    """Toàn bộ file outline: phần mở đầu (trước heading đầu tiên) và các heading gốc."""

    preamble: str = ""
    headings: List[Heading] = Field(default_factory=list)
    # File gốc có kết thúc bằng xuống dòng hay không
    final_newline: bool = True

    def walk(self) -> Iterator[Heading]:
        for heading in self.headings:
            yield from heading.walk()

    def to_text(self) -> str:
        text = self.preamble + "".join(h.to_text() for h in self.headings)
        if not self.final_newline and text.endswith("\n"):
            text = text[:-1]
        return text
