# Path: anki_outline/utils/text_utils.py
from typing import Optional, Set

def split_tags(raw: Optional[str]) -> Set[str]:
    """
    Tách chuỗi tag phân cách bằng khoảng trắng thành set.
    Ví dụ: "spanish  greeting" -> {"spanish", "greeting"}
    """
    if not raw:
        return set()
    return set(raw.split())

def normalize_line_breaks(text: str) -> str:
    """
    CRLF -> LF. CR đứng một mình (không phải xuống dòng với parser) thành khoảng trắng,
    để số dòng trùng với text.split("\\n").
    """
    return text.replace("\r\n", "\n").replace("\r", " ")
