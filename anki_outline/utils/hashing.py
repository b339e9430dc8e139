# Path: anki_outline/utils/hashing.py
import hashlib
from anki_outline.models.fragment import FragmentKind

def compute_hash(text: str) -> str:
    """SHA-1 hex digest (chỉ gồm [0-9a-f], không chứa ký tự đặc biệt của Markdown/HTML)."""
    return hashlib.sha1(text.encode('utf-8')).hexdigest()

def placeholder_for(kind: FragmentKind, text: str) -> str:
    """
    Placeholder cho một đoạn math: hash của tên loại fragment + nội dung gốc.
    Cùng (kind, text) luôn cho cùng placeholder, kể cả giữa các lần chạy.
    """
    return compute_hash(kind.value + text)
