# Path: anki_outline/models/fragment.py
from enum import Enum
from typing import Dict, List
from pydantic import BaseModel, ConfigDict

__all__ = ["FragmentKind", "ProtectedFragment", "FragmentTable"]

class FragmentKind(str, Enum):
    INLINE_MATH = "InlineMath"
    BLOCK_MATH = "BlockMath"

class ProtectedFragment(BaseModel):
    """Một đoạn math đã được thay bằng placeholder trong lúc render."""

    model_config = ConfigDict(frozen=True)

    placeholder: str
    kind: FragmentKind
    original_text: str

class FragmentTable:
    """
    Danh sách fragment đang chờ restore của MỘT lần render.
    Mỗi lần render tạo table mới, không dùng lại giữa các lần render.
    """

    def __init__(self):
        self._fragments: Dict[str, ProtectedFragment] = {}
        # Số lần placeholder xuất hiện (cùng một đoạn math có thể lặp lại)
        self._counts: Dict[str, int] = {}

    def add(self, fragment: ProtectedFragment) -> None:
        existing = self._fragments.get(fragment.placeholder)
        if existing is not None and existing != fragment:
            # Hai fragment khác nhau cùng hash là bug, không cố xử lý
            raise RuntimeError(f"Placeholder collision for {fragment.placeholder}")
        self._fragments[fragment.placeholder] = fragment
        self._counts[fragment.placeholder] = self._counts.get(fragment.placeholder, 0) + 1

    def count(self, placeholder: str) -> int:
        return self._counts.get(placeholder, 0)

    def resolve(self, placeholder: str) -> None:
        self._fragments.pop(placeholder, None)
        self._counts.pop(placeholder, None)

    @property
    def pending(self) -> List[ProtectedFragment]:
        return list(self._fragments.values())

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self):
        # Snapshot để có thể resolve trong lúc duyệt
        return iter(list(self._fragments.values()))
