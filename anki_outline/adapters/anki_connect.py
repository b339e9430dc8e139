# Path: anki_outline/adapters/anki_connect.py
import logging
import requests
from typing import Any, Dict, List, Optional
from anki_outline.core.config import settings
from anki_outline.core.errors import RpcError, TransportError

__all__ = ["AnkiConnectAdapter"]

logger = logging.getLogger(__name__)

class AnkiConnectAdapter:
    """
    Adapter để giao tiếp với Anki thông qua AnkiConnect Add-on.
    Document: https://foosoft.net/projects/anki-connect/
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        version: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url or settings.ANKI_CONNECT_URL
        self.version = version or settings.ANKI_CONNECT_VERSION
        self.timeout = timeout or settings.ANKI_CONNECT_TIMEOUT

    def invoke(self, action: str, version: Optional[int] = None, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Gửi request POST đến AnkiConnect API.

        Args:
            action: Tên hành động API (ví dụ: 'deckNames', 'addNote').
            version: Version API, mặc định lấy từ settings.
            params: Tham số của action (bỏ qua nếu None).

        Returns:
            Giá trị trong trường 'result' của response.

        Raises:
            TransportError: Không kết nối được với Anki hoặc response sai format.
            RpcError: Anki trả về lỗi logic (ví dụ: sai tên deck).
        """
        payload: Dict[str, Any] = {
            "action": action,
            "version": version or self.version,
        }
        if params is not None:
            payload["params"] = params

        try:
            response = requests.post(self.base_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            response_data = response.json()
        except requests.exceptions.ConnectionError:
            logger.error(f"Could not connect to Anki at {self.base_url}. Is Anki running?")
            raise TransportError(
                f"Failed to connect to Anki at {self.base_url}. Please make sure Anki is running and AnkiConnect is installed."
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to AnkiConnect failed [{action}]: {e}")
            raise TransportError(f"Request to AnkiConnect failed: {e}")
        except ValueError:
            raise TransportError("AnkiConnect returned a response that is not valid JSON.")

        # Kiểm tra format chuẩn của AnkiConnect
        if not isinstance(response_data, dict) or len(response_data) != 2:
            raise TransportError("Response has an unexpected number of fields.")
        if "error" not in response_data:
            raise TransportError("Response is missing required error field.")
        if "result" not in response_data:
            raise TransportError("Response is missing required result field.")

        if response_data["error"] is not None:
            error_msg = response_data["error"]
            logger.error(f"AnkiConnect Error [{action}]: {error_msg}")
            raise RpcError(f"{error_msg}")

        return response_data["result"]

    def _invoke(self, action: str, **params: Any) -> Any:
        return self.invoke(action, params=params or None)

    # =========================================================================
    # SYSTEM & CONNECTION
    # =========================================================================

    def ping(self) -> str:
        """Kiểm tra kết nối và lấy version API."""
        return f"AnkiConnect v{self._invoke('version')}"

    # =========================================================================
    # METADATA RETRIEVAL (Decks, Models)
    # =========================================================================

    def get_deck_names(self) -> List[str]:
        return self._invoke("deckNames")

    def get_model_names(self) -> List[str]:
        """Lấy danh sách tên tất cả các Note Types (Models)."""
        return self._invoke("modelNames")

    # =========================================================================
    # NOTE OPERATIONS
    # =========================================================================

    def create_note(self, note: Dict[str, Any]) -> int:
        """
        Tạo note mới từ wire payload.
        Returns: ID của note vừa tạo.
        """
        note_id = self._invoke("addNote", note=note)
        if not isinstance(note_id, int):
            raise TransportError(f"addNote returned a non-numeric note id: {note_id!r}")
        return note_id

    def update_note_fields(self, note: Dict[str, Any]) -> None:
        """
        Cập nhật nội dung fields của note đã có (payload phải có 'id').
        Tags KHÔNG được cập nhật bởi action này.
        """
        self._invoke("updateNoteFields", note=note)
