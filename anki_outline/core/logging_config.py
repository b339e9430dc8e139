# Path: anki_outline/core/logging_config.py
import logging
from logging.handlers import RotatingFileHandler
from rich.logging import RichHandler
from anki_outline.core.config import settings

def setup_logging(log_level: str = "INFO") -> None:
    """
    Thiết lập hệ thống logging cho toàn bộ dự án.

    - Console: RichHandler, chỉ in message (Rich lo phần level/màu).
    - File: RotatingFileHandler lưu log chi tiết ở mức DEBUG.
    """
    log_dir = settings.LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "anki_outline.log"

    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    console_formatter = logging.Formatter("%(message)s")

    # 5MB mỗi file, giữ lại 3 file cũ nhất
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5*1024*1024,
        backupCount=3,
        encoding="utf-8"
    )
    file_handler.setFormatter(file_formatter)
    file_handler.setLevel(logging.DEBUG)

    console_handler = RichHandler(
        rich_tracebacks=True,
        markup=False, # Nội dung note có thể chứa [$]...[/$], không phải Rich markup
        show_time=False,
        show_path=False
    )
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(log_level)

    logging.basicConfig(
        level=logging.DEBUG,
        handlers=[console_handler, file_handler],
        force=True
    )

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("markdown_it").setLevel(logging.WARNING)
