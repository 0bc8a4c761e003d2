import logging
import sys

from .config import get_settings
from .observability import CustomJsonFormatter

_logging_configured = False

_PLAIN_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


def setup_logging(level: str | None = None, json_format: bool | None = None) -> None:
    global _logging_configured
    if _logging_configured:
        return

    settings = get_settings()
    resolved_level = (level or settings.log_level).upper()
    use_json = settings.log_json if json_format is None else json_format

    handler = logging.StreamHandler(sys.stderr)
    if use_json:
        handler.setFormatter(CustomJsonFormatter("%(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))

    logging.basicConfig(
        level=getattr(logging, resolved_level, logging.INFO),
        handlers=[handler],
        force=True,
    )

    # 라이브러리 로그 레벨 조정
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """명명된 로거 가져오기(Get a named logger).

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    setup_logging()
    return logging.getLogger(name)
