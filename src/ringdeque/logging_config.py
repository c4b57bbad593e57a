import inspect
import json
import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger
from loguru._defaults import LOGURU_FORMAT

LOG_FILE_NAME = "ringdeque_{time:YYYY-MM-DD}.log"


class InterceptHandler(logging.Handler):
    """Forwards records from the standard `logging` module into Loguru.

    The caller depth is recomputed so that Loguru reports the module and
    line that called `logging`, not this handler.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _json_line(record: dict[str, Any]) -> str:
    """Renders a record as one JSON object per line.

    Loguru reads the return value as a format template, so the JSON text
    goes into `extra["json"]` and the template only references it.
    """
    payload = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "source": {
            "name": record["name"],
            "file": f"{record['file'].name}:{record['line']}",
            "function": record["function"],
        },
        "extra": {k: v for k, v in record["extra"].items() if k != "json"},
    }
    record["extra"]["json"] = json.dumps(payload, default=str)
    return "{extra[json]}\n"


def setup_logging(
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    log_dir: Path | None = None,
) -> None:
    """Replaces Loguru's sinks with the ones used by the benchmark script.

    The library modules only emit through `loguru.logger`; sinks are
    configured here, by whoever runs the deque, never on import.

    Args:
        console_level: Minimum level written to stderr.
        file_level: Minimum level written to the JSON log file.
        log_dir: Where the daily log file lives. No file sink when None.
    """
    logger.remove()
    logger.add(sys.stderr, level=console_level.upper(), format=LOGURU_FORMAT)

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / LOG_FILE_NAME,
            level=file_level.upper(),
            format=_json_line,
            rotation="00:00",
            retention="7 days",
            compression="zip",
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logger.debug(
        f"Logging to stderr at {console_level.upper()}"
        + (f" and to '{log_dir}' at {file_level.upper()}." if log_dir else ".")
    )
