import json
import sys
from typing import Any


class ConsoleLogger:
    """Простая реализация логгера, выводящая сообщения в консоль."""

    def __init__(self, debug: bool = False):
        self._debug = debug

    def _emit(self, level: str, message: str, stream, context: dict) -> None:
        print(f"[{level}] {message}", file=stream, flush=True)
        if context:
            print(
                "  Context:",
                json.dumps(context, default=str, ensure_ascii=False),
                file=stream,
                flush=True,
            )

    def info(self, message: str, **kwargs: Any) -> None:
        self._emit("INFO", message, sys.stdout, kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        if self._debug:
            self._emit("DEBUG", message, sys.stdout, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._emit("WARNING", message, sys.stderr, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._emit("ERROR", message, sys.stderr, kwargs)
