"""Append-only log of per-page failures."""

from pathlib import Path
from typing import Union
import logging

from site_crawler.models import PageError

logger = logging.getLogger(__name__)


class ErrorLog:
    """Appends one line per failure to a file and never raises."""

    def __init__(self, path: Union[str, Path] = 'error.log'):
        self.path = Path(path)

    def record(self, error: PageError) -> None:
        """Append a failure line."""
        self.write(error.format_line())

    def write(self, message: str) -> None:
        """Append a raw message line."""
        try:
            if self.path.parent != Path('.'):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'a', encoding='utf-8') as f:
                f.write(message.rstrip('\n') + '\n')
        except OSError as e:
            logger.error(f"Failed to write to error log '{self.path}': {e}")


class NullErrorLog(ErrorLog):
    """Error log that discards everything."""

    def __init__(self):
        self.path = None

    def write(self, message: str) -> None:
        pass
