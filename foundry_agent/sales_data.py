import logging
import os

logger = logging.getLogger(__name__)

EXPECTED_HEADER = "Month,Sales,Expenses,Profit"


class DataFileError(Exception):
    """Raised when the sales CSV file cannot be used as prompt input."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class DataFileNotFoundError(DataFileError, FileNotFoundError):
    """Raised when the sales CSV file does not exist."""

    def __init__(self, path: str):
        super().__init__(path, f"File not found: {path}")


def read_sales_data(path: str) -> str:
    """Read the sales CSV as UTF-8 text, unchanged, so it can be embedded in the prompt."""
    if not os.path.isfile(path):
        raise DataFileNotFoundError(path)

    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise DataFileError(path, f"File is not valid UTF-8: {path} ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise DataFileError(path, f"Could not read file: {path} ({e.strerror or e})") from e

    text = content.lstrip("\ufeff")
    header = text.splitlines()[0].strip() if text.strip() else ""
    if header != EXPECTED_HEADER:
        logger.warning(f"[Foundry Agent] Unexpected CSV header in {path}: {header!r} (expected {EXPECTED_HEADER!r})")
    return content
