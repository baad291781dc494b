import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ContentParser:
    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def get_markdown_content(self, path: Path) -> str | None:
        """Get the full markdown content of a post file (decoded as text)."""
        raw = self.get_binary_content(path)
        if raw is None:
            return None
        try:
            text = raw.decode(self.encoding)
        except UnicodeDecodeError:
            logger.warning(f"{path} is not valid {self.encoding}, replacing bad bytes")
            text = raw.decode(self.encoding, errors="replace")
        return text.lstrip("\ufeff")

    def get_binary_content(self, path: Path) -> bytes | None:
        """Get the raw bytes of a file, or None when it cannot be read."""
        try:
            return Path(path).read_bytes()
        except FileNotFoundError:
            logger.warning(f"Post file not found: {path}")
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
        return None
