"""Loads URL suffixes for file-mode runs."""
import logging
from pathlib import Path
from typing import List, Union

from .exceptions import SuffixFileError


# Configure logging
logger = logging.getLogger(__name__)


class SuffixLoader:
    """Reads the ordered list of URL suffixes from a text file."""

    @staticmethod
    def load_suffixes(path: Union[Path, str]) -> List[str]:
        """
        Read one URL suffix per line, skipping blank lines.

        Args:
            path: Path to the suffix file.

        Returns:
            Suffixes in file order.

        Raises:
            SuffixFileError: If the file cannot be read or holds no suffixes.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read URL suffix file {path}: {e}")
            raise SuffixFileError(f"Unable to read URL suffix file {path}") from e

        suffixes = [line.strip() for line in text.splitlines() if line.strip()]
        if not suffixes:
            raise SuffixFileError(f"URL suffix file {path} contains no entries")

        logger.info(f"Loaded {len(suffixes)} URL suffixes from {path}")
        return suffixes
