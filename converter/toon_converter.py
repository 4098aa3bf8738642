"""
Convert raw JSON text into TOON and report size statistics.
"""
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional

from utils.toon_encoder import encode
import config

logger = logging.getLogger(__name__)


class InputParseError(ValueError):
    """Raised when input text is not valid JSON."""

    def __init__(self, message: str, lineno: int = 0, colno: int = 0, pos: int = 0):
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno
        self.pos = pos


def _reject_constant(name: str):
    # json.loads accepts NaN/Infinity, JSON does not
    raise ValueError(f"Unexpected token {name}")


def get_stats(text: str) -> Dict[str, int]:
    """Character count and rough token estimate for a piece of text."""
    chars = len(text)
    return {"chars": chars, "tokens": math.ceil(chars / config.CHARS_PER_TOKEN)}


def size_reduction(input_chars: int, output_chars: int) -> int:
    """
    Percentage size reduction from input to output.

    Halves round up, so 12.5 becomes 13 and -12.5 becomes -12.
    Returns 0 for empty input.
    """
    if input_chars <= 0:
        return 0
    percent = (input_chars - output_chars) / input_chars * 100
    return math.floor(percent + 0.5)


class ToonConverter:
    """Parses JSON text and encodes it as TOON."""

    def parse(self, text: str) -> Any:
        """
        Parse JSON text.

        Raises:
            InputParseError: If the text is not valid JSON
        """
        try:
            return json.loads(text, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise InputParseError(str(e), e.lineno, e.colno, e.pos) from e
        except ValueError as e:
            raise InputParseError(str(e)) from e

    def convert_text(self, text: str) -> str:
        """
        Convert JSON text to TOON text.

        Blank input converts to an empty string.

        Raises:
            InputParseError: If the text is not valid JSON
        """
        if not text.strip():
            return ""
        return encode(self.parse(text))

    def convert(self, text: str, source: str = "<input>") -> Dict:
        """
        Convert JSON text without raising on malformed input.

        Args:
            text: Raw JSON text
            source: Name of the input, used in log messages

        Returns:
            Dictionary with the TOON output (None on failure), the parse
            error message (None on success) and size statistics
        """
        output: Optional[str] = None
        error: Optional[str] = None
        try:
            output = self.convert_text(text)
        except InputParseError as e:
            error = str(e)
            logger.warning(f"Invalid JSON in {source}: {error}")

        input_stats = get_stats(text)
        output_stats = get_stats(output or "")
        return {
            "source": source,
            "output": output,
            "error": error,
            "input_stats": input_stats,
            "output_stats": output_stats,
            "reduction": size_reduction(input_stats["chars"], output_stats["chars"]) if output is not None else 0,
        }

    def save_to_toon(self, output: str, output_file: str):
        """
        Save TOON text to a file.

        Args:
            output: TOON text
            output_file: Path to the output file
        """
        path = Path(output_file)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8', errors='backslashreplace') as f:
                f.write(output + '\n')
            logger.info(f"Saved TOON output to {path}")
        except OSError as e:
            logger.error(f"Failed to save to {path}: {e}")
            raise
