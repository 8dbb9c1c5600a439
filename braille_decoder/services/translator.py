from __future__ import annotations

import logging
from typing import Optional

from braille_decoder.domain.braille_tables import BrailleTables, load_tables
from braille_decoder.services.line_decoder import LineDecoder

logger = logging.getLogger(__name__)


class BrailleTranslator:
    """Translate Unicode Braille text into Korean / English text.

    Responsibilities:
      - Split the input on newlines
      - Decode every line independently (no mode leaks across lines)
      - Rejoin the decoded lines in order

    Notes:
      - Tables default to load_tables(), i.e. the built-in Korean Braille
        tables unless $BRAILLE_DECODER_TABLES points at a YAML override.
    """

    def __init__(self, tables: Optional[BrailleTables] = None) -> None:
        if tables is None:
            tables = load_tables()
        self._decoder = LineDecoder(tables)

    @property
    def tables(self) -> BrailleTables:
        return self._decoder.tables

    def translate_line(self, line: str) -> str:
        return self._decoder.decode(line)

    def translate(self, text: str) -> str:
        lines = text.split("\n")
        if len(lines) > 1:
            logger.debug("Translating %d lines", len(lines))
        return "\n".join(self._decoder.decode(line) for line in lines)


_DEFAULT_TRANSLATOR: BrailleTranslator | None = None


def default_translator() -> BrailleTranslator:
    global _DEFAULT_TRANSLATOR
    if _DEFAULT_TRANSLATOR is None:
        _DEFAULT_TRANSLATOR = BrailleTranslator()
    return _DEFAULT_TRANSLATOR


def translate_to_text(text: str) -> str:
    """Translate with the shared default translator."""
    return default_translator().translate(text)
