from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from braille_decoder.domain import pending as buf
from braille_decoder.domain.braille_tables import BrailleTables
from braille_decoder.domain.cells import BLANK, NEWLINE, NOT_BRAILLE, normalize
from braille_decoder.domain.hangul_compose import combine_trailing, decompose_lvt, reattach_trailing, replace_leading
from braille_decoder.domain.pattern_index import PatternIndex

logger = logging.getLogger(__name__)


@dataclass
class DecodeCursor:
    """Mutable scan state for one line. Never shared between calls."""

    source: str
    dots: list[int]
    pos: int = 0
    english: bool = False
    number: bool = False
    caps_next: bool = False
    caps_word: bool = False
    pending: buf.Pending = buf.EMPTY
    out: list[str] = field(default_factory=list)

    @property
    def dot(self) -> int:
        return self.dots[self.pos]

    def peek(self, offset: int = 1) -> Optional[int]:
        idx = self.pos + offset
        if 0 <= idx < len(self.dots):
            return self.dots[idx]
        return None

    def emit(self, text: str) -> None:
        if text:
            self.out.append(text)

    def flush(self) -> None:
        self.emit(buf.flush(self.pending))
        self.pending = buf.EMPTY

    def apply(self, transition: buf.Transition) -> None:
        emitted, self.pending = transition
        self.emit(emitted)


Rule = Callable[[DecodeCursor], bool]


class LineDecoder:
    """Decode one line of Braille cells into text.

    Each rule inspects the cell under the cursor and either consumes it
    (returning True) or declines (returning False). Rules are tried in a
    fixed priority order; the first rule that consumes wins.

    The three pattern indexes are built once here and never mutated, so an
    instance can be shared; all per-line state lives in DecodeCursor.
    """

    def __init__(self, tables: BrailleTables) -> None:
        self._tables = tables
        self._vowels = PatternIndex.build(tables.jungseong.items())
        self._shortcuts = PatternIndex.build(tables.shortcuts.items())
        self._symbols = PatternIndex.build(tables.symbols.items())

        self._rules: tuple[Rule, ...] = (
            self._passthrough,
            self._number_indicator,
            self._english_indicator,
            self._english_terminator,
            self._space,
            self._number_run,
            self._english_run,
            self._symbol,
            self._shortcut,
            self._leading,
            self._vowel,
            self._trailing,
            self._korean_indicator,
        )

    @property
    def tables(self) -> BrailleTables:
        return self._tables

    def decode(self, line: str) -> str:
        cursor = DecodeCursor(source=line, dots=normalize(line))
        while cursor.pos < len(cursor.dots):
            for rule in self._rules:
                if rule(cursor):
                    break
            else:
                self._drop(cursor)
        cursor.flush()
        return "".join(cursor.out)

    # ---------------------------
    # Lookahead helpers
    # ---------------------------

    def _korean_follows(self, cursor: DecodeCursor, index: int) -> bool:
        """True if a vowel cluster or a shortcut starts at `index`."""
        return (
            self._vowels.match(cursor.dots, index) is not None
            or self._shortcuts.match(cursor.dots, index) is not None
        )

    def _starts_korean_unit(self, cursor: DecodeCursor, index: int) -> bool:
        if not 0 <= index < len(cursor.dots):
            return False
        dot = cursor.dots[index]
        if dot == self._tables.english_indicator:
            return False
        return (
            dot in self._tables.choseong
            or dot in self._tables.jongseong
            or self._korean_follows(cursor, index)
        )

    # ---------------------------
    # Rules, in priority order
    # ---------------------------

    def _passthrough(self, c: DecodeCursor) -> bool:
        if c.dot not in (NOT_BRAILLE, NEWLINE):
            return False
        c.flush()
        c.emit("\n" if c.dot == NEWLINE else c.source[c.pos])
        c.number = False
        c.pos += 1
        return True

    def _number_indicator(self, c: DecodeCursor) -> bool:
        if c.dot != self._tables.number_indicator:
            return False
        c.flush()
        c.number = True
        c.pos += 1
        return True

    def _english_indicator(self, c: DecodeCursor) -> bool:
        if c.dot != self._tables.english_indicator:
            return False
        c.flush()
        c.english = True
        c.pos += 1
        return True

    def _english_terminator(self, c: DecodeCursor) -> bool:
        if not c.english or c.dot != self._tables.english_terminator:
            return False
        c.flush()
        c.english = False
        c.caps_next = c.caps_word = False
        c.pos += 1
        return True

    def _space(self, c: DecodeCursor) -> bool:
        if c.dot != BLANK:
            return False
        c.flush()
        c.caps_next = c.caps_word = False
        # A blank between a numeral and the Korean word after it is layout only
        elided = c.number and self._starts_korean_unit(c, c.pos + 1)
        if not elided:
            c.emit(" ")
        c.number = False
        c.pos += 1
        return True

    def _number_run(self, c: DecodeCursor) -> bool:
        if not c.number:
            return False
        t = self._tables
        text = t.digits.get(c.dot) or t.number_punctuation.get(c.dot)
        if text is not None:
            c.emit(text)
            c.pos += 1
            return True
        if c.dot == t.korean_consonant_indicator:
            marks = 0
            while c.peek(marks + 1) == t.footnote_cell:
                marks += 1
            if marks:
                c.emit(t.footnote_mark * marks)
                c.pos += 1 + marks
                return True
        c.number = False
        return False

    def _english_run(self, c: DecodeCursor) -> bool:
        if not c.english:
            return False
        t = self._tables
        if c.dot == t.uppercase_indicator:
            c.flush()
            if c.peek() == t.uppercase_indicator:
                c.caps_word = True
                c.pos += 2
            else:
                c.caps_next = True
                c.pos += 1
            return True

        letter = t.letters.get(c.dot)
        if letter is not None:
            c.flush()
            c.emit(letter.upper() if c.caps_word or c.caps_next else letter)
            c.caps_next = False
            c.pos += 1
            return True

        if c.caps_word:
            c.flush()
            entry = self._symbols.match(c.dots, c.pos)
            if entry is not None:
                c.emit(entry.text)
                c.pos += entry.length
            else:
                logger.debug("Skipping unmapped cell %d in uppercase word", c.dot)
                c.pos += 1
            return True
        return False

    def _symbol(self, c: DecodeCursor) -> bool:
        entry = self._symbols.match(c.dots, c.pos)
        if entry is None:
            return False
        # Punctuation cells that are also initials read as Korean when a
        # syllable continues right after them
        if c.dot in self._tables.choseong and self._korean_follows(c, c.pos + 1):
            return self._leading(c)
        c.flush()
        c.emit(entry.text)
        c.pos += entry.length
        return True

    def _shortcut(self, c: DecodeCursor) -> bool:
        t = self._tables
        entry = self._shortcuts.match(c.dots, c.pos)
        if entry is None:
            return False

        if isinstance(c.pending, buf.HasCho):
            spliced = replace_leading(entry.text, c.pending.cho, t.filler_choseong)
            if spliced is not None:
                c.pending = buf.EMPTY
                c.emit(spliced)
                c.pos += entry.length
                return True

        after = c.pos + entry.length
        if entry.length == 1 and c.dot in t.choseong and self._korean_follows(c, after):
            # Not yet a whole syllable: only the initial of one still being spelled
            return self._leading(c)

        tail = None
        # The English indicator outranks its final-consonant reading
        if after < len(c.dots) and c.dots[after] != t.english_indicator:
            tail = t.jongseong.get(c.dots[after])
        if tail is not None:
            fused = self._attach_trailing(entry.text, tail)
            if fused is not None:
                c.flush()
                c.emit(fused)
                c.pos = after + 1
                return True

        c.flush()
        c.emit(entry.text)
        c.pos = after
        return True

    def _leading(self, c: DecodeCursor) -> bool:
        cho = self._tables.choseong.get(c.dot)
        if cho is None:
            return False
        c.apply(buf.push_lead(c.pending, cho))
        c.pos += 1
        return True

    def _vowel(self, c: DecodeCursor) -> bool:
        entry = self._vowels.match(c.dots, c.pos)
        if entry is None:
            return False
        c.apply(buf.push_vowel(c.pending, entry.text, self._tables.filler_choseong))
        c.pos += entry.length
        return True

    def _trailing(self, c: DecodeCursor) -> bool:
        jong = self._tables.jongseong.get(c.dot)
        if jong is None:
            return False
        c.apply(buf.push_tail(c.pending, jong))
        c.pos += 1
        return True

    def _korean_indicator(self, c: DecodeCursor) -> bool:
        t = self._tables
        if c.dot not in (t.korean_part_indicator, t.korean_consonant_indicator):
            return False
        c.flush()
        nxt = c.peek()
        glyph = None
        if nxt is not None:
            glyph = t.choseong.get(nxt) or t.jongseong.get(nxt)
        if glyph:
            c.emit(glyph)
            c.pos += 2
        else:
            logger.debug("Indicator %d not followed by a consonant at %d", c.dot, c.pos)
            c.pos += 1
        return True

    def _drop(self, c: DecodeCursor) -> None:
        logger.debug("Dropping unknown cell %d at %d", c.dot, c.pos)
        c.flush()
        c.pos += 1

    # ---------------------------
    # Composition helpers
    # ---------------------------

    @staticmethod
    def _attach_trailing(syllable: str, tail: str) -> Optional[str]:
        """Close an open shortcut syllable, or extend its final to a compound."""
        parts = decompose_lvt(syllable)
        if parts is None:
            return None
        current = parts[2]
        if not current:
            return reattach_trailing(syllable, tail)
        compound = combine_trailing(current, tail)
        if compound is None:
            return None
        return reattach_trailing(syllable, compound)
