from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final, Mapping

import yaml

from braille_decoder.domain.cells import parse_cells
from braille_decoder.domain.hangul_compose import FILLER_CHOSEONG

logger = logging.getLogger(__name__)

TABLES_ENV_VAR: Final[str] = "BRAILLE_DECODER_TABLES"


# ---------------------------------------------------------------------
# Defaults (standard Korean Braille; used if YAML is missing or malformed)
# ---------------------------------------------------------------------

_DEFAULT_CHOSEONG: Final[dict[str, str]] = {
    "⠈": "ㄱ", "⠉": "ㄴ", "⠊": "ㄷ", "⠐": "ㄹ", "⠑": "ㅁ", "⠘": "ㅂ", "⠠": "ㅅ",
    # ㅇ has no initial form: vowel-initial syllables take the filler
    "⠨": "ㅈ", "⠰": "ㅊ", "⠋": "ㅋ", "⠓": "ㅌ", "⠙": "ㅍ", "⠚": "ㅎ",
}

_DEFAULT_JONGSEONG: Final[dict[str, str]] = {
    "⠁": "ㄱ", "⠒": "ㄴ", "⠔": "ㄷ", "⠂": "ㄹ", "⠢": "ㅁ", "⠃": "ㅂ", "⠄": "ㅅ", "⠌": "ㅆ",
    "⠶": "ㅇ", "⠅": "ㅈ", "⠆": "ㅊ", "⠖": "ㅋ", "⠦": "ㅌ", "⠲": "ㅍ", "⠴": "ㅎ",
}

_DEFAULT_JUNGSEONG: Final[dict[str, str]] = {
    "⠣": "ㅏ", "⠜": "ㅑ", "⠎": "ㅓ", "⠱": "ㅕ", "⠥": "ㅗ", "⠬": "ㅛ", "⠍": "ㅜ",
    "⠩": "ㅠ", "⠪": "ㅡ", "⠕": "ㅣ", "⠗": "ㅐ", "⠝": "ㅔ", "⠌": "ㅖ", "⠧": "ㅘ",
    "⠽": "ㅚ", "⠏": "ㅝ", "⠺": "ㅢ",
    "⠜⠗": "ㅒ", "⠧⠗": "ㅙ", "⠏⠗": "ㅞ", "⠍⠗": "ㅟ",
}

_DEFAULT_SHORTCUTS: Final[dict[str, str]] = {
    "⠫": "가", "⠉": "나", "⠊": "다", "⠑": "마", "⠘": "바", "⠇": "사",
    "⠨": "자", "⠋": "카", "⠓": "타", "⠙": "파", "⠚": "하",
    "⠹": "억", "⠾": "언", "⠞": "얼", "⠡": "연", "⠳": "열", "⠻": "영",
    "⠭": "옥", "⠷": "온", "⠿": "옹", "⠛": "운", "⠯": "울", "⠵": "은",
    "⠮": "을", "⠟": "인",
    "⠸⠎": "것",
    # ⠻ after ㅅ/ㅈ/ㅊ reads 엉, not 영
    "⠠⠻": "성", "⠨⠻": "정", "⠰⠻": "청",
}

_DEFAULT_SYMBOLS: Final[dict[str, str]] = {
    "⠖": "!",
    "⠲": ".",
    "⠐": ",",
    "⠐⠂": ":",
    "⠰⠆": ";",
    "⠤": "-",
    "⠤⠤": "―",
    # ⠦ doubles as "?"; the quotation mark reading is the one kept
    "⠦": '"',
    "⠴": '"',
    "⠠⠦": "'",
    "⠈⠔": "~",
    "⠲⠲⠲": "…",
    "⠠⠠⠠": "⋯",
    "⠦⠄": "(",
    "⠠⠴": ")",
    "⠦⠂": "{",
    "⠐⠴": "}",
    "⠦⠆": "[",
    "⠰⠴": "]",
    "⠐⠆": "·",
    "⠐⠦": "「",
    "⠴⠂": "」",
    "⠰⠦": "『",
    "⠴⠆": "』",
    "⠸⠌": "/",
    "⠐⠶": "〈",
    "⠶⠂": "〉",
    "⠰⠶": "《",
    "⠶⠆": "》",
}

_DEFAULT_LETTERS: Final[dict[str, str]] = {
    "⠁": "a", "⠃": "b", "⠉": "c", "⠙": "d", "⠑": "e", "⠋": "f", "⠛": "g",
    "⠓": "h", "⠊": "i", "⠚": "j", "⠅": "k", "⠇": "l", "⠍": "m", "⠝": "n",
    "⠕": "o", "⠏": "p", "⠟": "q", "⠗": "r", "⠎": "s", "⠞": "t", "⠥": "u",
    "⠧": "v", "⠺": "w", "⠭": "x", "⠽": "y", "⠵": "z",
}

_DEFAULT_DIGITS: Final[dict[str, str]] = {
    "⠁": "1", "⠃": "2", "⠉": "3", "⠙": "4", "⠑": "5",
    "⠋": "6", "⠛": "7", "⠓": "8", "⠊": "9", "⠚": "0",
}

_DEFAULT_NUMBER_PUNCTUATION: Final[dict[str, str]] = {
    "⠂": ",",
    "⠲": ".",
    "⠤": "‐",
}

_DEFAULT_INDICATORS: Final[dict[str, str]] = {
    "number": "⠼",
    "english": "⠴",
    "english_end": "⠲",
    "uppercase": "⠠",
    "korean_part": "⠿",
    "korean_consonant": "⠸",
}

_DEFAULT_SECTIONS: Final[dict[str, Any]] = {
    "choseong": _DEFAULT_CHOSEONG,
    "jongseong": _DEFAULT_JONGSEONG,
    "jungseong": _DEFAULT_JUNGSEONG,
    "shortcuts": _DEFAULT_SHORTCUTS,
    "symbols": _DEFAULT_SYMBOLS,
    "letters": _DEFAULT_LETTERS,
    "digits": _DEFAULT_DIGITS,
    "number_punctuation": _DEFAULT_NUMBER_PUNCTUATION,
    "indicators": _DEFAULT_INDICATORS,
    "filler_choseong": FILLER_CHOSEONG,
    "footnote_cell": "⠔",
    "footnote_mark": "*",
}

_SINGLE_CELL_SECTIONS: Final[tuple[str, ...]] = (
    "choseong", "jongseong", "letters", "digits", "number_punctuation",
)
_PATTERN_SECTIONS: Final[tuple[str, ...]] = ("jungseong", "shortcuts", "symbols")


# ---------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class BrailleTables:
    """Immutable dot-pattern tables consumed by the decoder.

    Single-cell tables are keyed by dot value, multi-cell tables by a tuple of
    dot values. Mappings are frozen on construction, so one instance can be
    shared by any number of decoders.
    """

    choseong: Mapping[int, str]
    jongseong: Mapping[int, str]
    jungseong: Mapping[tuple[int, ...], str]
    shortcuts: Mapping[tuple[int, ...], str]
    symbols: Mapping[tuple[int, ...], str]
    letters: Mapping[int, str]
    digits: Mapping[int, str]
    number_punctuation: Mapping[int, str]
    number_indicator: int
    english_indicator: int
    english_terminator: int
    uppercase_indicator: int
    korean_part_indicator: int
    korean_consonant_indicator: int
    filler_choseong: str = FILLER_CHOSEONG
    footnote_cell: int = 20
    footnote_mark: str = "*"

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Mapping):
                object.__setattr__(self, f.name, MappingProxyType(dict(value)))

    @classmethod
    def from_sections(cls, sections: Mapping[str, Any]) -> "BrailleTables":
        """Build tables from the Braille-character form used in YAML files.

        Raises:
            ValueError: if a key is not a Braille pattern or a value is not text.
        """
        tables: dict[str, Any] = {}
        for name in _SINGLE_CELL_SECTIONS:
            tables[name] = _parse_single_cells(name, sections[name])
        for name in _PATTERN_SECTIONS:
            tables[name] = _parse_patterns(name, sections[name])

        indicators = sections["indicators"]
        return cls(
            number_indicator=_parse_one_cell("indicators.number", indicators["number"]),
            english_indicator=_parse_one_cell("indicators.english", indicators["english"]),
            english_terminator=_parse_one_cell("indicators.english_end", indicators["english_end"]),
            uppercase_indicator=_parse_one_cell("indicators.uppercase", indicators["uppercase"]),
            korean_part_indicator=_parse_one_cell("indicators.korean_part", indicators["korean_part"]),
            korean_consonant_indicator=_parse_one_cell(
                "indicators.korean_consonant", indicators["korean_consonant"]
            ),
            filler_choseong=_parse_text("filler_choseong", sections["filler_choseong"]),
            footnote_cell=_parse_one_cell("footnote_cell", sections["footnote_cell"]),
            footnote_mark=_parse_text("footnote_mark", sections["footnote_mark"]),
            **tables,
        )

    @classmethod
    def default(cls) -> "BrailleTables":
        return DEFAULT_TABLES


def _parse_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError("%s: expected non-empty text, got %r" % (name, value))
    return value


def _parse_one_cell(name: str, value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < 64:
        return value
    dots = parse_cells(_parse_text(name, value))
    if len(dots) != 1:
        raise ValueError("%s: expected exactly one cell, got %r" % (name, value))
    return dots[0]


def _parse_patterns(name: str, raw: Any) -> dict[tuple[int, ...], str]:
    if not isinstance(raw, Mapping):
        raise ValueError("%s: expected a mapping, got %s" % (name, type(raw).__name__))
    parsed: dict[tuple[int, ...], str] = {}
    for key, text in raw.items():
        dots = parse_cells(_parse_text(name, key))
        parsed[dots] = _parse_text("%s[%s]" % (name, key), text)
    return parsed


def _parse_single_cells(name: str, raw: Any) -> dict[int, str]:
    parsed: dict[int, str] = {}
    for dots, text in _parse_patterns(name, raw).items():
        if len(dots) != 1:
            raise ValueError("%s: expected single-cell keys" % (name,))
        parsed[dots[0]] = text
    return parsed


DEFAULT_TABLES: Final[BrailleTables] = BrailleTables.from_sections(_DEFAULT_SECTIONS)


# ---------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------

_YAML_CACHE: dict[str, Any] | None = None
_YAML_CACHE_PATH: Path | None = None
_YAML_CACHE_MTIME_NS: int | None = None


def _resolve_path(path: str | Path | None) -> Path | None:
    if path is None:
        env = os.environ.get(TABLES_ENV_VAR, "").strip()
        if not env:
            return None
        path = env
    return Path(path).expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a tables YAML file.

    Failure is non-fatal; defaults will be used.
    """
    global _YAML_CACHE, _YAML_CACHE_PATH, _YAML_CACHE_MTIME_NS

    try:
        if not path.exists():
            logger.warning("Braille tables file not found: %s", path)
            return {}

        mtime_ns = path.stat().st_mtime_ns
        if _YAML_CACHE is not None and _YAML_CACHE_PATH == path and _YAML_CACHE_MTIME_NS == mtime_ns:
            return dict(_YAML_CACHE)

        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            parsed = data if isinstance(data, dict) else {}

        _YAML_CACHE = dict(parsed)
        _YAML_CACHE_PATH = path
        _YAML_CACHE_MTIME_NS = mtime_ns
        return dict(_YAML_CACHE)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to read Braille tables %s: %s", path, e)
        return {}


def _merge_sections(data: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay valid YAML sections on the defaults, section by section."""
    merged = dict(_DEFAULT_SECTIONS)
    for name, value in data.items():
        if name not in merged:
            logger.warning("Ignoring unknown Braille tables section %r", name)
            continue
        if name == "indicators":
            # Indicators merge key by key so a file may override just one
            if not isinstance(value, Mapping):
                logger.warning("Ignoring malformed indicators section: %r", value)
                continue
            value = {**_DEFAULT_INDICATORS, **value}
        candidate = dict(merged)
        candidate[name] = value
        try:
            BrailleTables.from_sections(candidate)
        except (ValueError, TypeError, KeyError) as e:
            logger.warning("Ignoring malformed Braille tables section %r: %s", name, e)
            continue
        merged = candidate
    return merged


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def load_tables(path: str | Path | None = None) -> BrailleTables:
    """Return the decoder tables, with YAML overrides applied if configured.

    `path` defaults to the file named by $BRAILLE_DECODER_TABLES; with neither,
    the built-in Korean Braille tables are returned.
    """
    resolved = _resolve_path(path)
    if resolved is None:
        return DEFAULT_TABLES

    data = _load_yaml(resolved)
    if not data:
        return DEFAULT_TABLES

    tables = BrailleTables.from_sections(_merge_sections(data))
    logger.debug("Loaded Braille tables from %s", resolved)
    return tables
