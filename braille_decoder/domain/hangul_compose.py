from __future__ import annotations

"""Hangul composition helpers (domain layer).

It centralises:
- Hangul Jamo ordering constants (compatibility jamo)
- Pure functions for composing / decomposing LVT syllables
- The splice helpers used when Braille shortcuts meet pending jamo

Primary API:
- compose(cho, jung, jong) / decompose(syllable)  (Unicode indices)
- compose_lvt(lead, vowel, tail) / decompose_lvt(syllable)  (compatibility jamo)
"""

from typing import Final, Optional


# -----------------------------------------------------------------------------
# Domain data: compatibility jamo ordering
# -----------------------------------------------------------------------------

# Leading consonants (Choseong) in standard Unicode Hangul order
CHOSEONG: Final[tuple[str, ...]] = (
    "ㄱ", "ㄲ", "ㄴ", "ㄷ", "ㄸ", "ㄹ", "ㅁ", "ㅂ", "ㅃ",
    "ㅅ", "ㅆ", "ㅇ", "ㅈ", "ㅉ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)

# Vowels (Jungseong) in standard Unicode Hangul order
JUNGSEONG: Final[tuple[str, ...]] = (
    "ㅏ", "ㅐ", "ㅑ", "ㅒ", "ㅓ", "ㅔ", "ㅕ", "ㅖ",
    "ㅗ", "ㅘ", "ㅙ", "ㅚ", "ㅛ",
    "ㅜ", "ㅝ", "ㅞ", "ㅟ", "ㅠ",
    "ㅡ", "ㅢ", "ㅣ",
)

# Trailing consonants (Jongseong) in standard Unicode Hangul order
# Index 0 is "no final"
JONGSEONG: Final[tuple[str, ...]] = (
    "",
    "ㄱ", "ㄲ", "ㄳ",
    "ㄴ", "ㄵ", "ㄶ",
    "ㄷ",
    "ㄹ", "ㄺ", "ㄻ", "ㄼ", "ㄽ", "ㄾ", "ㄿ", "ㅀ",
    "ㅁ",
    "ㅂ", "ㅄ",
    "ㅅ", "ㅆ",
    "ㅇ",
    "ㅈ", "ㅊ",
    "ㅋ",
    "ㅌ",
    "ㅍ",
    "ㅎ",
)

# Two single finals written in sequence that form one compound final
COMPOUND_JONGSEONG: Final[dict[tuple[str, str], str]] = {
    ("ㄱ", "ㅅ"): "ㄳ",
    ("ㄴ", "ㅈ"): "ㄵ",
    ("ㄴ", "ㅎ"): "ㄶ",
    ("ㄹ", "ㄱ"): "ㄺ",
    ("ㄹ", "ㅁ"): "ㄻ",
    ("ㄹ", "ㅂ"): "ㄼ",
    ("ㄹ", "ㅅ"): "ㄽ",
    ("ㄹ", "ㅌ"): "ㄾ",
    ("ㄹ", "ㅍ"): "ㄿ",
    ("ㄹ", "ㅎ"): "ㅀ",
    ("ㅂ", "ㅅ"): "ㅄ",
}

# Silent leading consonant of vowel-initial syllables
FILLER_CHOSEONG: Final[str] = "ㅇ"

S_BASE: Final[int] = 0xAC00
V_COUNT: Final[int] = 21
T_COUNT: Final[int] = 28
S_COUNT: Final[int] = len(CHOSEONG) * V_COUNT * T_COUNT


# -----------------------------------------------------------------------------
# Internal lookup maps
# -----------------------------------------------------------------------------

_CHO_MAP: Final[dict[str, int]] = {j: i for i, j in enumerate(CHOSEONG)}
_JUNG_MAP: Final[dict[str, int]] = {j: i for i, j in enumerate(JUNGSEONG)}
_JONG_MAP: Final[dict[str, int]] = {j: i for i, j in enumerate(JONGSEONG)}


# -----------------------------------------------------------------------------
# Index-level composition
# -----------------------------------------------------------------------------

def compose(cho: int, jung: int, jong: int = 0) -> str:
    """Compose a Hangul syllable from Unicode jamo indices.

    Raises:
        ValueError: if any index is outside its range.
    """
    if not (0 <= cho < len(CHOSEONG) and 0 <= jung < V_COUNT and 0 <= jong < T_COUNT):
        raise ValueError("Invalid jamo indices: cho=%r jung=%r jong=%r" % (cho, jung, jong))
    return chr(S_BASE + (cho * V_COUNT + jung) * T_COUNT + jong)


def decompose(syllable: str) -> Optional[tuple[int, int, int]]:
    """Split a precomposed syllable into (cho, jung, jong) indices.

    Returns None when `syllable` is not exactly one Hangul syllable.
    """
    if not isinstance(syllable, str) or len(syllable) != 1:
        return None
    offset = ord(syllable) - S_BASE
    if not 0 <= offset < S_COUNT:
        return None
    return offset // (V_COUNT * T_COUNT), (offset % (V_COUNT * T_COUNT)) // T_COUNT, offset % T_COUNT


# -----------------------------------------------------------------------------
# Jamo-level composition
# -----------------------------------------------------------------------------

def compose_lvt(lead: str, vowel: str, tail: str = "") -> str:
    """Compose a Hangul syllable from compatibility jamo.

    Args:
        lead: choseong (e.g., "ㄱ")
        vowel: jungseong (e.g., "ㅏ")
        tail: jongseong (e.g., "ㄴ") or "" for no final

    Returns:
        A composed Hangul syllable (e.g., "간") or "" if inputs are invalid.
    """
    l = (lead or "").strip()
    v = (vowel or "").strip()
    t = (tail or "").strip()

    if not l or not v:
        return ""

    li = _CHO_MAP.get(l)
    vi = _JUNG_MAP.get(v)
    ti = _JONG_MAP.get(t)

    if li is None or vi is None or ti is None:
        return ""

    return compose(li, vi, ti)


def decompose_lvt(syllable: str) -> Optional[tuple[str, str, str]]:
    """Return (lead, vowel, tail) compatibility jamo; tail is "" for no final."""
    parts = decompose(syllable)
    if parts is None:
        return None
    li, vi, ti = parts
    return CHOSEONG[li], JUNGSEONG[vi], JONGSEONG[ti]


def combine_trailing(first: str, second: str) -> Optional[str]:
    """Return the compound final for two finals written in sequence, if any."""
    return COMPOUND_JONGSEONG.get((first, second))


def reattach_trailing(syllable: str, tail: str) -> Optional[str]:
    """Replace the final of `syllable` with `tail`.

    Returns None when `syllable` is not a Hangul syllable or `tail` is not a final.
    """
    parts = decompose(syllable)
    ti = _JONG_MAP.get(tail)
    if parts is None or ti is None:
        return None
    li, vi, _ = parts
    return compose(li, vi, ti)


def replace_leading(syllable: str, lead: str, filler: str = FILLER_CHOSEONG) -> Optional[str]:
    """Swap the silent leading consonant of `syllable` for `lead`.

    Used when a bare consonant precedes a vowel-initial shortcut (ㄴ + 영 -> 녕).
    Returns None unless `syllable` starts with `filler` and `lead` is a choseong.
    """
    parts = decompose_lvt(syllable)
    if parts is None or parts[0] != filler:
        return None
    result = compose_lvt(lead, parts[1], parts[2])
    return result or None
