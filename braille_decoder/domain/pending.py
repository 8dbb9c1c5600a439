from __future__ import annotations

"""Pending Korean syllable buffer.

While jamo cells arrive one by one, at most one incomplete syllable is held
back so that a following vowel or final can still join it:

    Empty --lead--> HasCho --vowel--> HasChoJung --tail--> (emit) Empty

Every transition is a pure function returning (emitted_text, new_state).
"""

from dataclasses import dataclass
from typing import Union

from braille_decoder.domain.hangul_compose import FILLER_CHOSEONG, compose_lvt


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class HasCho:
    cho: str


@dataclass(frozen=True)
class HasChoJung:
    cho: str
    jung: str


Pending = Union[Empty, HasCho, HasChoJung]

EMPTY = Empty()

Transition = tuple[str, Pending]


def flush(pending: Pending) -> str:
    """Text the buffer stands for if nothing else arrives."""
    if isinstance(pending, HasCho):
        return pending.cho
    if isinstance(pending, HasChoJung):
        # Tables holding non-standard glyphs degrade to the raw jamo
        return compose_lvt(pending.cho, pending.jung) or pending.cho + pending.jung
    return ""


def push_lead(pending: Pending, cho: str) -> Transition:
    return flush(pending), HasCho(cho)


def push_vowel(pending: Pending, jung: str, filler: str = FILLER_CHOSEONG) -> Transition:
    if isinstance(pending, HasCho):
        return "", HasChoJung(pending.cho, jung)
    # A vowel with no consonant in front takes the silent filler
    return flush(pending), HasChoJung(filler, jung)


def push_tail(pending: Pending, jong: str) -> Transition:
    if isinstance(pending, HasChoJung):
        composed = compose_lvt(pending.cho, pending.jung, jong)
        return composed or pending.cho + pending.jung + jong, EMPTY
    return flush(pending) + jong, EMPTY
