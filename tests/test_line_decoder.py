"""
Rule-by-rule tests for the line decoder state machine.

Each case exercises one dispatch rule (or one override inside a rule) on the
default Korean Braille tables.
"""

import dataclasses

import pytest

from braille_decoder.domain.braille_tables import DEFAULT_TABLES
from braille_decoder.services.line_decoder import LineDecoder


@pytest.mark.parametrize("cells,expected", [
    ("a⠁b", "aㄱb"),
    ("⠼⠁-⠁", "1-ㄱ"),
    ("⠈⠣ ⠈⠣", "가 가"),
])
def test_passthrough_characters(decoder, cells, expected):
    assert decoder.decode(cells) == expected


def test_newline_inside_line_is_kept(decoder):
    assert decoder.decode("⠼⠁\n⠁") == "1\nㄱ"


@pytest.mark.parametrize("cells,expected", [
    ("⠼⠁⠃⠉", "123"),
    ("⠼⠁⠂⠃", "1,2"),
    ("⠼⠁⠲⠃", "1.2"),
    ("⠼⠁⠤⠃", "1‐2"),
    ("⠼⠁⠸⠔", "1*"),
    ("⠼⠁⠸⠔⠔⠔", "1***"),
    ("⠼⠁⠣", "1아"),
    ("⠼⠁⠸⠁", "1ㄱ"),
    ("⠈⠣⠼⠁", "가1"),
])
def test_number_mode(decoder, cells, expected):
    assert decoder.decode(cells) == expected


@pytest.mark.parametrize("cells,expected", [
    ("⠼⠁⠃⠀⠈⠣", "12가"),
    ("⠼⠁⠃⠀⠉⠡", "12년"),
    ("⠼⠁⠀⠁", "1ㄱ"),
    ("⠼⠁⠃⠀⠴⠁", "12 a"),
    ("⠼⠁⠀⠼⠃", "1 2"),
    ("⠼⠁⠀", "1 "),
    ("⠈⠣⠀⠈⠣", "가 가"),
])
def test_space(decoder, cells, expected):
    assert decoder.decode(cells) == expected


@pytest.mark.parametrize("cells,expected", [
    ("⠴⠁⠃⠉", "abc"),
    ("⠴⠁⠲⠁", "aㄱ"),
    ("⠴⠠⠁⠃", "Ab"),
    ("⠴⠠⠠⠁⠃⠀⠉", "AB c"),
    ("⠴⠠⠠⠁⠃⠲⠉", "AB나"),
    ("⠴⠠⠠⠁⠤⠃", "A-B"),
    ("⠴⠠⠠⠁⠿⠃", "AB"),
    ("⠴⠁⠖", "a!"),
    ("⠲", "."),
])
def test_english_mode(decoder, cells, expected):
    assert decoder.decode(cells) == expected


@pytest.mark.parametrize("cells,expected", [
    ("⠐", ","),
    ("⠐⠂", ":"),
    ("⠐⠣", "라"),
    ("⠐⠻", "령"),
    ("⠠⠴", ")"),
    ("⠠⠠⠠", "⋯"),
    ("⠰⠆", ";"),
    ("⠦⠄", "("),
    ("⠤⠤", "―"),
])
def test_symbols_and_consonant_collisions(decoder, cells, expected):
    assert decoder.decode(cells) == expected


@pytest.mark.parametrize("cells,expected", [
    ("⠚", "하"),
    ("⠸⠎", "것"),
    ("⠠⠻", "성"),
    ("⠉⠻", "녕"),
    ("⠑⠻", "명"),
    ("⠊⠪", "드"),
    ("⠈⠫", "ㄱ가"),
])
def test_shortcuts(decoder, cells, expected):
    assert decoder.decode(cells) == expected


@pytest.mark.parametrize("cells,expected", [
    ("⠘⠂", "발"),
    ("⠫⠁", "각"),
    ("⠾⠅", "얹"),
    ("⠹⠄", "얷"),
    ("⠹⠂", "억ㄹ"),
    ("⠊⠲", "닾"),
])
def test_shortcut_takes_trailing_consonant(decoder, cells, expected):
    assert decoder.decode(cells) == expected


@pytest.mark.parametrize("cells,expected", [
    ("⠨⠴⠁", "자a"),
    ("⠨⠣⠴⠁", "자a"),
    ("⠉⠴⠁⠃", "나ab"),
])
def test_english_indicator_is_not_a_trailing_consonant(decoder, cells, expected):
    assert decoder.decode(cells) == expected


@pytest.mark.parametrize("cells,expected", [
    ("⠈", "ㄱ"),
    ("⠣", "아"),
    ("⠈⠣⠒", "간"),
    ("⠈⠣⠣", "가아"),
    ("⠈⠁", "ㄱㄱ"),
    ("⠍⠗", "위"),
    ("⠈⠍⠗⠠⠭", "귀속"),
    ("⠠⠝⠬", "세요"),
])
def test_jamo_composition(decoder, cells, expected):
    assert decoder.decode(cells) == expected


@pytest.mark.parametrize("cells,expected", [
    ("⠸⠈", "ㄱ"),
    ("⠸⠁", "ㄱ"),
    ("⠸⠣", "아"),
    ("⠸", ""),
])
def test_korean_indicators(decoder, cells, expected):
    assert decoder.decode(cells) == expected


def test_part_indicator_without_its_shortcut():
    part = DEFAULT_TABLES.korean_part_indicator
    shortcuts = {key: text for key, text in DEFAULT_TABLES.shortcuts.items() if key != (part,)}
    decoder = LineDecoder(dataclasses.replace(DEFAULT_TABLES, shortcuts=shortcuts))
    assert decoder.decode("⠿⠈") == "ㄱ"
    assert decoder.decode("⠿⠁") == "ㄱ"
    assert decoder.decode("⠿") == ""


def test_unknown_cell_is_dropped():
    tables = dataclasses.replace(DEFAULT_TABLES, jongseong={})
    decoder = LineDecoder(tables)
    assert decoder.decode("⠈⠣⠁⠈⠣") == "가가"


def test_decoder_state_is_per_call(decoder):
    assert decoder.decode("⠴⠁") == "a"
    assert decoder.decode("⠁") == "ㄱ"
    assert decoder.decode("⠼⠁") == "1"
    assert decoder.decode("⠈") == "ㄱ"
