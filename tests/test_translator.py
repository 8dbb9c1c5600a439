"""
End-to-end translation tests: worked Korean Braille samples and the
decoder-wide invariants (passthrough, round trips, line independence).
"""

from pathlib import Path

import pytest

from braille_decoder.domain.braille_tables import load_tables
from braille_decoder.domain.cells import cell_char
from braille_decoder.services.translator import BrailleTranslator, translate_to_text


@pytest.mark.samples
@pytest.mark.parametrize("cells,expected", [
    ("⠣⠒⠉⠻⠚⠠⠝⠬", "안녕하세요"),
    ("⠴⠁⠃⠉", "abc"),
    ("⠼⠁⠃⠉", "123"),
    ("⠼⠁⠀⠴⠁", "1 a"),
    ("⠦⠄⠼⠃⠚⠃⠙⠀⠉⠡⠀⠈⠍⠗⠠⠭⠠⠴", "(2024년 귀속)"),
    ("⠘⠂⠈⠪⠃⠘⠾⠚⠥⠐⠂", "발급번호:"),
    ("⠠⠥⠊⠪⠁⠈⠪⠢⠗⠁⠨⠪⠶⠑⠻⠦⠄⠼⠃⠚⠃⠙⠀⠉⠡⠀⠈⠍⠗⠠⠭⠠⠴", "소득금액증명(2024년 귀속)"),
])
def test_korean_braille_samples(translator, cells, expected):
    assert translator.translate(cells) == expected


@pytest.mark.properties
@pytest.mark.parametrize("text", ["", "Hello, 世界! 123", "plain\ntext\n", "가나다"])
def test_text_without_braille_passes_through(translator, text):
    assert translator.translate(text) == text


@pytest.mark.properties
def test_letter_round_trip(translator, tables):
    start = cell_char(tables.english_indicator)
    end = cell_char(tables.english_terminator)
    for dot, letter in tables.letters.items():
        assert translator.translate(start + cell_char(dot) + end) == letter


@pytest.mark.properties
def test_digit_round_trip(translator, tables):
    start = cell_char(tables.number_indicator)
    decoded = {translator.translate(start + cell_char(dot)) for dot in tables.digits}
    assert decoded == set("0123456789")


@pytest.mark.properties
def test_uppercase_word_ends_at_space(translator):
    assert translator.translate("⠴⠠⠠⠁⠃⠀") == "AB "
    assert translator.translate("⠴⠠⠠⠁⠃⠀⠁⠃") == "AB ab"


@pytest.mark.properties
def test_space_elision_after_numbers(translator):
    assert translator.translate("⠼⠃⠚⠀⠈⠣") == "20가"
    assert translator.translate("⠼⠃⠚⠀⠴⠁") == "20 a"


@pytest.mark.properties
def test_shortcut_and_trailing_consonant_fuse(translator):
    assert translator.translate("⠊⠂") == "달"
    assert len(translator.translate("⠊⠂")) == 1


@pytest.mark.properties
@pytest.mark.parametrize("line_a,line_b", [
    ("⠼⠁", "⠁"),
    ("⠴⠁", "⠁"),
    ("⠴⠠⠠⠁", "⠁"),
    ("⠈", "⠣"),
    ("⠈⠣", "⠒"),
    ("⠉", "⠻"),
    ("⠼⠁⠀", "⠈⠣"),
])
def test_lines_are_independent(translator, line_a, line_b):
    joined = translator.translate(line_a + "\n" + line_b)
    assert joined == translator.translate(line_a) + "\n" + translator.translate(line_b)


def test_newlines_preserved_one_to_one(translator):
    assert translator.translate("⠈⠣\n\n⠼⠁\n") == "가\n\n1\n"


def test_translate_line(translator):
    assert translator.translate_line("⠘⠂") == "발"


def test_module_level_translate():
    assert translate_to_text("⠣⠒⠉⠻") == "안녕"


def test_translator_uses_injected_tables(tmp_path: Path):
    path = tmp_path / "tables.yaml"
    path.write_text('letters:\n  "⠁": "α"\n', encoding="utf-8")
    translator = BrailleTranslator(load_tables(path))
    assert translator.translate("⠴⠁") == "α"
    # ⠃ is no longer a letter, so it falls through to the Korean final ㅂ
    assert translator.translate("⠴⠁⠃") == "αㅂ"
    assert translator.tables.letters[1] == "α"


def test_shared_translator_across_threads(translator):
    from concurrent.futures import ThreadPoolExecutor

    lines = ["⠣⠒⠉⠻⠚⠠⠝⠬", "⠼⠁⠃⠉", "⠴⠠⠠⠁⠃"] * 20
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(translator.translate, lines))
    assert results == ["안녕하세요", "123", "AB"] * 20
