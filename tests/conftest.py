# tests/conftest.py
import pytest

from braille_decoder.domain.braille_tables import DEFAULT_TABLES, TABLES_ENV_VAR
from braille_decoder.services.line_decoder import LineDecoder
from braille_decoder.services.translator import BrailleTranslator


@pytest.fixture(autouse=True)
def _no_tables_override(monkeypatch):
    # Never let a developer's environment change the tables under test
    monkeypatch.delenv(TABLES_ENV_VAR, raising=False)


@pytest.fixture(scope="module")
def tables():
    return DEFAULT_TABLES


@pytest.fixture(scope="module")
def decoder(tables):
    return LineDecoder(tables)


@pytest.fixture(scope="module")
def translator(tables):
    return BrailleTranslator(tables)
