import pytest
from chomsky.symbols import *
from chomsky.grammar import ProductionRule

@pytest.mark.parametrize("ch,expected", [
    ("б", True), ("я", True), ("ъ", True),
    ("ё", False), ("Б", False), ("b", False), ("B", False), ("бв", False), ("", False), (" ", False),
])
def test_is_terminal(ch, expected):
    assert isTerminal(ch) == expected

@pytest.mark.parametrize("ch,expected", [
    ("S", True), ("A", True), ("Z", True),
    ("s", False), ("Б", False), ("AB", False), ("", False), ("1", False),
])
def test_is_non_terminal(ch, expected):
    assert isNonTerminal(ch) == expected

def test_alphabets_are_disjoint():
    assert not set(TERMINAL_ALPHABET) & set(NONTERMINAL_ALPHABET)
    assert len(TERMINAL_ALPHABET) == 32

def test_format_rule():
    assert formatRule(ProductionRule("A", "ъ")) == "A → ε"
    assert formatRule(ProductionRule("S", "б A")) == "S → б_A"

def test_format_result():
    assert formatResult("бAв") == "бAв"
    assert formatResult("б в") == "б в"
    assert formatResult("бъ") == "бε"
    assert formatResult("") == "ε"

def test_formatting_never_touches_storage():
    rule = ProductionRule("A", "ъ")
    formatRule(rule)
    assert rule.right == "ъ"

def test_symbols_of_skips_spaces():
    assert symbolsOf("б A в") == ["б", "A", "в"]
