#!/usr/bin/env python3

from .config import EPSILON

# Alphabets
# #########
#
# Every symbol is exactly one character. Sentential forms are therefore plain
# strings and string positions are symbol positions; the validator rejects
# anything that would break this.

TERMINAL_ALPHABET    = "абвгдежзийклмнопрстуфхцчшщъыьэюя"
NONTERMINAL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

EPSILON_DISPLAY = "ε"
SPACE           = " "
RULE_SPACE      = "_"
RESULT_SPACE    = "\u00a0"
ARROW           = " → "

def isTerminal(ch: str) -> bool:
    return isinstance(ch, str) and len(ch) == 1 and ch in TERMINAL_ALPHABET

def isNonTerminal(ch: str) -> bool:
    return isinstance(ch, str) and len(ch) == 1 and ch in NONTERMINAL_ALPHABET

def isEpsilon(s: str) -> bool:
    return s == EPSILON

def symbolsOf(word: str) -> list[str]:
    """Split a rule body or sentential form into its symbols, skipping spaces."""
    return [ch for ch in word if ch != SPACE]

# Display
# #######
#
# Storage always holds "ъ" and plain spaces; only these two functions map them
# for presentation.

def formatRight(right: str) -> str:
    return right.replace(EPSILON, EPSILON_DISPLAY).replace(SPACE, RULE_SPACE)

def formatRule(rule) -> str:
    return rule.left + ARROW + formatRight(rule.right)

def formatResult(result: str) -> str:
    if result == "": return EPSILON_DISPLAY
    return result.replace(EPSILON, EPSILON_DISPLAY).replace(SPACE, RESULT_SPACE)
