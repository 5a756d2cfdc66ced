#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Optional

from .errors import RuleNotApplicable, NothingToUndo
from .grammar import Grammar, ProductionRule
from .logging_config import setupLogger
from .symbols import formatResult, formatRule

logger = setupLogger(__name__)

DIGITS  = "123456789"
LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
MAX_ORDINAL = len(DIGITS) + len(LETTERS)

# Derivation Data Structure
# #########################

@dataclass(frozen=True)
class DerivationStep:
    result: str
    ruleIndex: Optional[int] = None

    def __post_init__(self):
        if self.ruleIndex is not None and self.ruleIndex < 1:
            raise ValueError("DerivationStep ruleIndex is 1-based")

    def __repr__(self):
        res = formatResult(self.result)
        if self.ruleIndex is not None: res += f" ({self.ruleIndex})"
        return res

    def asdict(self):
        d = {'result': self.result}
        if self.ruleIndex is not None: d['ruleIndex'] = self.ruleIndex
        return d

@dataclass(frozen=True)
class RuleChoice:
    index: int
    rule: ProductionRule
    available: bool

    @property
    def ordinal(self):
        return self.index + 1

    @property
    def label(self):
        return ordinalLabel(self.ordinal)

    def __repr__(self):
        mark = ' ' if self.available else '-'
        return f"{mark}{self.label or '?'}: {formatRule(self.rule)}"

# Rewrite Functions
# #################

def isApplicable(rule: ProductionRule, result: str) -> bool:
    return rule.left in result

def availableRules(grammar: Grammar, result: str) -> list[RuleChoice]:
    available, unavailable = [], []
    for i, rule in enumerate(grammar.rules):
        if isApplicable(rule, result): available.append(RuleChoice(i, rule, True))
        else:                          unavailable.append(RuleChoice(i, rule, False))
    return available + unavailable

def applyRule(result: str, rule: ProductionRule, ruleIndex: int) -> DerivationStep:
    """Rewrite the leftmost occurrence of rule.left; ruleIndex is 0-based."""
    pos = result.find(rule.left)
    if pos < 0:
        raise RuleNotApplicable(f"Rule {formatRule(rule)} does not apply to {result!r}")
    newResult = result[:pos] + rule.replacement() + result[pos+len(rule.left):]
    return DerivationStep(newResult, ruleIndex + 1)

def isCompleted(grammar: Grammar, result: str) -> bool:
    nonTerms = set(grammar.nonTerminals)
    return not any(ch in nonTerms for ch in result)

def isDerivationOf(grammar: Grammar, steps) -> bool:
    """True when steps start at the start symbol and each one rewrites the one before it."""
    if not steps or steps[0] != DerivationStep(grammar.startSymbol):
        return False
    for prev, step in zip(steps, steps[1:]):
        if step.ruleIndex is None or step.ruleIndex > len(grammar): return False
        rule = grammar[step.ruleIndex-1]
        if not isApplicable(rule, prev.result): return False
        if applyRule(prev.result, rule, step.ruleIndex-1) != step: return False
    return True

# Shortcut encoding
# #################
#
# Ordinals 1-9 are digits and 10-35 are the letters A-Z. Grammars may hold up
# to 99 rules; ordinals above 35 have no shortcut.

def ordinalLabel(n: int) -> Optional[str]:
    if 1 <= n <= len(DIGITS):       return DIGITS[n-1]
    if len(DIGITS) < n <= MAX_ORDINAL: return LETTERS[n-len(DIGITS)-1]
    return None

def keyToOrdinal(key: str) -> Optional[int]:
    if not isinstance(key, str) or len(key) != 1: return None
    if key in DIGITS: return DIGITS.index(key) + 1
    up = key.upper()
    if up in LETTERS and key.isascii(): return LETTERS.index(up) + len(DIGITS) + 1
    return None

# Derivation Engine
# #################

class DerivationEngine:
    """
    Steps a derivation over a fixed grammar. The step list lives in the
    history store; the engine appends to it, truncates it and offers the
    chain to the store when the derivation completes.
    """
    grammar: Grammar

    def __init__(self, grammar, store):
        self.grammar = grammar
        self.store   = store
        self.store.bind(grammar)

    @property
    def steps(self) -> list[DerivationStep]:
        return self.store.steps

    @property
    def current(self) -> str:
        return self.steps[-1].result

    def completed(self) -> bool:
        return isCompleted(self.grammar, self.current)

    def choices(self) -> list[RuleChoice]:
        return availableRules(self.grammar, self.current)

    def apply(self, ruleIndex: int) -> DerivationStep:
        if ruleIndex < 0 or ruleIndex >= len(self.grammar):
            raise RuleNotApplicable(f"Rule index {ruleIndex} is out of range")
        if self.completed():
            raise RuleNotApplicable("Derivation is already completed")
        rule = self.grammar[ruleIndex]
        step = applyRule(self.current, rule, ruleIndex)
        self.steps.append(step)
        logger.debug("applied %s: %s", formatRule(rule), step.result)
        if self.completed():
            self.store.completed = True
            saved = self.store.addCompleted(self.steps)
            logger.info("derivation completed: %s (%s)", step.result, "saved" if saved else "duplicate")
        return step

    def applyKey(self, key: str) -> Optional[DerivationStep]:
        """Apply the rule bound to a shortcut key; unbound or unavailable keys do nothing."""
        ordinal = keyToOrdinal(key)
        if ordinal is None or ordinal > len(self.grammar): return None
        rule = self.grammar[ordinal-1]
        if self.completed() or not isApplicable(rule, self.current): return None
        return self.apply(ordinal-1)

    def undo(self) -> DerivationStep:
        if len(self.steps) <= 1:
            raise NothingToUndo("Nothing to undo at the start symbol")
        step = self.steps.pop()
        self.store.completed = False
        logger.debug("undid step: %s", step.result)
        return step

    def reset(self):
        self.store.reset()
        logger.debug("derivation reset")
