#!/usr/bin/env python3

from dataclasses import dataclass, replace
from typing import Optional

from .config import EPSILON, MAX_RULES, START_SYMBOL
from .errors import (InvalidSymbol, DuplicateSymbol, ProtectedSymbol, SymbolInUse,
                     InvalidRuleLeft, InvalidRuleRight, TrivialRule, DuplicateRule,
                     RuleLimitExceeded, InvalidGrammar)
from .grammar import Grammar, ProductionRule
from .logging_config import setupLogger
from .symbols import isTerminal, isNonTerminal, isEpsilon, symbolsOf, formatRule

logger = setupLogger(__name__)

# Grammar Draft
# #############
#
# The candidate grammar while it is being authored. Every operation returns a
# new draft; a rejected operation raises and the caller keeps the old one.

@dataclass(frozen=True)
class GrammarDraft:
    terminals: tuple[str, ...] = ()
    nonTerminals: tuple[str, ...] = (START_SYMBOL,)
    rules: tuple[ProductionRule, ...] = ()
    startSymbol: str = START_SYMBOL

    def symbols(self) -> set[str]:
        return set(self.terminals) | set(self.nonTerminals)

    def uses(self, sym: str) -> bool:
        return any(rule.left == sym or sym in rule.right for rule in self.rules)

def _reject(err, msg):
    logger.warning(msg)
    raise err(msg)

# Symbols
# #######

def addTerminal(draft: GrammarDraft, ch: str) -> GrammarDraft:
    if not isTerminal(ch):          _reject(InvalidSymbol, f"Terminal must be a single lowercase Cyrillic letter, got {ch!r}")
    if ch in draft.terminals:       _reject(DuplicateSymbol, f"Terminal {ch!r} is already defined")
    return replace(draft, terminals=draft.terminals + (ch,))

def addNonTerminal(draft: GrammarDraft, ch: str) -> GrammarDraft:
    if not isNonTerminal(ch):       _reject(InvalidSymbol, f"Non-terminal must be a single uppercase Latin letter, got {ch!r}")
    if ch in draft.nonTerminals:    _reject(DuplicateSymbol, f"Non-terminal {ch!r} is already defined")
    return replace(draft, nonTerminals=draft.nonTerminals + (ch,))

def removeTerminal(draft: GrammarDraft, ch: str) -> GrammarDraft:
    if ch not in draft.terminals:   return draft
    if draft.uses(ch):              _reject(SymbolInUse, f"Terminal {ch!r} is used by a rule")
    return replace(draft, terminals=tuple(t for t in draft.terminals if t != ch))

def removeNonTerminal(draft: GrammarDraft, ch: str) -> GrammarDraft:
    if ch == draft.startSymbol:     _reject(ProtectedSymbol, f"Start symbol {ch!r} cannot be removed")
    if ch not in draft.nonTerminals: return draft
    if draft.uses(ch):              _reject(SymbolInUse, f"Non-terminal {ch!r} is used by a rule")
    return replace(draft, nonTerminals=tuple(n for n in draft.nonTerminals if n != ch))

# Rules
# #####

def checkRule(draft: GrammarDraft, left: str, right: str) -> ProductionRule:
    if len(left) != 1 or left not in draft.nonTerminals:
        _reject(InvalidRuleLeft, f"Left side must be one defined non-terminal, got {left!r}")
    body = symbolsOf(right)
    if not body:
        _reject(InvalidRuleRight, f"Right side must not be empty, use {EPSILON!r} for the empty word")
    known = draft.symbols()
    unknown = [] if isEpsilon(right) else [ s for s in body if s not in known ]
    if unknown:
        _reject(InvalidRuleRight, f"Right side uses undefined symbols: {''.join(unknown)!r}")
    rule = ProductionRule(left, right)
    if left == "".join(body):       _reject(TrivialRule, f"Rule {formatRule(rule)} rewrites a symbol to itself")
    if rule in draft.rules:         _reject(DuplicateRule, f"Rule {formatRule(rule)} is already defined")
    if len(draft.rules) >= MAX_RULES:
        _reject(RuleLimitExceeded, f"A grammar holds at most {MAX_RULES} rules")
    return rule

def addRule(draft: GrammarDraft, left: str, right: str) -> GrammarDraft:
    rule = checkRule(draft, left, right)
    return replace(draft, rules=draft.rules + (rule,))

def removeRule(draft: GrammarDraft, index: int) -> GrammarDraft:
    if index < 0 or index >= len(draft.rules): return draft
    return replace(draft, rules=draft.rules[:index] + draft.rules[index+1:])

# Save gate
# #########

def isValid(draft: GrammarDraft, pendingError: Optional[str] = None) -> bool:
    return ( len(draft.terminals) > 0
         and len(draft.nonTerminals) > 0
         and draft.startSymbol == START_SYMBOL
         and len(draft.rules) > 0
         and not pendingError )

def freeze(draft: GrammarDraft, pendingError: Optional[str] = None) -> Grammar:
    if not isValid(draft, pendingError):
        raise InvalidGrammar("Grammar needs terminals, non-terminals and at least one rule")
    return Grammar(draft.terminals, draft.nonTerminals, draft.rules, draft.startSymbol)

def draftFromGrammar(grammar: Grammar) -> GrammarDraft:
    return buildDraft(grammar.terminals, grammar.nonTerminals,
                      [ (r.left, r.right) for r in grammar.rules ])

def buildDraft(terminals, nonTerminals, rules) -> GrammarDraft:
    """Replay author input through every check; the start symbol is always present."""
    draft = GrammarDraft()
    for t in terminals:
        draft = addTerminal(draft, t)
    for n in nonTerminals:
        if n == START_SYMBOL: continue
        draft = addNonTerminal(draft, n)
    for left, right in rules:
        draft = addRule(draft, left, right)
    return draft
