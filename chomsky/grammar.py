#!/usr/bin/env python3

import hashlib
import json
from dataclasses import dataclass, field

from .config import START_SYMBOL
from .symbols import formatRule, isEpsilon

# Grammar Representation
# ######################

@dataclass(frozen=True)
class ProductionRule:
    left: str
    right: str

    def __repr__(self):
        return formatRule(self)

    def isEpsilon(self) -> bool:
        return isEpsilon(self.right)

    def replacement(self) -> str:
        return "" if self.isEpsilon() else self.right

    def asdict(self):
        return {'left': self.left, 'right': self.right}

@dataclass(frozen=True)
class Grammar:
    terminals: tuple[str, ...]
    nonTerminals: tuple[str, ...]
    rules: tuple[ProductionRule, ...]
    startSymbol: str = START_SYMBOL
    grammarId: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.startSymbol != START_SYMBOL: raise ValueError(f"Grammar start symbol must be {START_SYMBOL}")
        if START_SYMBOL not in self.nonTerminals: raise ValueError(f"Grammar non-terminals must contain {START_SYMBOL}")
        object.__setattr__(self, "grammarId", fingerprint(self.rules))

    def __repr__(self):
        res = "Grammar(\n"
        res += f"  terminals = {{{', '.join(self.terminals)}}},\n"
        res += f"  nonTerminals = {{{', '.join(self.nonTerminals)}}},\n"
        res += f"  start = {self.startSymbol},\n"
        for i, rule in enumerate(self.rules):
            res += f"  {i+1}. " + repr(rule) + "\n"
        res += ")"
        return res

    def __len__(self):
        return len(self.rules)

    def __getitem__(self, index):
        return self.rules[index]

    def asdict(self):
        return {
            'terminals':    list(self.terminals),
            'nonTerminals': list(self.nonTerminals),
            'startSymbol':  self.startSymbol,
            'rules':        [ rule.asdict() for rule in self.rules ],
        }

# utility functions
# #################

def fingerprint(rules) -> str:
    """Structural identity of a rule list; equal rule lists give equal ids."""
    canon = json.dumps([ [r.left, r.right] for r in rules ], ensure_ascii=False, separators=(',', ':'))
    return hashlib.sha256(canon.encode("utf-8")).hexdigest()
