#!/usr/bin/env python3

# Error kinds
# ###########
#
# Every error is local and recoverable. Authoring errors leave the grammar
# draft unchanged, derivation errors leave the step history unchanged.

class ChomskyError(ValueError): pass

# grammar authoring

class InvalidSymbol(ChomskyError): pass
class DuplicateSymbol(ChomskyError): pass
class ProtectedSymbol(ChomskyError): pass
class SymbolInUse(ChomskyError): pass

class InvalidRuleLeft(ChomskyError): pass
class InvalidRuleRight(ChomskyError): pass
class TrivialRule(ChomskyError): pass
class DuplicateRule(ChomskyError): pass
class RuleLimitExceeded(ChomskyError): pass

class InvalidGrammar(ChomskyError): pass

# derivation

class RuleNotApplicable(ChomskyError): pass
class NothingToUndo(ChomskyError): pass

# persistence

class InvalidSnapshotFormat(ChomskyError): pass

AUTHORING_ERRORS = (InvalidSymbol, DuplicateSymbol, ProtectedSymbol, SymbolInUse,
                    InvalidRuleLeft, InvalidRuleRight, TrivialRule, DuplicateRule,
                    RuleLimitExceeded, InvalidGrammar)
