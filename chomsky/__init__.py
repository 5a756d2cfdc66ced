from .errors import *
from .grammar import Grammar, ProductionRule
from .validator import GrammarDraft
from .derivation import (DerivationStep, DerivationEngine, availableRules, applyRule,
                         isCompleted, ordinalLabel, keyToOrdinal)
from .history import HistoryStore, SavedDerivation
from .session import Application, CommandChannel, Command, FileStorage

from .config import APP_VERSION as __version__
