#!/usr/bin/env python3

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .derivation import DerivationStep, isCompleted, isDerivationOf
from .errors import InvalidSnapshotFormat
from .grammar import Grammar
from .logging_config import setupLogger
from .snapshot import HistoryBlob, StepModel, SavedDerivationModel, parseHistory
from .symbols import formatResult

logger = setupLogger(__name__)

# Saved Derivations
# #################

@dataclass(frozen=True)
class SavedDerivation:
    id: str
    steps: tuple[DerivationStep, ...]
    finalWord: str
    timestamp: str

    def __repr__(self):
        return " ⇒ ".join(formatResult(s.result) for s in self.steps)

    @classmethod
    def freeze(cls, steps):
        steps = tuple(steps)
        if not steps: raise ValueError("SavedDerivation requires at least one step")
        return cls(uuid.uuid4().hex, steps, steps[-1].result,
                   datetime.now(timezone.utc).isoformat(timespec="seconds"))

    def toModel(self) -> SavedDerivationModel:
        return SavedDerivationModel(id=self.id,
                                    steps=[ StepModel(**s.asdict()) for s in self.steps ],
                                    timestamp=self.timestamp,
                                    finalWord=self.finalWord)

    @classmethod
    def fromModel(cls, m: SavedDerivationModel):
        return cls(m.id, tuple(DerivationStep(s.result, s.ruleIndex) for s in m.steps),
                   m.finalWord, m.timestamp)

# History Store
# #############

class HistoryStore:
    """
    Owns the in-progress step list and the completed derivations for the
    grammar it is bound to. `persisted` mirrors what would be kept in session
    storage between navigations.
    """
    grammarId: Optional[str]
    startSymbol: Optional[str]
    steps: list[DerivationStep]
    completed: bool
    saved: list[SavedDerivation]
    persisted: Optional[str]

    def __init__(self):
        self.grammarId = None
        self.startSymbol = None
        self.steps     = []
        self.completed = False
        self.saved     = []
        self.persisted = None

    def __len__(self):
        return len(self.saved)

    def __iter__(self):
        return iter(self.saved)

    def __repr__(self):
        return json.dumps(self.asdict(), indent=2, ensure_ascii=False)

    def asdict(self):
        return self.toBlob().model_dump(exclude_none=True)

    # grammar identity

    def bind(self, grammar: Grammar):
        if self.grammarId == grammar.grammarId and self.steps:
            return
        if self.grammarId is not None:
            logger.info("grammar changed, discarding derivation history")
        self.grammarId = grammar.grammarId
        self.startSymbol = grammar.startSymbol
        self.saved = []
        self.persisted = None
        self.reset()

    def reset(self):
        self.steps[:] = [ DerivationStep(self.startSymbol) ]
        self.completed = False

    # completed derivations

    def addCompleted(self, steps) -> bool:
        steps = tuple(steps)
        if any(entry.steps == steps for entry in self.saved):
            return False
        self.saved.append(SavedDerivation.freeze(steps))
        return True

    def remove(self, id: str):
        self.saved = [ entry for entry in self.saved if entry.id != id ]

    def clear(self):
        self.reset()
        self.persisted = None

    # persistence

    def toBlob(self) -> HistoryBlob:
        return HistoryBlob(derivationSteps=[ StepModel(**s.asdict()) for s in self.steps ],
                           savedDerivations=[ entry.toModel() for entry in self.saved ],
                           isCompleted=self.completed,
                           grammarId=self.grammarId or "")

    def dumps(self) -> str:
        return self.toBlob().model_dump_json(exclude_none=True)

    def persist(self) -> str:
        self.persisted = self.dumps()
        return self.persisted

    def restore(self, data: Optional[str], grammar: Grammar) -> bool:
        """
        Load a persisted blob for `grammar`. A blob written for a different
        rule set is ignored and the derivation starts over from the start
        symbol; a blob whose steps do not replay against the grammar raises
        and leaves the store untouched. Returns whether the blob was applied.
        """
        blob = parseHistory(data) if data else None
        if blob is None or blob.grammarId != grammar.grammarId:
            if blob is not None:
                logger.info("discarding stale derivation snapshot for grammar %s", blob.grammarId[:12])
            self.grammarId = None
            self.bind(grammar)
            return False
        steps = [ DerivationStep(s.result, s.ruleIndex) for s in blob.derivationSteps ]
        saved = [ SavedDerivation.fromModel(m) for m in blob.savedDerivations ]
        if not isDerivationOf(grammar, steps):
            raise InvalidSnapshotFormat("Derivation snapshot is not a derivation of the grammar")
        for entry in saved:
            if not isDerivationOf(grammar, entry.steps) or not isCompleted(grammar, entry.finalWord) \
               or entry.finalWord != entry.steps[-1].result:
                raise InvalidSnapshotFormat(f"Saved derivation {entry.id} is not a completed derivation of the grammar")
        self.grammarId = None
        self.bind(grammar)
        self.steps[:] = steps
        self.completed = isCompleted(grammar, steps[-1].result)
        self.saved = saved
        self.persisted = data
        return True
