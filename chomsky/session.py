#!/usr/bin/env python3

import enum
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .config import NOTIFICATION_SECONDS
from .derivation import DerivationEngine, DerivationStep
from .errors import AUTHORING_ERRORS, ChomskyError, RuleNotApplicable, NothingToUndo
from .grammar import Grammar
from .history import HistoryStore
from . import validator
from .logging_config import setupLogger
from .snapshot import (UserData, ProjectSnapshot, parseProject, dumpProject,
                       grammarFromModel, newProject)
from .validator import GrammarDraft

logger = setupLogger(__name__)

# Storage collaborator
# ####################

class Outcome(enum.Enum):
    SUCCESS   = "success"
    CANCELLED = "cancelled"
    FAILED    = "failed"

@dataclass(frozen=True)
class StorageResult:
    outcome: Outcome
    payload: Optional[str] = None
    message: str = ""

    @property
    def ok(self):
        return self.outcome == Outcome.SUCCESS

class Storage(ABC):
    @abstractmethod
    def save(self, text: str) -> StorageResult: ...
    @abstractmethod
    def load(self) -> StorageResult: ...

class FileStorage(Storage):
    path: Path

    def __init__(self, path):
        self.path = Path(path)

    def save(self, text):
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as err:
            return StorageResult(Outcome.FAILED, message=str(err))
        return StorageResult(Outcome.SUCCESS)

    def load(self):
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as err:
            return StorageResult(Outcome.FAILED, message=str(err))
        return StorageResult(Outcome.SUCCESS, payload=text)

# Command channel
# ###############

class Command(enum.Enum):
    SAVE_REQUESTED = "save-requested"
    LOAD_REQUESTED = "load-requested"

class CommandChannel:
    """Host menu commands; each command has at most one subscriber for its lifetime."""
    handlers: dict[Command, Callable[[], object]]

    def __init__(self):
        self.handlers = dict()

    def subscribe(self, command: Command, handler: Callable[[], object]):
        if command in self.handlers:
            raise ValueError(f"CommandChannel already has a subscriber for {command.value}")
        self.handlers[command] = handler

    def dispatch(self, command: Command):
        handler = self.handlers.get(command)
        if handler is None:
            logger.warning("no subscriber for %s", command.value)
            return None
        return handler()

# Notifications
# #############

@dataclass(frozen=True)
class Notification:
    message: str
    kind: str
    expires: float

# Application
# ###########

class Application:
    """
    The session object: owns the grammar being authored, the saved grammar,
    the derivation history and the current notification. Front ends call
    these methods and render what they read back.
    """
    user: UserData
    draft: GrammarDraft
    grammar: Optional[Grammar]
    store: HistoryStore
    engine: Optional[DerivationEngine]

    def __init__(self, user, storage, channel=None, clock=time.monotonic):
        self.user    = user
        self.storage = storage
        self.clock   = clock
        self.draft   = GrammarDraft()
        self.grammar = None
        self.store   = HistoryStore()
        self.engine  = None
        self._notification = None
        self.channel = channel if channel is not None else CommandChannel()
        self.channel.subscribe(Command.SAVE_REQUESTED, self.saveProject)
        self.channel.subscribe(Command.LOAD_REQUESTED, self.loadProject)

    # notifications

    def notify(self, message: str, kind: str = "error"):
        self._notification = Notification(message, kind, self.clock() + NOTIFICATION_SECONDS)

    @property
    def notification(self) -> Optional[Notification]:
        if self._notification is not None and self.clock() >= self._notification.expires:
            self._notification = None
        return self._notification

    def pendingError(self) -> Optional[str]:
        n = self.notification
        return n.message if n is not None and n.kind == "error" else None

    # grammar authoring

    def _edit(self, op, *args) -> bool:
        try:
            self.draft = op(self.draft, *args)
        except AUTHORING_ERRORS as err:
            self.notify(str(err))
            return False
        return True

    def addTerminal(self, ch):       return self._edit(validator.addTerminal, ch)
    def addNonTerminal(self, ch):    return self._edit(validator.addNonTerminal, ch)
    def removeTerminal(self, ch):    return self._edit(validator.removeTerminal, ch)
    def removeNonTerminal(self, ch): return self._edit(validator.removeNonTerminal, ch)
    def addRule(self, left, right):  return self._edit(validator.addRule, left, right)
    def removeRule(self, index):     return self._edit(validator.removeRule, index)

    def canSave(self) -> bool:
        return validator.isValid(self.draft, self.pendingError())

    def saveGrammar(self) -> bool:
        try:
            grammar = validator.freeze(self.draft, self.pendingError())
        except AUTHORING_ERRORS as err:
            self.notify(str(err))
            return False
        self.useGrammar(grammar)
        self.notify("Grammar saved", "info")
        return True

    def useGrammar(self, grammar: Grammar):
        self.grammar = grammar
        self.draft   = validator.draftFromGrammar(grammar)
        self.engine  = DerivationEngine(grammar, self.store)
        self.store.persist()

    def clearGrammar(self):
        self.draft   = GrammarDraft()
        self.grammar = None
        self.engine  = None

    # derivation

    def _derive(self, name, *args) -> Optional[DerivationStep]:
        if self.engine is None: return None
        try:
            step = getattr(self.engine, name)(*args)
        except (RuleNotApplicable, NothingToUndo) as err:
            logger.debug("ignored: %s", err)
            return None
        self.store.persist()
        return step

    def apply(self, ruleIndex: int):
        return self._derive("apply", ruleIndex)

    def pressKey(self, key: str):
        return self._derive("applyKey", key)

    def undo(self):
        return self._derive("undo")

    def newDerivation(self):
        if self.engine is None: return
        self.engine.reset()
        self.store.persist()

    def clearDerivation(self):
        if self.engine is None: return
        self.store.clear()

    def removeSaved(self, id: str):
        self.store.remove(id)
        if self.engine is not None: self.store.persist()

    # project files

    def snapshot(self) -> ProjectSnapshot:
        return newProject(self.user, self.grammar, self.store.dumps() if self.grammar else None)

    def saveProject(self) -> bool:
        result = self.storage.save(dumpProject(self.snapshot()))
        if not result.ok:
            if result.outcome == Outcome.FAILED: self.notify(result.message)
            return False
        logger.info("project saved")
        self.notify("Project saved", "info")
        return True

    def loadProject(self) -> bool:
        result = self.storage.load()
        if not result.ok:
            if result.outcome == Outcome.FAILED: self.notify(result.message)
            return False
        try:
            project = parseProject(result.payload)
            grammar = grammarFromModel(project.grammar) if project.grammar else None
            store   = HistoryStore()
            if grammar is not None:
                data = project.settings.derivationSnapshot if project.settings else None
                store.restore(data, grammar)
        except ChomskyError as err:
            self.notify(str(err))
            return False
        self.user  = project.user
        self.store = store
        if grammar is not None:
            self.useGrammar(grammar)
        else:
            self.clearGrammar()
        logger.info("project loaded for %s", self.user.fullName())
        return True
