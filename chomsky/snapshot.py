#!/usr/bin/env python3

import json
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .config import APP_VERSION, START_SYMBOL
from .errors import ChomskyError, InvalidSnapshotFormat
from .grammar import Grammar
from .logging_config import setupLogger
from .validator import buildDraft, freeze

logger = setupLogger(__name__)

# Project document
# ################

class UserData(BaseModel):
    lastName: str
    firstName: str
    patronymic: str
    group: str

    @field_validator("lastName", "firstName", "patronymic", "group")
    @classmethod
    def notBlank(cls, v: str) -> str:
        v = v.strip()
        if not v: raise ValueError("must not be empty")
        return v

    def fullName(self) -> str:
        return f"{self.lastName} {self.firstName} {self.patronymic}"

class RuleModel(BaseModel):
    left: str
    right: str

class GrammarModel(BaseModel):
    terminals: list[str] = []
    nonTerminals: list[str] = []
    startSymbol: str = START_SYMBOL
    rules: list[RuleModel] = []

class SettingsModel(BaseModel):
    derivationSnapshot: Optional[str] = None

class ProjectSnapshot(BaseModel):
    user: UserData
    grammar: Optional[GrammarModel] = None
    settings: Optional[SettingsModel] = None
    version: str

# Derivation history blob
# #######################

class StepModel(BaseModel):
    result: str
    ruleIndex: Optional[int] = Field(default=None, ge=1)

class SavedDerivationModel(BaseModel):
    id: str
    steps: list[StepModel]
    timestamp: str
    finalWord: str

class HistoryBlob(BaseModel):
    derivationSteps: list[StepModel]
    savedDerivations: list[SavedDerivationModel] = []
    isCompleted: bool = False
    grammarId: str

# Loading / dumping
# #################

def majorVersion(version: str) -> str:
    return version.strip().split(".")[0]

def parseProject(text: str) -> ProjectSnapshot:
    try:
        snapshot = ProjectSnapshot.model_validate(json.loads(text))
    except (TypeError, ValueError, ValidationError) as err:
        logger.warning("rejected project file: %s", err)
        raise InvalidSnapshotFormat("Invalid file format") from err
    if majorVersion(snapshot.version) != majorVersion(APP_VERSION):
        logger.warning("rejected project file version %s", snapshot.version)
        raise InvalidSnapshotFormat(f"Invalid file format: unsupported version {snapshot.version!r}")
    return snapshot

def dumpProject(snapshot: ProjectSnapshot) -> str:
    return snapshot.model_dump_json(indent=2, exclude_none=True)

def parseHistory(text: str) -> HistoryBlob:
    try:
        return HistoryBlob.model_validate_json(text)
    except ValidationError as err:
        logger.warning("rejected derivation snapshot: %s", err)
        raise InvalidSnapshotFormat("Invalid derivation snapshot") from err

def grammarFromModel(model: GrammarModel) -> Grammar:
    """Rebuild a grammar through the validator; S is always present and always the start."""
    nonTerminals = list(model.nonTerminals)
    if START_SYMBOL not in nonTerminals:
        nonTerminals.insert(0, START_SYMBOL)
    try:
        draft = buildDraft(model.terminals, nonTerminals, [ (r.left, r.right) for r in model.rules ])
        return freeze(draft)
    except ChomskyError as err:
        raise InvalidSnapshotFormat(f"Invalid file format: {err}") from err

def grammarToModel(grammar: Grammar) -> GrammarModel:
    return GrammarModel.model_validate(grammar.asdict())

def newProject(user: UserData, grammar: Optional[Grammar] = None,
               derivationSnapshot: Optional[str] = None) -> ProjectSnapshot:
    return ProjectSnapshot(user=user,
                           grammar=grammarToModel(grammar) if grammar else None,
                           settings=SettingsModel(derivationSnapshot=derivationSnapshot),
                           version=APP_VERSION)
