"""Glossary storage, matching and validation."""
from .history import CommandHistory
from .matcher import find_matches, levenshtein_distance, suggest
from .storage import JSONFileStorage, MemoryStorage
from .store import DefinitionStore
from .validator import DefinitionValidator, ValidationRules

__all__ = [
    "CommandHistory",
    "find_matches", "levenshtein_distance", "suggest",
    "JSONFileStorage", "MemoryStorage",
    "DefinitionStore",
    "DefinitionValidator", "ValidationRules",
]
