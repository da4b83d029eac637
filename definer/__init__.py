"""Definer - a personal glossary for the command line."""
__version__ = "1.0.0"
__author__ = "Definer Team"

from definer.commands.dispatcher import CommandDispatcher
from definer.core.models import Definition, ResultDescriptor, StyleClass
from definer.glossary.store import DefinitionStore

__all__ = [
    "CommandDispatcher",
    "Definition",
    "DefinitionStore",
    "ResultDescriptor",
    "StyleClass",
]
