"""Command line processing."""
from .dispatcher import CommandDispatcher, parse_command

__all__ = ["CommandDispatcher", "parse_command"]
