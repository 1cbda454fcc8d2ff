# 🎶 songbot/bot/handlers/__init__.py
from .command_parser import CommandKind, ParsedCommand, parse_command

__all__ = ["CommandKind", "ParsedCommand", "parse_command"]
