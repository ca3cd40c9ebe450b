"""
Veo Studio CLI Tools

Command-line front end for the video generator.

Tools:
- console_host: terminal implementation of the form host
"""

from .console_host import ConsoleFormHost

__all__ = ["ConsoleFormHost"]
