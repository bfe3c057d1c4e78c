"""Output abstraction layer.

- ConsoleProtocol: interface used by services
- RichConsole: terminal implementation
- MockConsole: captures output in tests
"""

from .console import ConsoleProtocol, MockConsole, RichConsole, Style

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
]
