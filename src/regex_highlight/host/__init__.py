"""Host control boundary and the in-memory reference control."""

from .memory import BLOCK_TERMINATOR, InMemoryRichText, Symbol, SymbolKind
from .protocol import HostControl, HostValidationError, TextChangedHandler

__all__ = [
    "BLOCK_TERMINATOR",
    "HostControl",
    "HostValidationError",
    "InMemoryRichText",
    "Symbol",
    "SymbolKind",
    "TextChangedHandler",
]
