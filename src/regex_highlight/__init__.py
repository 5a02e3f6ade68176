"""Live regular-expression highlighting for rich-text controls."""

__all__ = [
    "adapters",
    "behaviour",
    "config",
    "document",
    "host",
    "runtime",
    "scheduling",
    "styling",
]

__version__ = "0.1.0"
