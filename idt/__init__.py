"""idt: install developer tools (language servers, linters, formatters)."""

__version__ = "0.1.0"
