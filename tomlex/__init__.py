"""State-machine lexer for TOML documents: states, tokens and per-state handlers."""

__version__ = "0.1.0"
__all__ = ["lexer"]