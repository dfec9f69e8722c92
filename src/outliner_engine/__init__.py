"""UI-agnostic outliner core with a modal, Vim-style text editing layer."""

__all__ = [
    "buffer",
    "commands",
    "errors",
    "modes",
    "motion",
    "outline",
    "runtime",
]

__version__ = "0.1.0"
