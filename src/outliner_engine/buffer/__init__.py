"""Text buffer and snip storage consumed by the motion and command layers."""

from outliner_engine.errors import BufferValidationError

from .registers import SnipStack
from .text import BufferDelta, TextBuffer, Transaction
from .validation import ensure_index, ensure_span

__all__ = [
    "BufferDelta",
    "BufferValidationError",
    "SnipStack",
    "TextBuffer",
    "Transaction",
    "ensure_index",
    "ensure_span",
]
