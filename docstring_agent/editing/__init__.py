from .buffer import InMemoryBuffer, TextBuffer
from .planner import BatchEditPlanner, EditKind, EditOperation, Position, reindent

__all__ = [
    "BatchEditPlanner", "EditKind", "EditOperation", "InMemoryBuffer",
    "Position", "TextBuffer", "reindent",
]
