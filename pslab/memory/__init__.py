"""Memory exports."""

from .field import MemoryField, MemorySnapshot

__all__ = ["MemoryField", "MemorySnapshot"]
