"""Dataclasses for artifact generation."""
from dataclasses import dataclass


@dataclass
class GeneratedFile:
    """Represents a generated file."""
    path: str  # Relative path from output directory
    content: str  # File contents
