"""Core modules for nameddims."""

__all__ = [
    "backend",
    "config",
    "dispatch",
    "exceptions",
    "named_array",
    "names",
]
