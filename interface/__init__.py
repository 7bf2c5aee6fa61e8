"""Interface package: argument parsing, catalog files, prompts and output."""

__all__ = [
    "cli",
    "persistence",
    "prompts",
    "render",
]
