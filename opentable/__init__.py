"""Core engine package for Open Table."""

__all__ = [
    "cards",
    "scoring",
    "deck",
    "match",
    "opponent",
    "turns",
    "archive",
    "results",
    "store",
    "errors",
    "rules_schema",
    "service",
]
