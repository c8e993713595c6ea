"""
.. include:: ../README.md
"""

__all__ = [
    "exceptions",
    "local",
    "model",
    "provider",
    "schedule",
    "timezone",
    "tz_rule",
]
