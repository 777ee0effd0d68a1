# MIT License (see LICENSE)
"""
Visual effects driven by physics events.

    - DebrisField: Fragment burst spawned when a car crashes.
"""
from .debris import DebrisField, DebrisFragment

__all__ = [
    "DebrisField",
    "DebrisFragment",
]
