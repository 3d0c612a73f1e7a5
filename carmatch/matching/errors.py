from __future__ import annotations


class InvalidPreferenceError(ValueError):
    """Raised when a preference profile cannot be scored against.

    Covers a missing or non-positive budget and a budget whose minimum is
    not strictly below its maximum.
    """
