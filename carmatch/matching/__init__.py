"""
Match scoring core.

Responsibilities:
- Score one vehicle against one preference profile (0-100).
- Explain each score with plain-language reasons.
- Rank a whole catalog for a profile, best match first.
- Re-sort and tier-filter ranked results for display without rescoring.

Everything here is a pure function over immutable pydantic models.
"""
