"""
Result-set analytics.

Responsibilities:
- Summarise a ranked result set (tier counts, average score, top pick).
"""
