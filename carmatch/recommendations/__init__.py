"""
Recommendation service.

Responsibilities:
- Accept a preference profile plus display options (sort, tier, limit).
- Rank the in-memory vehicle catalog with the match scoring core.
- Summarise the ranked set and apply the requested view.
- Cache responses for repeated identical requests.
"""
