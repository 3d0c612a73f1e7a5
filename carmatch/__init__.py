"""
CarMatch: vehicle recommendations from a structured preference profile.

Packages:
- matching: pure scoring, explanation, ranking and view functions.
- analytics: summaries over a ranked result set.
- catalog: loading the vehicle catalog.
- recommendations: the request/response service used by the API.
"""
