"""
Vehicle catalog.

Responsibilities:
- Read the catalog file (JSON records or CSV) into a DataFrame.
- Normalise it into validated Candidate records.
- Keep the loaded catalog in memory for the API.
"""
