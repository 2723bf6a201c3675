"""
API server package: HTTP interface to the oracle pipeline.

Parses submissions, delegates to the aggregator and returns the oracle result
as JSON. Holds no verification logic of its own.
"""
