"""
Failure kinds of the model-backed classification path.

Both are absorbed by the orchestrator in src/graph.py and never reach
the caller of classify().
"""


class ClassificationError(Exception):
    """Base class for model-path failures."""


class ClassifierUnavailable(ClassificationError):
    """No capability configured, the call failed or timed out, or the reply was empty."""


class MalformedResponse(ClassificationError):
    """The reply held no parseable JSON object or a field failed validation."""
