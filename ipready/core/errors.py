"""
Domain errors raised by the engines and repositories.

Routers translate these into HTTP statuses; the engines never swallow them.
"""


class IPReadyError(Exception):
    """Base class for all domain errors."""


class ValidationError(IPReadyError):
    """Caller input is missing or malformed. Not retryable."""


class NotFoundError(IPReadyError):
    """A protein or document id does not resolve."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ModelUnavailableError(IPReadyError):
    """The language-model call failed or timed out. Safe to retry."""
