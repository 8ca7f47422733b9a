"""Error taxonomy for the engine.

Every error is terminal for the single operation that raised it; callers can
rely on no partial artifact or history state having been committed.
"""


class ValidationError(ValueError):
    """Malformed input: empty request, bad document fields, incomplete artifact."""


class MalformedGenerationOutput(ValueError):
    """The generator answered, but no valid artifact array could be extracted."""


class GenerationTransportError(RuntimeError):
    """The generator call itself failed (network, auth, non-success status)."""


class GenerationInProgressError(RuntimeError):
    """A generation was requested while another one is still outstanding."""


class PersistenceLoadError(RuntimeError):
    """A persisted record exists but could not be decoded."""

    def __init__(self, record: str, reason: str):
        super().__init__(f"Could not load '{record}': {reason}")
        self.record = record
