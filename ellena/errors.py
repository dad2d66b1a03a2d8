"""Exception hierarchy shared by the core, the stores and the CLI."""


class EllenaError(Exception):
    """Base class for all Ellena errors."""


class InvalidInput(EllenaError, ValueError):
    """Malformed input rejected before any I/O (empty query, bad vectors)."""


class NotFound(EllenaError):
    """Referenced task or transcript does not exist or is not visible."""


class Unauthorized(EllenaError):
    """Principal lacks access to the requested workspace or task."""


class ProviderUnavailable(EllenaError):
    """LLM capability is not configured (no credential or AI disabled)."""


class ProviderError(EllenaError):
    """A single embedding or completion call failed."""
