class DedupeError(Exception):
    """Base exception for the dedupe engine."""


class ConfigurationError(DedupeError, ValueError):
    """Raised when field specs, profiles or thresholds are invalid."""


class ValidationError(DedupeError, ValueError):
    """Raised when input records are malformed."""
