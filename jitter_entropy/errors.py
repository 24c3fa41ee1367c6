"""Exception hierarchy for jitter-entropy."""


class JitterEntropyError(Exception):
    """Base class for all jitter-entropy errors."""


class DomainError(JitterEntropyError, ValueError):
    """A bounded draw was asked for a non-positive bound."""


class ConfigurationError(JitterEntropyError, ValueError):
    """A :class:`~jitter_entropy.config.JitterConfig` field is out of range."""


class EntropyUnavailableError(JitterEntropyError, RuntimeError):
    """The host cannot supply ambient randomness. Fatal, never retried."""
