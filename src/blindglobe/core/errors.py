"""Exception types shared across the game core."""


class ConfigurationError(Exception):
    """The city catalog or timezone configuration is unusable.

    Raised at startup; the game cannot run with this configuration.
    """


class TransientTimeSourceError(Exception):
    """The trusted time check failed. Callers fall back to the local clock."""
