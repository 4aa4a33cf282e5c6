# aim_ai/errors.py


class AimAIError(Exception):
    """Base class for all errors raised by aim_ai."""


class ConfigError(AimAIError):
    """A configuration value is present but malformed."""


class AuthError(AimAIError):
    """Sign-in / sign-up against the identity service failed."""


class ProgressStoreError(AimAIError):
    """A progress backend could not read or write records."""
