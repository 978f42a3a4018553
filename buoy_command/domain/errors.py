class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class ConfigurationError(DomainError):
    """Provider credentials are missing or malformed; the service cannot start."""

    pass


class ProviderError(DomainError):
    """The email provider could not be reached or rejected the request."""

    pass
