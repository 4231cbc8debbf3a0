"""Exception hierarchy for dailybrief."""


class DailyBriefError(Exception):
    """Base class for all dailybrief errors."""


class StorageError(DailyBriefError):
    """Raised by a key-value store when a read or write fails."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(message)


class ProviderError(DailyBriefError):
    """Base class for provider registry errors."""


class NotFoundError(ProviderError):
    """A referenced provider or model does not exist."""


class ProviderNotFoundError(NotFoundError):
    """Raised when no provider has the given id."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__(f"Provider with id {provider_id} not found")


class ModelNotFoundError(NotFoundError):
    """Raised when a model id is not offered by a provider."""

    def __init__(self, provider_id: str, model_id: str):
        self.provider_id = provider_id
        self.model_id = model_id
        super().__init__(f"Model {model_id} not found in provider {provider_id}")


class UnsupportedOperationError(ProviderError):
    """The operation is not meaningful for the provider's kind."""


class InvalidProviderConfigError(ProviderError):
    """Provider fields are missing or malformed."""


class ProviderConnectionError(ProviderError):
    """A provider could not be reached while fetching its models."""


class BriefingError(DailyBriefError):
    """Raised when a briefing cannot be generated."""
