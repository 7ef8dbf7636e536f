"""Exception hierarchy shared by the generators, storage layer and CRUD engine."""


class GenericAppError(Exception):
    """Base class for all errors raised by generic_app."""


class ConfigError(GenericAppError):
    """The entity or features configuration is inconsistent."""


class StorageError(GenericAppError):
    """Base class for storage provider failures."""


class ProviderUnconfigured(StorageError):
    """The storage provider lacks the credentials it needs."""

    def __init__(self, provider: str):
        super().__init__(f"{provider} is not configured")
        self.provider = provider


class UploadFailure(StorageError):
    """The provider raised while storing an asset."""


class AssetDeleteFailure(StorageError):
    """Best-effort cleanup of a stale asset failed."""


class PersistenceFailure(GenericAppError):
    """The persistence accessor raised or is unavailable."""


class ModelNotFound(PersistenceFailure):
    """No accessor is registered for the requested model key."""

    def __init__(self, model_key: str):
        super().__init__(f"Model {model_key} not found in persistence registry")
        self.model_key = model_key


class NotFound(GenericAppError):
    """The target record of an update or delete does not exist."""
