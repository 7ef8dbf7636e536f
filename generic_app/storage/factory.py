"""
Storage service factory.

Selects the storage provider once per process: an explicit override or the
provider detected from the environment, falling back to the placeholder
provider whenever the remote provider is not configured.
"""
import logging
import threading
from enum import Enum
from typing import Optional, Union

from generic_app.config.storage import get_storage_config
from generic_app.core.config import Settings
from generic_app.storage.base import StorageService
from generic_app.storage.cloudinary_service import CloudinaryStorageService
from generic_app.storage.placeholder_service import PlaceholderStorageService

log = logging.getLogger(__name__)


class StorageProvider(str, Enum):
    """Supported storage providers."""
    CLOUDINARY = "cloudinary"
    PLACEHOLDER = "placeholder"


class StorageServiceFactory:
    _instance: Optional[StorageService] = None
    _lock = threading.Lock()

    @classmethod
    def get_storage_service(
        cls,
        provider: Optional[Union[StorageProvider, str]] = None,
        settings: Optional[Settings] = None,
    ) -> StorageService:
        """
        Get the process-wide storage service.

        Args:
            provider: Optional provider override (defaults to auto-detect)
            settings: Settings to read credentials from (defaults to the app settings)

        Returns:
            The cached instance if one was already selected, otherwise the
            newly selected one
        """
        if cls._instance is not None:
            return cls._instance

        with cls._lock:
            if cls._instance is None:
                cls._instance = cls._create(provider, settings)
            return cls._instance

    @classmethod
    def _create(
        cls,
        provider: Optional[Union[StorageProvider, str]],
        settings: Optional[Settings],
    ) -> StorageService:
        config = get_storage_config(settings)
        try:
            selected = StorageProvider(provider or config.provider)
        except ValueError:
            log.warning("Unsupported storage provider %s, using placeholder", provider)
            selected = StorageProvider.PLACEHOLDER

        if selected == StorageProvider.CLOUDINARY:
            service = CloudinaryStorageService(config.cloudinary)
            if service.is_configured():
                log.info("Using Cloudinary storage provider")
                return service
            log.warning("Cloudinary not configured, falling back to placeholder")

        log.info("Using placeholder storage provider")
        return PlaceholderStorageService(config.placeholder)

    @classmethod
    def reset(cls) -> None:
        """Forget the selected instance so the next call selects again."""
        with cls._lock:
            cls._instance = None


def get_storage_service(
    provider: Optional[Union[StorageProvider, str]] = None,
    settings: Optional[Settings] = None,
) -> StorageService:
    return StorageServiceFactory.get_storage_service(provider, settings)
