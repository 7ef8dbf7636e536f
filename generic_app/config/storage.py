"""Storage provider configuration derived from the environment."""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from generic_app.core.config import Settings, settings as default_settings


@dataclass(frozen=True)
class CloudinaryConfig:
    cloud_name: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    cloudinary_url: Optional[str] = None
    folder: str = "uploads"


@dataclass(frozen=True)
class PlaceholderConfig:
    service: str = "placehold.co"
    default_size: Tuple[int, int] = (600, 400)  # width, height


@dataclass(frozen=True)
class StorageConfig:
    provider: str
    cloudinary: CloudinaryConfig = field(default_factory=CloudinaryConfig)
    placeholder: PlaceholderConfig = field(default_factory=PlaceholderConfig)


def detect_provider(settings: Settings) -> str:
    """Auto-detect the storage provider from the credentials present."""
    if settings.has_cloudinary_credentials:
        return "cloudinary"
    return "placeholder"


def get_storage_config(settings: Optional[Settings] = None) -> StorageConfig:
    settings = settings or default_settings
    return StorageConfig(
        provider=detect_provider(settings),
        cloudinary=CloudinaryConfig(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            cloudinary_url=settings.cloudinary_url,
            folder=settings.cloudinary_folder or "uploads",
        ),
        placeholder=PlaceholderConfig(),
    )
