"""
Features configuration.

Enable or disable application features.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class AuthFeatures:
    enabled: bool = True


@dataclass(frozen=True)
class StorageFeatures:
    enabled: bool = True
    provider: Optional[str] = None  # "cloudinary", "placeholder" or None to auto-detect
    max_file_size: Optional[int] = None  # bytes
    allowed_formats: Optional[Tuple[str, ...]] = None  # MIME types


@dataclass(frozen=True)
class CrudFeatures:
    create: bool = True
    read: bool = True
    update: bool = True
    delete: bool = True


@dataclass(frozen=True)
class FeaturesConfig:
    auth: AuthFeatures = field(default_factory=AuthFeatures)
    storage: StorageFeatures = field(default_factory=StorageFeatures)
    crud: CrudFeatures = field(default_factory=CrudFeatures)


features_config = FeaturesConfig(
    auth=AuthFeatures(enabled=True),
    storage=StorageFeatures(
        enabled=True,
        provider="cloudinary",
        max_file_size=5_000_000,  # 5MB
        allowed_formats=("image/jpeg", "image/png", "image/webp"),
    ),
    crud=CrudFeatures(),
)
