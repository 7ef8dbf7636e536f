"""Central export point for all storage-related functionality."""
from generic_app.storage.base import Outcome, StorageService, UploadResult
from generic_app.storage.cloudinary_service import CloudinaryStorageService, extract_public_id
from generic_app.storage.factory import StorageProvider, StorageServiceFactory, get_storage_service
from generic_app.storage.placeholder_service import PlaceholderStorageService, placeholder_url
