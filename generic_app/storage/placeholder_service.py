"""Fallback provider that generates placeholder image URLs."""
import logging
from typing import Optional
from urllib.parse import quote
from generic_app.config.storage import PlaceholderConfig
from generic_app.storage.base import Content, StorageService, UploadResult

log = logging.getLogger(__name__)

# Characters encodeURIComponent leaves untouched besides alphanumerics and -_.~
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def placeholder_url(text: str, width: int = 600, height: int = 400, image_format: Optional[str] = None) -> str:
    """Build a placehold.co URL showing ``text``."""
    size = f"{width}x{height}"
    if image_format:
        size = f"{size}/{image_format}"
    return f"https://placehold.co/{size}?text={encode_uri_component(text)}"


class PlaceholderStorageService(StorageService):
    """Always available; nothing is actually stored."""

    name = "placeholder"

    def __init__(self, config: Optional[PlaceholderConfig] = None):
        self.config = config or PlaceholderConfig()

    def is_configured(self) -> bool:
        return True

    def upload(
        self,
        content: Content,
        folder: Optional[str] = None,
        filename: Optional[str] = None,
        format: Optional[str] = None,
    ) -> UploadResult:
        width, height = self.config.default_size
        url = placeholder_url(filename or "Image", width, height, image_format="png")
        return UploadResult(
            url=url,
            metadata={
                "isPlaceholder": True,
                "width": width,
                "height": height,
            },
        )

    def delete(self, identifier: str) -> None:
        log.info("Placeholder service: delete called for %s", identifier, extra={"action": "delete"})

    def update(
        self,
        old_identifier: Optional[str],
        new_content: Content,
        folder: Optional[str] = None,
        filename: Optional[str] = None,
        format: Optional[str] = None,
    ) -> UploadResult:
        # Nothing to clean up; just hand out a new placeholder
        return self.upload(new_content, folder=folder, filename=filename, format=format)
