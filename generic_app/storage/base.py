"""
Abstract base class for asset storage providers.

Every provider (Cloudinary, placeholder, ...) implements the same contract so
the CRUD engine never branches on which one is active.
"""
import base64
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from generic_app.core.errors import AssetDeleteFailure

log = logging.getLogger(__name__)

Content = Union[bytes, str]


@dataclass(frozen=True)
class UploadResult:
    """Result of a successful upload; built fresh for every call."""
    url: str
    public_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Outcome:
    """Result of a best-effort operation whose failure the caller may ignore."""
    ok: bool
    warning: Optional[str] = None


def to_bytes(content: Content) -> bytes:
    """Accept raw bytes, a base64 string or a ``data:`` URI."""
    if isinstance(content, bytes):
        return content
    # data:image/png;base64,....
    _, sep, payload = content.partition(",")
    return base64.b64decode(payload if sep else content)


class StorageService(ABC):
    """Upload, replace and delete binary assets."""

    name: str = "storage"

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the provider has everything it needs to accept uploads."""
        pass

    @abstractmethod
    def upload(
        self,
        content: Content,
        folder: Optional[str] = None,
        filename: Optional[str] = None,
        format: Optional[str] = None,
    ) -> UploadResult:
        """
        Upload a file to the storage provider.

        Raises:
            ProviderUnconfigured: the provider lacks credentials
        """
        pass

    @abstractmethod
    def delete(self, identifier: str) -> None:
        """Delete a file given its provider handle or its full URL."""
        pass

    def delete_quietly(self, identifier: str) -> Outcome:
        """Delete a file, reporting instead of raising on failure."""
        try:
            self.delete(identifier)
        except Exception as e:
            failure = e
            if not isinstance(e, AssetDeleteFailure):
                failure = AssetDeleteFailure(f"Failed to delete {identifier}: {e}")
            log.warning("Failed to delete old file %s: %s", identifier, failure, extra={"action": "delete"})
            return Outcome(ok=False, warning=str(failure))
        return Outcome(ok=True)

    def update(
        self,
        old_identifier: Optional[str],
        new_content: Content,
        folder: Optional[str] = None,
        filename: Optional[str] = None,
        format: Optional[str] = None,
    ) -> UploadResult:
        """
        Replace an existing file: upload the new one, then delete the old one.

        The update succeeds as soon as the new file is stored; failing to
        delete the old file is only logged.
        """
        result = self.upload(new_content, folder=folder, filename=filename, format=format)
        if old_identifier:
            self.delete_quietly(old_identifier)
        return result
