"""
Generic create / update / delete for the configured entity.

Every operation validates the whole submission before touching storage or
the database. Asset operations are best-effort: a failed upload or cleanup
degrades the image value but never the record itself, while a failed
database write is always reported back to the caller.
"""
import logging
from typing import Any, Dict, List, Optional
from generic_app.config.domain import EntityConfig
from generic_app.config.features import FeaturesConfig
from generic_app.core.errors import ModelNotFound, NotFound
from generic_app.crud.revalidate import PathRevalidator
from generic_app.crud.types import ActionResult, FormData, SubmittedFile
from generic_app.crud.validation import validate_submission
from generic_app.db.accessor import AccessorRegistry, PersistenceAccessor
from generic_app.storage.base import StorageService
from generic_app.storage.placeholder_service import placeholder_url

log = logging.getLogger(__name__)

REVALIDATE_PATHS = ("/", "/dashboard")


def submitted_file(value: Any) -> Optional[SubmittedFile]:
    """Return the submitted file when there is one with content."""
    if isinstance(value, SubmittedFile) and value.size > 0:
        return value
    return None


class EntityActions:
    def __init__(
        self,
        entity: EntityConfig,
        features: FeaturesConfig,
        accessors: AccessorRegistry,
        storage: StorageService,
        revalidator: Optional[PathRevalidator] = None,
    ):
        self.entity = entity
        self.features = features
        self.storage = storage
        self.revalidator = revalidator or PathRevalidator()
        self._accessor = accessors.lookup(entity.model_key)
        if self._accessor is None:
            log.error("No accessor registered for %s", entity.model_key, extra={"entity": entity.name})

    def _log_extra(self, action: str) -> Dict[str, str]:
        return {"entity": self.entity.name, "action": action}

    def _model(self) -> PersistenceAccessor:
        if self._accessor is None:
            raise ModelNotFound(self.entity.model_key)
        return self._accessor

    @property
    def _folder(self) -> str:
        return f"{self.entity.storage_name}-images"

    def _display_value(self, data: Dict[str, Any]) -> Optional[str]:
        display_field = self.entity.display_field_name
        value = data.get(display_field) if display_field else None
        return str(value) if value not in (None, "") else None

    def _placeholder(self, data: Dict[str, Any]) -> str:
        return placeholder_url(self._display_value(data) or "Image")

    def _check_file(self, image_file: SubmittedFile) -> List[str]:
        bounds = self.features.storage
        if bounds.max_file_size and image_file.size > bounds.max_file_size:
            return [f"Max file size is {bounds.max_file_size / 1_000_000:g}MB"]
        if bounds.allowed_formats and image_file.content_type not in bounds.allowed_formats:
            return [f"File type {image_file.content_type} is not allowed"]
        return []

    def _revalidate(self) -> None:
        for path in REVALIDATE_PATHS:
            self.revalidator.revalidate(path)

    def create(self, form: FormData) -> ActionResult:
        if not self.features.crud.create:
            return ActionResult.disabled("create")

        data, errors = validate_submission(self.entity, form)
        if errors:
            return ActionResult.invalid(errors)

        warnings: List[str] = []
        image_field = self.entity.image_field_name
        if image_field and self.features.storage.enabled:
            image_file = submitted_file(form.get(image_field))
            if image_file is not None:
                file_errors = self._check_file(image_file)
                if file_errors:
                    return ActionResult.invalid({image_field: file_errors})
                try:
                    result = self.storage.upload(
                        image_file.content,
                        folder=self._folder,
                        filename=self._display_value(data) or "entity",
                    )
                    data[image_field] = result.url
                except Exception as e:
                    log.error("Upload failed: %s", e, extra=self._log_extra("create"))
                    warnings.append(f"Image upload failed, using a placeholder: {e}")
                    data[image_field] = self._placeholder(data)
            else:
                data[image_field] = self._placeholder(data)

        try:
            record = self._model().create(data)
        except Exception:
            log.exception("Create entity failed", extra=self._log_extra("create"))
            return ActionResult.failed("Failed to create entity.")

        self._revalidate()
        log.info("Created %s", self.entity.name, extra=self._log_extra("create"))
        return ActionResult.ok(record, warnings)

    def update(self, id: str, form: FormData) -> ActionResult:
        if not self.features.crud.update:
            return ActionResult.disabled("update")

        data, errors = validate_submission(self.entity, form)
        if errors:
            return ActionResult.invalid(errors)

        warnings: List[str] = []
        image_field = self.entity.image_field_name
        if image_field and self.features.storage.enabled:
            image_file = submitted_file(form.get(image_field))
            if image_file is not None:
                file_errors = self._check_file(image_file)
                if file_errors:
                    return ActionResult.invalid({image_field: file_errors})
                try:
                    existing = self._model().find_unique(id)
                    if existing is None:
                        raise NotFound(id)
                    result = self.storage.update(
                        existing.get(image_field),
                        image_file.content,
                        folder=self._folder,
                        filename=self._display_value(data) or "entity",
                    )
                    data[image_field] = result.url
                except NotFound:
                    return ActionResult.not_found(f"{self.entity.name} not found")
                except Exception as e:
                    # Other fields are still updated
                    log.error("Image update failed: %s", e, extra=self._log_extra("update"))
                    warnings.append(f"Image update failed, keeping the current image: {e}")

        try:
            record = self._model().update(id, data)
        except NotFound:
            return ActionResult.not_found(f"{self.entity.name} not found")
        except Exception:
            log.exception("Update entity failed", extra=self._log_extra("update"))
            return ActionResult.failed("Failed to update entity.")

        self._revalidate()
        log.info("Updated %s %s", self.entity.name, id, extra=self._log_extra("update"))
        return ActionResult.ok(record, warnings)

    def delete(self, id: str) -> ActionResult:
        if not self.features.crud.delete:
            return ActionResult.disabled("delete")

        warnings: List[str] = []
        try:
            model = self._model()
            existing = model.find_unique(id)
            if existing is None:
                return ActionResult.not_found("Entity not found")

            image_field = self.entity.image_field_name
            if image_field and existing.get(image_field):
                outcome = self.storage.delete_quietly(existing[image_field])
                if not outcome.ok:
                    warnings.append(outcome.warning)

            model.delete(id)
        except NotFound:
            return ActionResult.not_found("Entity not found")
        except Exception:
            log.exception("Delete entity failed", extra=self._log_extra("delete"))
            return ActionResult.failed("Failed to delete entity", form_error=False)

        self._revalidate()
        log.info("Deleted %s %s", self.entity.name, id, extra=self._log_extra("delete"))
        return ActionResult.ok(existing, warnings)
