"""Tests for the generic CRUD engine, using an in-memory accessor."""
import uuid
from generic_app.config.domain import EntityConfig, FieldDefinition, FieldValidation
from generic_app.config.features import CrudFeatures, FeaturesConfig, StorageFeatures
from generic_app.core.errors import NotFound
from generic_app.crud import (
    EntityActions,
    PathRevalidator,
    ResultKind,
    SubmittedFile,
    register_validator,
)
from generic_app.crud import validation
from generic_app.db.accessor import AccessorRegistry, PersistenceAccessor
from generic_app.storage.base import StorageService, UploadResult
from generic_app.storage.placeholder_service import PlaceholderStorageService


class InMemoryAccessor(PersistenceAccessor):
    def __init__(self):
        self.rows = {}
        self.calls = []
        self.fail_writes = False

    def create(self, data):
        self.calls.append(("create", dict(data)))
        if self.fail_writes:
            raise RuntimeError("database unavailable")
        row = {"id": str(uuid.uuid4()), **data}
        self.rows[row["id"]] = row
        return dict(row)

    def find_unique(self, id):
        self.calls.append(("find_unique", id))
        row = self.rows.get(id)
        return dict(row) if row else None

    def find_many(self, where=None, order_by=None, skip=None, take=None):
        return [dict(r) for r in self.rows.values()]

    def update(self, id, data):
        self.calls.append(("update", id, dict(data)))
        if self.fail_writes:
            raise RuntimeError("database unavailable")
        if id not in self.rows:
            raise NotFound(id)
        self.rows[id].update(data)
        return dict(self.rows[id])

    def delete(self, id):
        self.calls.append(("delete", id))
        if self.fail_writes:
            raise RuntimeError("database unavailable")
        return self.rows.pop(id)

    def count(self, where=None):
        return len(self.rows)


class FakeStorage(StorageService):
    name = "fake"

    def __init__(self, fail_upload=False, fail_delete=False):
        self.fail_upload = fail_upload
        self.fail_delete = fail_delete
        self.uploads = []
        self.deletes = []

    def is_configured(self):
        return True

    def upload(self, content, folder=None, filename=None, format=None):
        if self.fail_upload:
            raise RuntimeError("upload timed out")
        self.uploads.append({"content": content, "folder": folder, "filename": filename})
        return UploadResult(url=f"https://cdn.test/{folder}/{filename}.png", public_id=f"{folder}/{filename}")

    def delete(self, identifier):
        self.deletes.append(identifier)
        if self.fail_delete:
            raise RuntimeError("cdn refused delete")


def make_entity():
    return EntityConfig(
        name="Book",
        name_plural="Books",
        fields=[
            FieldDefinition(name="id", required=True),
            FieldDefinition(name="title", kind="string", required=True, validation=FieldValidation(min=3)),
            FieldDefinition(name="pages", kind="number", required=True),
            FieldDefinition(name="inPrint", kind="boolean", required=False),
            FieldDefinition(name="summary", kind="longText", required=False),
            FieldDefinition(name="cover", kind="image", required=False),
            FieldDefinition(name="createdAt", kind="date", required=True),
            FieldDefinition(name="updatedAt", kind="date", required=True),
        ],
        display_field="title",
        image_field="cover",
    )


def make_actions(storage=None, features=None, accessor=None, entity=None):
    entity = entity or make_entity()
    accessor = accessor or InMemoryAccessor()
    registry = AccessorRegistry()
    registry.register(entity.model_key, accessor)
    actions = EntityActions(
        entity,
        features or FeaturesConfig(storage=StorageFeatures(enabled=True, max_file_size=1_000)),
        registry,
        storage or FakeStorage(),
        revalidator=PathRevalidator(),
    )
    return actions, accessor


def png(size=10):
    return SubmittedFile(filename="cover.png", content=b"x" * size, content_type="image/png")


def test_create_persists_coerced_fields():
    actions, accessor = make_actions()

    result = actions.create({"title": "Dune", "pages": "412", "inPrint": "on", "summary": "Spice"})

    assert result.success
    [(_, data)] = [c for c in accessor.calls if c[0] == "create"]
    assert {k: v for k, v in data.items() if k != "cover"} == {
        "title": "Dune",
        "pages": 412,
        "inPrint": True,
        "summary": "Spice",
    }
    assert actions.revalidator.drain() == ["/", "/dashboard"]


def test_create_missing_required_field_has_no_side_effects():
    storage = FakeStorage()
    actions, accessor = make_actions(storage=storage)

    result = actions.create({"pages": "100", "cover": png()})

    assert result.kind == ResultKind.VALIDATION
    assert result.errors == {"title": ["title is required"]}
    assert accessor.calls == []
    assert storage.uploads == []
    assert actions.revalidator.drain() == []


def test_zero_is_a_valid_number():
    actions, accessor = make_actions()
    result = actions.create({"title": "Blank", "pages": "0"})
    assert result.success
    assert accessor.calls[0][1]["pages"] == 0


def test_invalid_number_and_min_length_are_reported_together():
    actions, accessor = make_actions()
    result = actions.create({"title": "Go", "pages": "many"})
    assert result.errors == {
        "title": ["title must be at least 3 characters"],
        "pages": ["pages must be a number"],
    }
    assert accessor.calls == []


def test_boolean_only_true_for_truthy_tokens():
    actions, accessor = make_actions()
    actions.create({"title": "Dune", "pages": "1", "inPrint": "yes"})
    assert accessor.calls[0][1]["inPrint"] is False


def test_non_finite_numbers_are_rejected():
    actions, accessor = make_actions()
    for raw in ("nan", "inf", "-Infinity", "1e400"):
        result = actions.create({"title": "Dune", "pages": raw})
        assert result.errors == {"pages": ["pages must be a number"]}, raw
    assert accessor.calls == []


def test_pending_revalidations_do_not_accumulate():
    actions, accessor = make_actions()
    for i in range(50):
        assert actions.create({"title": f"Book {i}", "pages": "1"}).success
    assert actions.revalidator.drain() == ["/", "/dashboard"]
    assert actions.revalidator.drain() == []


def test_revalidation_notifies_subscribers():
    actions, accessor = make_actions()
    seen = []
    actions.revalidator.subscribe(seen.append)
    actions.create({"title": "Dune", "pages": "1"})
    actions.create({"title": "Emma", "pages": "2"})
    assert seen == ["/", "/dashboard", "/", "/dashboard"]


def test_custom_validator_is_applied(monkeypatch):
    monkeypatch.setattr(validation, "CUSTOM_VALIDATORS", dict(validation.CUSTOM_VALIDATORS))

    @register_validator("no-shouting")
    def no_shouting(value):
        return "title must not be all caps" if str(value).isupper() else None

    entity = EntityConfig(
        name="Book",
        name_plural="Books",
        fields=[FieldDefinition(name="title", required=True, validation=FieldValidation(custom="no-shouting"))],
        display_field="title",
    )
    actions, accessor = make_actions(entity=entity)

    result = actions.create({"title": "DUNE"})

    assert result.errors == {"title": ["title must not be all caps"]}


def test_create_without_file_uses_placeholder_with_display_value():
    storage = FakeStorage()
    actions, accessor = make_actions(storage=storage)

    result = actions.create({"title": "War & Peace", "pages": "1225"})

    assert result.success
    assert accessor.calls[0][1]["cover"] == "https://placehold.co/600x400?text=War%20%26%20Peace"
    assert storage.uploads == []


def test_create_uploads_file_to_entity_folder():
    storage = FakeStorage()
    actions, accessor = make_actions(storage=storage)

    result = actions.create({"title": "Dune", "pages": "412", "cover": png()})

    assert result.success
    assert storage.uploads[0]["folder"] == "book-images"
    assert storage.uploads[0]["filename"] == "Dune"
    assert accessor.calls[0][1]["cover"] == "https://cdn.test/book-images/Dune.png"


def test_create_upload_failure_falls_back_to_placeholder():
    actions, accessor = make_actions(storage=FakeStorage(fail_upload=True))

    result = actions.create({"title": "Dune", "pages": "412", "cover": png()})

    assert result.success
    assert accessor.calls[0][1]["cover"] == "https://placehold.co/600x400?text=Dune"
    assert result.warnings


def test_create_rejects_oversized_file():
    storage = FakeStorage()
    actions, accessor = make_actions(storage=storage)

    result = actions.create({"title": "Dune", "pages": "412", "cover": png(size=5_000)})

    assert result.kind == ResultKind.VALIDATION
    assert result.errors == {"cover": ["Max file size is 0.001MB"]}
    assert storage.uploads == []
    assert accessor.calls == []


def test_create_rejects_disallowed_format():
    features = FeaturesConfig(storage=StorageFeatures(enabled=True, allowed_formats=("image/png",)))
    actions, accessor = make_actions(features=features)
    gif = SubmittedFile(filename="a.gif", content=b"GIF89a", content_type="image/gif")

    result = actions.create({"title": "Dune", "pages": "412", "cover": gif})

    assert result.errors == {"cover": ["File type image/gif is not allowed"]}


def test_create_with_storage_disabled_leaves_image_alone():
    features = FeaturesConfig(storage=StorageFeatures(enabled=False))
    storage = FakeStorage()
    actions, accessor = make_actions(storage=storage, features=features)

    actions.create({"title": "Dune", "pages": "412", "cover": png()})

    assert "cover" not in accessor.calls[0][1]
    assert storage.uploads == []


def test_create_persistence_failure_is_generic_form_error():
    accessor = InMemoryAccessor()
    accessor.fail_writes = True
    actions, _ = make_actions(accessor=accessor)

    result = actions.create({"title": "Dune", "pages": "412"})

    assert result.kind == ResultKind.PERSISTENCE
    assert result.errors == {"_form": ["Failed to create entity."]}
    assert actions.revalidator.drain() == []


def test_missing_accessor_fails_operation_not_construction():
    entity = make_entity()
    actions = EntityActions(entity, FeaturesConfig(), AccessorRegistry(), FakeStorage())

    result = actions.create({"title": "Dune", "pages": "412"})

    assert result.errors == {"_form": ["Failed to create entity."]}


def test_disabled_operation_is_refused():
    features = FeaturesConfig(crud=CrudFeatures(create=False))
    actions, accessor = make_actions(features=features)
    result = actions.create({"title": "Dune", "pages": "412"})
    assert result.kind == ResultKind.DISABLED
    assert accessor.calls == []


def _seed(accessor, **row):
    row.setdefault("id", "book-1")
    accessor.rows[row["id"]] = row
    return row["id"]


def test_update_replaces_image_even_if_old_delete_fails():
    storage = FakeStorage(fail_delete=True)
    actions, accessor = make_actions(storage=storage)
    book_id = _seed(accessor, title="Dune", pages=412, cover="https://cdn.test/book-images/old.png")

    result = actions.update(book_id, {"title": "Dune Messiah", "pages": "256", "cover": png()})

    assert result.success
    assert storage.deletes == ["https://cdn.test/book-images/old.png"]
    assert accessor.rows[book_id]["cover"] == "https://cdn.test/book-images/Dune Messiah.png"
    assert accessor.rows[book_id]["title"] == "Dune Messiah"


def test_update_upload_failure_keeps_old_image_but_updates_fields():
    actions, accessor = make_actions(storage=FakeStorage(fail_upload=True))
    book_id = _seed(accessor, title="Dune", pages=412, cover="https://cdn.test/old.png")

    result = actions.update(book_id, {"title": "Dune II", "pages": "500", "cover": png()})

    assert result.success
    assert result.warnings
    assert accessor.rows[book_id]["cover"] == "https://cdn.test/old.png"
    assert accessor.rows[book_id]["title"] == "Dune II"


def test_update_without_file_does_not_touch_storage():
    storage = FakeStorage()
    actions, accessor = make_actions(storage=storage)
    book_id = _seed(accessor, title="Dune", pages=412, cover="https://cdn.test/old.png")

    result = actions.update(book_id, {"title": "Dune", "pages": "413"})

    assert result.success
    assert storage.uploads == [] and storage.deletes == []
    assert accessor.rows[book_id]["cover"] == "https://cdn.test/old.png"


def test_update_validation_runs_before_anything_else():
    actions, accessor = make_actions()
    result = actions.update("book-1", {"title": "", "pages": "1"})
    assert result.errors == {"title": ["title is required"]}
    assert accessor.calls == []


def test_update_missing_record_is_not_found():
    storage = FakeStorage()
    actions, accessor = make_actions(storage=storage)

    with_file = actions.update("nope", {"title": "Dune", "pages": "1", "cover": png()})
    without_file = actions.update("nope", {"title": "Dune", "pages": "1"})

    assert with_file.kind == ResultKind.NOT_FOUND
    assert without_file.kind == ResultKind.NOT_FOUND
    assert storage.uploads == []


def test_update_persistence_failure_is_generic_form_error():
    accessor = InMemoryAccessor()
    actions, _ = make_actions(accessor=accessor)
    book_id = _seed(accessor, title="Dune", pages=412)
    accessor.fail_writes = True

    result = actions.update(book_id, {"title": "Dune", "pages": "1"})

    assert result.errors == {"_form": ["Failed to update entity."]}


def test_delete_missing_record_has_no_side_effects():
    storage = FakeStorage()
    actions, accessor = make_actions(storage=storage)

    result = actions.delete("missing")

    assert result.kind == ResultKind.NOT_FOUND
    assert result.error == "Entity not found"
    assert storage.deletes == []
    assert [c[0] for c in accessor.calls] == ["find_unique"]
    assert actions.revalidator.drain() == []


def test_delete_removes_record_and_asset():
    storage = FakeStorage()
    actions, accessor = make_actions(storage=storage)
    book_id = _seed(accessor, title="Dune", cover="https://cdn.test/dune.png")

    result = actions.delete(book_id)

    assert result.success
    assert book_id not in accessor.rows
    assert storage.deletes == ["https://cdn.test/dune.png"]
    assert actions.revalidator.drain() == ["/", "/dashboard"]


def test_delete_survives_asset_delete_failure():
    actions, accessor = make_actions(storage=FakeStorage(fail_delete=True))
    book_id = _seed(accessor, title="Dune", cover="https://cdn.test/dune.png")

    result = actions.delete(book_id)

    assert result.success
    assert book_id not in accessor.rows
    assert len(result.warnings) == 1


def test_delete_persistence_failure_is_generic_error():
    accessor = InMemoryAccessor()
    actions, _ = make_actions(accessor=accessor)
    book_id = _seed(accessor, title="Dune")
    accessor.fail_writes = True

    result = actions.delete(book_id)

    assert result.kind == ResultKind.PERSISTENCE
    assert result.error == "Failed to delete entity"


def test_placeholder_provider_upload_on_create():
    actions, accessor = make_actions(storage=PlaceholderStorageService())
    result = actions.create({"title": "Dune", "pages": "412", "cover": png()})
    assert result.success
    assert accessor.calls[0][1]["cover"] == "https://placehold.co/600x400/png?text=Dune"
