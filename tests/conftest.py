import pytest
from generic_app.config.domain import EntityConfig, FieldDefinition, FieldValidation
from generic_app.core.config import Settings
from generic_app.storage.factory import StorageServiceFactory


@pytest.fixture(autouse=True)
def reset_storage_factory():
    StorageServiceFactory.reset()
    yield
    StorageServiceFactory.reset()


@pytest.fixture
def clean_settings():
    """Settings with no Cloudinary credentials, regardless of the environment."""
    return Settings(
        _env_file=None,
        cloudinary_url=None,
        cloudinary_cloud_name=None,
        cloudinary_api_key=None,
        cloudinary_api_secret=None,
    )


@pytest.fixture
def article_entity():
    return EntityConfig(
        name="Article",
        name_plural="Articles",
        fields=[
            FieldDefinition(name="id", kind="string", required=True, schema_type_override="String @id @default(cuid())"),
            FieldDefinition(name="title", kind="string", required=True, validation=FieldValidation(min=3)),
            FieldDefinition(name="body", kind="longText", required=False),
            FieldDefinition(name="rating", kind="number", required=False),
            FieldDefinition(name="featured", kind="boolean", required=False),
            FieldDefinition(name="heroImage", kind="image", required=False),
            FieldDefinition(name="createdAt", kind="date", required=True, schema_type_override="DateTime @default(now())"),
            FieldDefinition(name="updatedAt", kind="date", required=True, schema_type_override="DateTime @updatedAt"),
        ],
        display_field="title",
        image_field="heroImage",
    )
