"""Tests for the entity config model."""
import json
import pytest
from generic_app.config.domain import (
    EntityConfig,
    FieldDefinition,
    MappedType,
    RawType,
    domain_config,
    load_domain_config,
)
from generic_app.core.errors import ConfigError


def test_duplicate_field_names_are_rejected():
    with pytest.raises(ConfigError):
        EntityConfig(
            name="Item",
            name_plural="Items",
            fields=[FieldDefinition(name="title"), FieldDefinition(name="title")],
        )


def test_defaults_and_derived_names():
    entity = EntityConfig(name="Product", name_plural="Products", fields=[FieldDefinition(name="name")])
    assert entity.display_field == "name"
    assert entity.image_field == "imageUrl"
    assert entity.model_key == "product"
    assert entity.storage_name == "product"
    assert entity.display_field_name == "name"
    # imageUrl is not declared, so it is treated as absent
    assert entity.image_field_name is None


def test_unknown_display_and_image_fields_are_absent():
    entity = EntityConfig(
        name="Item",
        name_plural="Items",
        fields=[FieldDefinition(name="title")],
        display_field="label",
        image_field="photo",
    )
    assert entity.display_field_name is None
    assert entity.image_field_name is None


def test_schema_type_is_tagged():
    assert FieldDefinition(name="a", kind="number").schema_type == MappedType("number")
    assert FieldDefinition(name="b", schema_type_override="String @unique").schema_type == RawType("String @unique")


def test_editable_fields_skip_system_and_image_fields(article_entity):
    names = [f.name for f in article_entity.editable_fields()]
    assert names == ["title", "body", "rating", "featured"]


def test_load_domain_config_accepts_original_aliases(tmp_path):
    doc = {
        "entity": {
            "name": "Pokemon",
            "namePlural": "Pokemon",
            "fields": [
                {"name": "name", "type": "string", "required": True},
                {"name": "description", "type": "text"},
                {"name": "abilities", "type": "array"},
                {"name": "hp", "type": "number", "prismaType": "Int @default(0)",
                 "validation": {"min": 1, "customRuleName": "positive"}},
            ],
            "imageField": "sprite",
        },
        "app": {"name": "Pokedex"},
    }
    path = tmp_path / "domain.json"
    path.write_text(json.dumps(doc), encoding="utf-8")

    config = load_domain_config(path)

    entity = config.entity
    assert config.app.name == "Pokedex"
    assert entity.get_field("description").kind == "longText"
    assert entity.get_field("abilities").kind == "stringArray"
    assert entity.get_field("hp").schema_type_override == "Int @default(0)"
    assert entity.get_field("hp").validation.custom == "positive"
    assert entity.image_field == "sprite"


def test_default_domain_config_is_the_post_entity():
    entity = domain_config.entity
    assert entity.name == "Post"
    assert entity.display_field_name == "title"
    assert entity.image_field_name == "coverImage"
    assert [f.name for f in entity.fields][:3] == ["id", "title", "slug"]
