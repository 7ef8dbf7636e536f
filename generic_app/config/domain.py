"""
Domain configuration.

Defines the entity structure and display rules the whole application is
derived from. The default ``domain_config`` below is the config-as-code
definition for this deployment; modify it (or point ``DOMAIN_CONFIG_PATH``
at a JSON document) to transform the app into a different domain.
"""
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from generic_app.core.config import settings
from generic_app.core.errors import ConfigError


class FieldKind(str, Enum):
    STRING = "string"
    LONG_TEXT = "longText"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    IMAGE = "image"
    STRING_ARRAY = "stringArray"
    JSON = "json"


# Kind names used by older config documents
KIND_ALIASES = {
    "text": FieldKind.LONG_TEXT.value,
    "array": FieldKind.STRING_ARRAY.value,
}

SYSTEM_FIELDS = frozenset({"id", "createdAt", "updatedAt"})


@dataclass(frozen=True)
class FieldValidation:
    min: Optional[int] = None
    max: Optional[int] = None
    pattern: Optional[str] = None
    custom: Optional[str] = None  # name of a registered custom validator


@dataclass(frozen=True)
class MappedType:
    """Schema type derived from the field kind."""
    kind: str


@dataclass(frozen=True)
class RawType:
    """Schema type given verbatim by the config."""
    raw: str


SchemaType = Union[MappedType, RawType]


def _validation_from_dict(data: Dict[str, Any]) -> FieldValidation:
    return FieldValidation(
        min=data.get("min"),
        max=data.get("max"),
        pattern=data.get("pattern"),
        custom=data.get("custom") or data.get("customRuleName"),
    )


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    kind: str = FieldKind.STRING.value
    required: bool = False
    default_value: Any = None
    validation: Optional[FieldValidation] = None
    schema_type_override: Optional[str] = None

    @property
    def schema_type(self) -> SchemaType:
        if self.schema_type_override:
            return RawType(self.schema_type_override)
        return MappedType(self.kind)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldDefinition":
        kind = data.get("kind") or data.get("type") or FieldKind.STRING.value
        validation = data.get("validation")
        return cls(
            name=data["name"],
            kind=KIND_ALIASES.get(kind, kind),
            required=bool(data.get("required", False)),
            default_value=data.get("defaultValue"),
            validation=_validation_from_dict(validation) if validation else None,
            schema_type_override=data.get("schemaTypeOverride") or data.get("prismaType"),
        )


@dataclass(frozen=True)
class EntityConfig:
    name: str
    name_plural: str
    fields: Tuple[FieldDefinition, ...]
    table_name: Optional[str] = None
    display_field: str = "name"
    image_field: str = "imageUrl"

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "fields", tuple(self.fields))
        seen = set()
        for f in self.fields:
            if f.name in seen:
                raise ConfigError(f"Duplicate field '{f.name}' in entity {self.name}")
            seen.add(f.name)

    @property
    def model_key(self) -> str:
        """Key of the generic persistence accessor for this entity."""
        return self.name.lower()

    @property
    def storage_name(self) -> str:
        return self.table_name or self.name.lower()

    def get_field(self, name: Optional[str]) -> Optional[FieldDefinition]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    @property
    def display_field_name(self) -> Optional[str]:
        return self.display_field if self.get_field(self.display_field) else None

    @property
    def image_field_name(self) -> Optional[str]:
        return self.image_field if self.get_field(self.image_field) else None

    def editable_fields(self) -> List[FieldDefinition]:
        """Fields a user submits through a form, in declaration order."""
        image_field = self.image_field_name
        return [
            f for f in self.fields
            if f.name not in SYSTEM_FIELDS
            and f.name != image_field
            and f.kind != FieldKind.IMAGE.value
        ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntityConfig":
        return cls(
            name=data["name"],
            name_plural=data.get("namePlural", data["name"] + "s"),
            table_name=data.get("tableName"),
            fields=tuple(FieldDefinition.from_dict(f) for f in data.get("fields", [])),
            display_field=data.get("displayField") or "name",
            image_field=data.get("imageField") or "imageUrl",
        )


@dataclass(frozen=True)
class AppInfo:
    name: str
    description: str = ""
    base_url: Optional[str] = None


@dataclass(frozen=True)
class DomainConfig:
    entity: EntityConfig
    app: AppInfo = field(default_factory=lambda: AppInfo(name="Generic App"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DomainConfig":
        app = data.get("app", {})
        return cls(
            entity=EntityConfig.from_dict(data["entity"]),
            app=AppInfo(
                name=app.get("name", "Generic App"),
                description=app.get("description", ""),
                base_url=app.get("baseUrl"),
            ),
        )


def load_domain_config(path: Union[str, Path]) -> DomainConfig:
    """Load a domain config from a JSON document."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if "entity" not in data:
        # A bare entity document
        data = {"entity": data}
    return DomainConfig.from_dict(data)


domain_config = DomainConfig(
    entity=EntityConfig(
        name="Post",
        name_plural="Posts",
        table_name="post",
        fields=(
            FieldDefinition(
                name="id",
                kind="string",
                required=True,
                schema_type_override="String @id @default(cuid())",
            ),
            FieldDefinition(
                name="title",
                kind="string",
                required=True,
                validation=FieldValidation(min=5),
            ),
            FieldDefinition(
                name="slug",
                kind="string",
                required=True,
                schema_type_override="String @unique",
            ),
            FieldDefinition(
                name="content",
                kind="longText",
                required=True,
                schema_type_override="String",
            ),
            FieldDefinition(
                name="published",
                kind="boolean",
                required=False,
                default_value=False,
                schema_type_override="Boolean @default(false)",
            ),
            FieldDefinition(name="coverImage", kind="image", required=False),
            FieldDefinition(
                name="tags",
                kind="string",
                required=False,
                schema_type_override="String?",
            ),
            FieldDefinition(
                name="createdAt",
                kind="date",
                required=True,
                default_value="now()",
                schema_type_override="DateTime @default(now())",
            ),
            FieldDefinition(
                name="updatedAt",
                kind="date",
                required=True,
                schema_type_override="DateTime @updatedAt",
            ),
        ),
        display_field="title",
        image_field="coverImage",
    ),
    app=AppInfo(
        name="DevBlog Engine",
        description="A developer blog powered by generic-app",
    ),
)


def resolve_domain_config(path: Optional[Union[str, Path]] = None) -> DomainConfig:
    """
    The domain config for this deployment.

    An explicit path wins, then ``settings.domain_config_path``; without
    either the built-in ``domain_config`` is used. The build commands and
    the API both go through here so they always agree on the entity.
    """
    path = path or settings.domain_config_path
    if path:
        return load_domain_config(path)
    return domain_config
