"""Build a SQLAlchemy table for the configured entity."""
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Type
from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, MetaData, String, Table, Text
from sqlalchemy.types import TypeEngine
from generic_app.config.domain import EntityConfig, FieldDefinition, FieldKind

KIND_TO_COLUMN_TYPE: Dict[str, Type[TypeEngine]] = {
    FieldKind.STRING.value: Text,
    FieldKind.LONG_TEXT.value: Text,
    FieldKind.IMAGE.value: Text,
    FieldKind.NUMBER.value: Integer,
    FieldKind.BOOLEAN.value: Boolean,
    FieldKind.DATE.value: DateTime,
    FieldKind.STRING_ARRAY.value: JSON,
    FieldKind.JSON.value: JSON,
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


def _field_column(field: FieldDefinition) -> Column:
    if field.name == "id":
        return Column("id", String(36), primary_key=True, default=new_id)
    if field.name == "createdAt":
        return Column("createdAt", DateTime, default=utcnow, nullable=False)
    if field.name == "updatedAt":
        return Column("updatedAt", DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    column_type = KIND_TO_COLUMN_TYPE.get(field.kind, Text)
    default = None
    if field.default_value is not None and field.kind != FieldKind.DATE.value:
        default = field.default_value
    return Column(field.name, column_type(), nullable=not field.required, default=default)


def build_entity_table(entity: EntityConfig, metadata: MetaData) -> Table:
    columns: List[Column] = [_field_column(f) for f in entity.fields]
    if entity.get_field("id") is None:
        columns.insert(0, Column("id", String(36), primary_key=True, default=new_id))
    return Table(entity.storage_name, metadata, *columns)
