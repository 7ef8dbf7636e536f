"""Simple string templates for Prisma schema generation (Jinja2-free)."""
from typing import Dict, List
from generic_app.config.domain import EntityConfig, FieldDefinition, FieldKind, MappedType, RawType


DEFAULT_SCHEMA_TYPE = "String"

KIND_TO_SCHEMA_TYPE: Dict[str, str] = {
    FieldKind.STRING.value: "String",
    FieldKind.LONG_TEXT.value: "String",
    FieldKind.IMAGE.value: "String",
    FieldKind.NUMBER.value: "Int",
    FieldKind.BOOLEAN.value: "Boolean",
    FieldKind.DATE.value: "DateTime",
    FieldKind.STRING_ARRAY.value: "String[]",
    FieldKind.JSON.value: "Json",
}

NULLABLE_MARKER = "?"


def _mark_nullable(raw: str) -> str:
    """Append the nullability marker to the type token of a raw schema type."""
    type_token, sep, attributes = raw.strip().partition(" ")
    return f"{type_token}{NULLABLE_MARKER}{sep}{attributes}"


def resolve_field_type(field: FieldDefinition) -> str:
    """Map a field to its Prisma type, honouring overrides and nullability."""
    schema_type = field.schema_type
    if isinstance(schema_type, RawType):
        raw = schema_type.raw
        if not field.required and NULLABLE_MARKER not in raw:
            return _mark_nullable(raw)
        return raw
    if isinstance(schema_type, MappedType):
        base_type = KIND_TO_SCHEMA_TYPE.get(schema_type.kind, DEFAULT_SCHEMA_TYPE)
        if not field.required:
            return base_type + NULLABLE_MARKER
        return base_type
    raise TypeError(f"Unsupported schema type {schema_type!r}")


def render_preamble() -> str:
    """Generator and datasource declaration."""
    return """
generator client {
  provider = "prisma-client-js"
  previewFeatures = ["driverAdapters"]
}

datasource db {
  provider = "postgresql"
}
"""


def render_auth_models() -> str:
    """Fixed models owned by the authentication subsystem."""
    return """

model User {
  id            String    @id @default(cuid())
  name          String?
  email         String    @unique
  emailVerified Boolean
  image         String?
  createdAt     DateTime  @default(now())
  updatedAt     DateTime  @updatedAt
  sessions      Session[]
  accounts      Account[]

  @@map("users")
}

model Session {
  id        String   @id
  userId    String
  token     String   @unique
  expiresAt DateTime
  ipAddress String?
  userAgent String?
  createdAt DateTime @default(now())
  updatedAt DateTime @updatedAt
  user      User     @relation(fields: [userId], references: [id], onDelete: Cascade)

  @@index([userId])
  @@map("sessions")
}

model Account {
  id                    String    @id
  accountId             String
  providerId            String
  userId                String
  user                  User      @relation(fields: [userId], references: [id], onDelete: Cascade)
  accessToken           String?
  refreshToken          String?
  idToken               String?
  accessTokenExpiresAt  DateTime?
  refreshTokenExpiresAt DateTime?
  scope                 String?
  password              String?
  createdAt             DateTime  @default(now())
  updatedAt             DateTime  @updatedAt

  @@index([userId])
  @@map("accounts")
}

model Verification {
  id         String   @id
  identifier String
  value      String
  expiresAt  DateTime
  createdAt  DateTime @default(now())
  updatedAt  DateTime @updatedAt

  @@map("verifications")
}
"""


def render_entity_model(entity: EntityConfig) -> str:
    """Generate the Prisma model block for the configured entity."""
    lines: List[str] = ["", f"model {entity.name} {{"]
    for field in entity.fields:
        lines.append(f"  {field.name} {resolve_field_type(field)}")
    lines.append("")
    lines.append(f'  @@map("{entity.storage_name}")')
    lines.append("}")
    lines.append("")
    return "\n".join(lines)
