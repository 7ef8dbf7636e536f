"""Orchestrator for Prisma schema generation."""
from pathlib import Path
from typing import Optional
from generic_app.config.domain import EntityConfig, domain_config
from generic_app.config.features import FeaturesConfig, features_config
from generic_app.core.config import settings
from generic_app.generators.schema_gen.render import (
    render_preamble,
    render_auth_models,
    render_entity_model,
)
from generic_app.generators.types import GeneratedFile
from generic_app.generators.writer import write_files


def compile_schema(entity: EntityConfig, include_auth_schema: bool) -> str:
    """Compile the entity config into complete Prisma schema text."""
    parts = [render_preamble()]
    if include_auth_schema:
        parts.append(render_auth_models())
    parts.append(render_entity_model(entity))
    return "".join(parts)


def generate_schema(
    entity: Optional[EntityConfig] = None,
    features: Optional[FeaturesConfig] = None,
    root: Optional[Path] = None,
) -> Path:
    """
    Write the schema file for the entity, replacing any previous one.

    Args:
        entity: Entity to compile (defaults to the configured domain entity)
        features: Feature flags; ``auth.enabled`` controls the auth models
        root: Project root the schema path is relative to (defaults to cwd)

    Returns:
        Path of the written schema file
    """
    entity = entity or domain_config.entity
    features = features or features_config
    root = Path(root) if root is not None else Path.cwd()

    schema = compile_schema(entity, include_auth_schema=features.auth.enabled)
    [path] = write_files([GeneratedFile(path=settings.schema_path, content=schema)], root)
    return path
