"""Naming helpers shared by the generators."""
from generic_app.config.domain import EntityConfig


def entity_to_model_key(entity: EntityConfig) -> str:
    """Name of the persistence accessor for the entity (lowercase entity name)."""
    return entity.name.lower()


def add_page_dir(entity: EntityConfig) -> str:
    """Dashboard directory of the create page, e.g. ``add-post``."""
    return f"add-{entity.name.lower()}"


def edit_page_dir(entity: EntityConfig) -> str:
    """Dashboard directory of the edit page, e.g. ``edit-post/[id]``."""
    return f"edit-{entity.name.lower()}/[id]"
