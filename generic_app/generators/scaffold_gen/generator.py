"""Orchestrator for dashboard scaffold generation."""
from pathlib import Path
from typing import List, Optional
from generic_app.config.domain import EntityConfig, domain_config
from generic_app.core.config import settings
from generic_app.generators.scaffold_gen.render import (
    render_list_scaffold,
    render_create_scaffold,
    render_edit_scaffold,
)
from generic_app.generators.types import GeneratedFile
from generic_app.generators.utils import add_page_dir, edit_page_dir
from generic_app.generators.writer import write_files

PAGE_FILENAME = "page.tsx"


def build_scaffold_files(entity: EntityConfig) -> List[GeneratedFile]:
    """Render the list, add and edit pages, relative to the dashboard directory."""
    return [
        GeneratedFile(path=PAGE_FILENAME, content=render_list_scaffold(entity)),
        GeneratedFile(
            path=f"{add_page_dir(entity)}/{PAGE_FILENAME}",
            content=render_create_scaffold(entity),
        ),
        GeneratedFile(
            path=f"{edit_page_dir(entity)}/{PAGE_FILENAME}",
            content=render_edit_scaffold(entity),
        ),
    ]


def generate_scaffold(
    entity: Optional[EntityConfig] = None,
    root: Optional[Path] = None,
) -> List[GeneratedFile]:
    """
    Generate the dashboard pages for the entity.

    Args:
        entity: Entity to scaffold (defaults to the configured domain entity)
        root: Project root the dashboard directory is relative to (defaults to cwd)

    Returns:
        List of GeneratedFile objects, paths relative to the dashboard directory
    """
    entity = entity or domain_config.entity
    root = Path(root) if root is not None else Path.cwd()

    files = build_scaffold_files(entity)
    write_files(files, root / settings.dashboard_dir)
    return files
