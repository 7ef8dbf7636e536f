"""File writer for generated artifacts."""
import logging
from pathlib import Path
from typing import List
from generic_app.generators.types import GeneratedFile

log = logging.getLogger(__name__)


def write_files(files: List[GeneratedFile], out_dir: Path) -> List[Path]:
    """
    Write generated files to the output directory.

    Existing files are fully overwritten; missing parent directories are
    created and existing ones left alone.

    Args:
        files: List of GeneratedFile objects to write
        out_dir: Base output directory path

    Returns:
        Absolute paths of the written files, in input order
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for file in files:
        file_path = out_dir / file.path
        # Create parent directories if needed
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(file.content, encoding="utf-8")
        log.info("Generated %s", file_path, extra={"action": "write"})
        written.append(file_path)
    return written
