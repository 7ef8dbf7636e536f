"""Simple script to verify schema and dashboard page generation for the configured entity."""
import tempfile
from pathlib import Path
from generic_app.config.domain import domain_config
from generic_app.config.features import features_config
from generic_app.core.config import settings
from generic_app.generators.scaffold_gen import generate_scaffold
from generic_app.generators.schema_gen import generate_schema


def snapshot(root: Path) -> dict:
    return {str(p.relative_to(root)): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


with tempfile.TemporaryDirectory() as temp_dir:
    root = Path(temp_dir)
    entity = domain_config.entity

    schema_path = generate_schema(entity, features_config, root=root)
    generate_scaffold(entity, root=root)
    first = snapshot(root)

    # Second run must reproduce the same bytes
    generate_schema(entity, features_config, root=root)
    generate_scaffold(entity, root=root)
    second = snapshot(root)

    print("=" * 60)
    print("FILE GENERATION TEST")
    print("=" * 60)
    print(f"Entity: {entity.name} (accessor: {entity.model_key})")
    for path, content in first.items():
        print(f"  {path}: {len(content)} bytes")
    print(f"Idempotent: {first == second}")

    if first != second or not schema_path.exists():
        print("\nFAILURE: generated artifacts are missing or differ between runs!")
        exit(1)

    print(f"\nSUCCESS: {settings.schema_path} and {len(first) - 1} dashboard pages generated!")
    lines = schema_path.read_text(encoding="utf-8").splitlines()
    model_start = next(i for i, line in enumerate(lines) if line.startswith(f"model {entity.name} "))
    print(f"\nModel block of {settings.schema_path}:")
    for i, line in enumerate(lines[model_start:], model_start + 1):
        print(f"  {i:3}: {line}")
