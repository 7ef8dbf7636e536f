"""
Build-time commands.

Usage:
    python -m generic_app.cli schema   # write prisma/schema.prisma
    python -m generic_app.cli pages    # write the src/app/dashboard pages
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional
from generic_app.config.domain import DomainConfig, resolve_domain_config
from generic_app.config.features import features_config
from generic_app.core.logging import configure_logging
from generic_app.generators.scaffold_gen import generate_scaffold
from generic_app.generators.schema_gen import generate_schema

log = logging.getLogger(__name__)

USAGE = """Available commands:
  schema    - Generate prisma/schema.prisma
  pages     - Generate src/app/dashboard pages (alias: scaffold)
"""


def run_schema(domain: DomainConfig, root: Path) -> None:
    log.info("Generating Prisma schema...", extra={"entity": domain.entity.name, "action": "schema"})
    generate_schema(domain.entity, features_config, root=root)


def run_pages(domain: DomainConfig, root: Path) -> None:
    log.info("Generating dashboard pages...", extra={"entity": domain.entity.name, "action": "pages"})
    generate_scaffold(domain.entity, root=root)


COMMANDS = {
    "schema": run_schema,
    "pages": run_pages,
    "scaffold": run_pages,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="generic-app", description="Generate artifacts from the domain config")
    parser.add_argument("command", nargs="?", help="schema | pages")
    parser.add_argument("--root", default=".", help="Project root the artifacts are written under")
    parser.add_argument(
        "--config",
        default=None,
        help="JSON domain config (defaults to DOMAIN_CONFIG_PATH, then the built-in one)",
    )
    args = parser.parse_args(argv)

    command = COMMANDS.get(args.command or "")
    if command is None:
        print(USAGE)
        return 1

    configure_logging()
    domain = resolve_domain_config(args.config)
    command(domain, Path(args.root))
    return 0


if __name__ == "__main__":
    sys.exit(main())
