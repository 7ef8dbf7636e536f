from generic_app.generators.scaffold_gen.generator import build_scaffold_files, generate_scaffold

__all__ = ["build_scaffold_files", "generate_scaffold"]
