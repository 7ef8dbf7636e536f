from generic_app.generators.schema_gen.generator import compile_schema, generate_schema

__all__ = ["compile_schema", "generate_schema"]
