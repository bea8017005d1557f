"""OpenAPI schemas as SQL tables: schema navigation, server URLs, dialect views and request-body merging."""

__version__ = "0.1.0"

__all__ = [
    "brickmap",
    "columns",
    "compression",
    "lineage",
    "schema",
    "schema_paths",
    "servers",
    "sql_external",
    "token_semantic",
    "view",
]