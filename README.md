# sdkmodel

`sdkmodel` is a library for working with OpenAPI schemas as the source of
SQL-style tables. It walks schemas by property path, JSON path or XML
element name, flattens `allOf` / `anyOf` / `oneOf` compositions, expands
server URL templates, picks view DDL by SQL dialect, and merges dotted-path
request-body values into nested objects.

## Modules

- `sdkmodel.schema`
  - `Schema` and `SchemaRef` hold OpenAPI schema objects.
    `Schema.from_dict(data, service, key, path)` builds one from its
    document form. A `'#/...'` reference is resolved against
    `service.document` when the given service has that attribute.
    Recursive references are shared, not copied.
  - A `Schema` offers `properties()`, `property(key)`, `property_schema(key)`,
    `items()` and `additional_properties()`. It also has the predicates
    `is_required`, `is_integral`, `is_boolean`, `is_float`, `is_array_ref`
    and `has_polymorphic_properties`.
  - It has `fattened_polymorphic_schema()` for merged compositions.
  - It gives the XML names `xml_alias()`, `xml_name()` and `is_xml_wrapped()`.
  - `provider_type_condition_is_valid(provider_type, lhs, rhs)` checks a
    value against a provider type name.
- `sdkmodel.schema_paths`
  - `descendent`, `xml_descendent`, `xml_child` and `find_by_path` navigate
    a schema.
  - `select_items_schema` and `select_list_items` find the schema of the
    rows selected under a key.
- `sdkmodel.columns`: `ColumnDescriptor` is a frozen column description.
  Its `identifier()` gives the alias if there is one, else the name.
- `sdkmodel.servers`
  - `Server` and `ServerVariable` describe server entries. Use
    `Server.from_dict` to read one.
  - `generate_server_url` expands a server's URL. It uses a supplied value,
    or else the variable's default.
  - `obtain_server_urls` returns every URL that can be expanded.
  - `replace_simple_string_vars` substitutes `{name}` placeholders in a
    single pass.
- `sdkmodel.view`: `ViewContainer` holds view DDL. A predicate such as
  `sqlDialect == "sqlite3"` or `requiredParams == [...]` chooses the view,
  and it may carry a chain of fallbacks. `ViewContainer.load_yaml` reads one
  from YAML.
- `sdkmodel.token_semantic`: `TokenSemantic` says where a pagination token
  is found: its `key`, `location`, `algorithm` and `args`. `regex()` reads
  the `regex` argument.
- `sdkmodel.lineage`
  - `ObjectWithLineage` is a value stored under a dotted key below a dotted
    parent key.
  - `ObjectWithLineageCollection` collects these values. `merge()` nests
    them, and `flat_objects()` then returns top-level
    `ObjectWithoutLineage` items.
- `sdkmodel.brickmap`: `BrickMap` is a tree of dicts addressed by key paths.
  - It has `set`, `get` and `delete`.
  - `to_flat_map` returns the top level. A key listed in
    `BrickMapConfig.stringified_paths` is rendered as a string, in JSON by
    default or in XML when the encoding is `application/xml`.
  - Invalid paths raise `BrickMapError`.
- `sdkmodel.sql_external`: `SQLExternalConnection`, `SQLExternalTable` and
  `SQLExternalColumn` describe tables in external SQL databases. Each has a
  `from_dict`.
- `sdkmodel.compression`: `decompress_to_path(stream, target)` extracts a
  gzipped tar stream into a directory.

## Examples

Expanding a server URL:

```python
from sdkmodel.servers import Server, generate_server_url

server = Server.from_dict({
    "url": "https://{region}.api.example.com/v1",
    "variables": {"region": {"default": "us-east-1"}},
})
generate_server_url(server)                           # "https://us-east-1.api.example.com/v1"
generate_server_url(server, {"region": "eu-west-1"})  # "https://eu-west-1.api.example.com/v1"
```

Choosing views by SQL dialect:

```python
from sdkmodel.view import ViewContainer

view = ViewContainer.load_yaml('''
predicate: sqlDialect == "sqlite3"
ddl: select * from someprovider.someservice.someresource
fallback:
    ddl: select * from someprovider.someservice.someresource where x = true
''')

view.sql_dialect_name()                # "sqlite3"
view.views_for_sql_dialect("postgres") # only the fallback, which names no dialect
```

Reading a schema:

```python
from sdkmodel.schema import Schema

schema = Schema.from_dict({"type": "object", "properties": {"id": {"type": "string"}}})
schema.property("id").type()   # "string"
```

Merging request-body fragments:

```python
from sdkmodel.lineage import ObjectWithLineage, ObjectWithLineageCollection

collection = ObjectWithLineageCollection()
collection.push_back(ObjectWithLineage("a.b", 1, parent_key="properties"))
collection.merge()
collection.flat_objects()   # [ObjectWithoutLineage(key='properties', value={'a': {'b': 1}})]
```

Errors are raised as exceptions:

- `ValueError` when no server URL can be expanded or no select rows are found.
- `KeyError` for missing properties, lookups and tokens.
- `BrickMapError` for conflicting key paths.

## What this package does not do

This is a library only. It does not provide:

- a command-line tool;
- loading of whole provider or service documents;
- turning schemas into table and column lists;
- HTTP requests, authentication or response processing.

Schemas, servers, views and the other objects are built from dictionaries
that you have already parsed.

## Requirements

Python 3.10 or newer and PyYAML. The tests use pytest (`pip install .[test]`).