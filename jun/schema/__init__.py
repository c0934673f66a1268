"""JSON Schema export and pass/fail validation for JUN documents.

The decoder is the source of truth for what a valid document is. The schema
produced here is generated from the same dialect tables and exists for
editors and other toolchains; nothing in the codec depends on it.
"""

# Layout version of the generated schemas, published as x-jun-dialect.schema_version
SCHEMA_VERSION = "1.1"
