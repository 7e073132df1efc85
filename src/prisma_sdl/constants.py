"""Formatting constants and default configuration values.

Defaults mirror the state of a freshly created schema in the editor: a
PostgreSQL datasource reading its URL from the environment and the JS client
generator targeting the native binary.
"""

# =============================================================================
# Layout
# =============================================================================

# Indentation used for every line inside a block
INDENT = "  "

# Separator between top-level sections and between blocks of the same kind
SECTION_SEPARATOR = "\n\n"

# Name given to positional attribute arguments
POSITIONAL_ARGUMENT_NAME = "value"

# Default file name used when a generated document is written out
DEFAULT_SCHEMA_FILENAME = "schema.prisma"

# =============================================================================
# Default config blocks
# =============================================================================

DEFAULT_DATASOURCE_NAME = "db"
DEFAULT_DATASOURCE_PROVIDER = "postgresql"
DEFAULT_DATASOURCE_URL = 'env("DATABASE_URL")'

DEFAULT_GENERATOR_NAME = "client"
DEFAULT_GENERATOR_PROVIDER = "prisma-client-js"
DEFAULT_BINARY_TARGETS = ("native",)

# =============================================================================
# Remote store
# =============================================================================

DEFAULT_SCHEMA_ENDPOINT = "/schema"
