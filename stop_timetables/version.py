"""Version information."""

VERSION = "0.1.0"
CONFIG_SCHEMA_VERSION = 1
