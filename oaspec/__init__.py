"""OpenAPI 3 specification objects with validation, value conversion and checks, error maps, JSON body helpers and template helpers."""

__version__ = "0.1.0"