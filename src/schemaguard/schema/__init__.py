"""
Schema utilities for SchemaGuard.

This package provides schema manipulation tools:
- merge: schema extension and metaschema checks
- resolver: ``$ref`` and ``describedby`` link resolution with fsspec fetching
"""

from .merge import extend_schema, merge_all, check_schema
from .resolver import (
    RefResolver,
    FsspecSchemaFetcher,
    SchemaCache,
    is_fsspec_uri,
    resolve_pointer,
    split_ref,
)

__all__ = [
    # Merging
    'extend_schema',
    'merge_all',
    'check_schema',
    # Resolution
    'RefResolver',
    'FsspecSchemaFetcher',
    'SchemaCache',
    'is_fsspec_uri',
    'resolve_pointer',
    'split_ref',
]
