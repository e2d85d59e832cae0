"""
Reference Resolver for ``$ref`` and Hyperschema ``describedby`` Links.

This module resolves schema references from:
- Local JSON pointers against the root schema (``#/definitions/address``)
- Registered documents (``register("address.json", {...})``)
- fsspec URIs (s3://, gs://, az://, https://, file://, memory://)

Fetched documents are cached in a SchemaCache with TTL. The cache is owned
by the resolver; share a resolver between threads only if its fetcher is
safe to share.

Example:
    >>> resolver = RefResolver({"definitions": {"id": {"type": "integer"}}})
    >>> resolver.expand_refs({"$ref": "#/definitions/id", "minimum": 1})
    {'type': 'integer', 'minimum': 1}
"""

import json
import logging
import time
from typing import Any, Dict, Mapping, Optional, Tuple

from jinja2 import Environment, BaseLoader, TemplateError

from ..exceptions import SchemaRecursionError, UnresolvableReferenceError
from .merge import extend_schema

logger = logging.getLogger(__name__)

# Cache TTL in seconds (default: 5 minutes)
DEFAULT_CACHE_TTL = 300

FSSPEC_SCHEMES = ('s3://', 'gs://', 'az://', 'abfs://',
                  'http://', 'https://', 'file://', 'memory://')


def is_fsspec_uri(ref: str) -> bool:
    """
    Check if reference is an fsspec URI.

    Args:
        ref: Reference string to check

    Returns:
        True if it's an fsspec URI
    """
    return ref.startswith(FSSPEC_SCHEMES)


def split_ref(ref: str) -> Tuple[str, str]:
    """
    Split a reference into (document URI, fragment).

    Examples:
        >>> split_ref("schemas/address.json#/properties/zip")
        ('schemas/address.json', '/properties/zip')
        >>> split_ref("#/definitions/id")
        ('', '/definitions/id')
    """
    if "#" in ref:
        uri, fragment = ref.split("#", 1)
        return uri, fragment
    return ref, ""


def resolve_pointer(document: Any, pointer: str) -> Any:
    """
    Resolve a JSON pointer (RFC 6901) against a document.

    Args:
        document: Root document
        pointer: Pointer such as "/definitions/a~1b" (empty for the whole document)

    Returns:
        The referenced node

    Raises:
        KeyError: If any segment does not exist
    """
    target = document
    for part in pointer.split("/"):
        if part == "":
            continue
        part = part.replace("~1", "/").replace("~0", "~")
        if isinstance(target, Mapping) and part in target:
            target = target[part]
        elif isinstance(target, list) and part.isdigit() and int(part) < len(target):
            target = target[int(part)]
        else:
            raise KeyError(part)
    return target


class SchemaCache:
    """In-memory cache for fetched schemas with TTL."""

    def __init__(self, ttl: int = DEFAULT_CACHE_TTL):
        self.ttl = ttl
        self._cache: Dict[str, Tuple[Dict[str, Any], float]] = {}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Get cached schema if not expired."""
        if key in self._cache:
            schema, timestamp = self._cache[key]
            if time.time() - timestamp < self.ttl:
                return schema
            else:
                del self._cache[key]
        return None

    def set(self, key: str, schema: Dict[str, Any]) -> None:
        """Cache a schema."""
        self._cache[key] = (schema, time.time())

    def clear(self) -> None:
        """Clear all cached schemas."""
        self._cache.clear()


class FsspecSchemaFetcher:
    """Fetch schemas from any fsspec-compatible storage backend."""

    def __init__(self, cache: Optional[SchemaCache] = None):
        self.cache = cache or SchemaCache()

    def fetch(self, uri: str) -> Dict[str, Any]:
        """
        Fetch schema from fsspec URI.

        Args:
            uri: fsspec-compatible URI

        Returns:
            Parsed JSON (or YAML) schema

        Raises:
            FileNotFoundError: If schema not found
            ValueError: If the document cannot be parsed
        """
        cached = self.cache.get(uri)
        if cached is not None:
            logger.debug(f"Schema cache hit: {uri}")
            return cached

        import fsspec

        try:
            with fsspec.open(uri, 'r') as f:
                content = f.read()
        except FileNotFoundError:
            raise FileNotFoundError(f"Schema not found: {uri}")

        if uri.endswith(('.yaml', '.yml')):
            import yaml
            schema = yaml.safe_load(content)
        else:
            try:
                schema = json.loads(content)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in schema {uri}: {e}")

        if not isinstance(schema, dict):
            raise ValueError(f"Schema {uri} is not an object")

        logger.debug(f"Fetched schema: {uri}")
        self.cache.set(uri, schema)
        return schema


class RefResolver:
    """
    Resolve ``$ref`` chains and ``describedby`` links into merged schemas.

    Attributes:
        root_schema: Document that local ``#`` pointers resolve against
        refs: Registered documents by URI
        base_uri: Prefix applied to link hrefs and relative references
        fetcher: Fetcher used for fsspec URIs not found in ``refs``
    """

    def __init__(
        self,
        root_schema: Optional[Mapping[str, Any]] = None,
        refs: Optional[Mapping[str, Mapping[str, Any]]] = None,
        base_uri: str = "",
        fetcher: Optional[FsspecSchemaFetcher] = None,
    ):
        self.root_schema = root_schema or {}
        self.refs: Dict[str, Mapping[str, Any]] = dict(refs or {})
        self.base_uri = base_uri
        self.fetcher = fetcher
        self._jinja_env = Environment(loader=BaseLoader(), autoescape=False)

    def register(self, uri: str, schema: Mapping[str, Any]) -> None:
        """Register a schema document under a URI."""
        self.refs[uri] = schema

    def _document(self, uri: str) -> Mapping[str, Any]:
        if uri == "":
            return self.root_schema
        for candidate in (uri, self.base_uri + uri):
            if candidate in self.refs:
                return self.refs[candidate]
        for candidate in (uri, self.base_uri + uri):
            if is_fsspec_uri(candidate):
                fetcher = self.fetcher or FsspecSchemaFetcher()
                self.fetcher = fetcher
                try:
                    document = fetcher.fetch(candidate)
                except (FileNotFoundError, ValueError, OSError) as e:
                    raise UnresolvableReferenceError(candidate, str(e))
                self.refs[candidate] = document
                return document
        raise UnresolvableReferenceError(uri, "not registered")

    def resolve(self, ref: str) -> Mapping[str, Any]:
        """
        Resolve a reference to the schema it points to.

        Args:
            ref: "#/pointer", "uri", or "uri#/pointer"

        Returns:
            The referenced schema (not copied)

        Raises:
            UnresolvableReferenceError: If the document or pointer is missing
        """
        uri, fragment = split_ref(ref)
        document = self._document(uri)
        try:
            target = resolve_pointer(document, fragment)
        except KeyError as e:
            raise UnresolvableReferenceError(ref, f"missing segment {e}")
        if not isinstance(target, Mapping):
            raise UnresolvableReferenceError(ref, "target is not a schema object")
        return target

    def expand_refs(self, schema: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Follow the ``$ref`` chain of a schema node.

        Each target is extended with the referring node's own keywords, so
        local keywords win over referenced ones.

        Raises:
            UnresolvableReferenceError: If a reference cannot be resolved
            SchemaRecursionError: If the chain revisits a reference
        """
        result = dict(schema)
        seen = set()
        while isinstance(result.get("$ref"), str):
            ref = result.pop("$ref")
            if ref in seen:
                raise SchemaRecursionError(f"$ref {ref}", len(seen))
            seen.add(ref)
            result = extend_schema(self.resolve(ref), result)
        return result

    def render_href(self, href: str, data: Any) -> str:
        """
        Render a link href template against the root value.

        Mapping values expose their keys as template variables; the whole
        value is also available as ``value``.
        """
        context = dict(data) if isinstance(data, Mapping) else {}
        context.setdefault("value", data)
        try:
            rendered = self._jinja_env.from_string(href).render(**context)
        except TemplateError as e:
            raise UnresolvableReferenceError(href, f"template error: {e}")
        return self.base_uri + rendered

    def expand_link(
        self, schema: Mapping[str, Any], index: int, data: Any
    ) -> Dict[str, Any]:
        """
        Expand ``schema["links"][index]`` into the schema it describes.

        The link is removed from the returned schema so expansion does not
        repeat.

        Args:
            schema: Schema carrying the link
            index: Position of the ``describedby`` link
            data: Root value used to fill the href template

        Returns:
            New schema: the link-less schema extended with the link target
        """
        links = list(schema.get("links") or [])
        link = links.pop(index)
        ref = self.render_href(str(link.get("href", "")), data)
        base = dict(schema)
        base["links"] = links
        target = self.expand_refs(self.resolve(ref))
        return extend_schema(base, target)

    def __repr__(self) -> str:
        return f"RefResolver(refs={list(self.refs.keys())}, base_uri={self.base_uri!r})"
