"""
Message catalogs for validation errors.

Each language ships as a YAML file in this package mapping message keys to
Jinja2 templates. Templates see the positional argument list as ``args``:

    error_type: "Value must be of type {{ args[0] }}"

Example:
    >>> catalog = MessageCatalog.load("en")
    >>> catalog.translate("error_type", ["string"])
    'Value must be of type string'
"""

import logging
from importlib import resources
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

import yaml
from jinja2 import Environment, BaseLoader, Template, TemplateError

logger = logging.getLogger(__name__)

# translate(key, args) -> message
Translator = Callable[..., str]


class MessageCatalog:
    """
    Render validation messages from a key -> Jinja2 template mapping.

    Compiled templates are cached per key.

    Attributes:
        language: Catalog language code
        messages: Raw template strings by key
    """

    def __init__(self, messages: Mapping[str, str], language: str = "en"):
        self.language = language
        self.messages: Dict[str, str] = dict(messages)
        self._env = Environment(loader=BaseLoader(), autoescape=False)
        self._template_cache: Dict[str, Template] = {}

    @classmethod
    def load(
        cls, language: str = "en", overrides: Optional[Mapping[str, str]] = None
    ) -> "MessageCatalog":
        """
        Load a bundled catalog, optionally overriding individual messages.

        Args:
            language: Language code matching a bundled ``<language>.yaml``
            overrides: Messages replacing bundled ones

        Returns:
            MessageCatalog instance

        Raises:
            FileNotFoundError: If no catalog ships for the language
        """
        resource = resources.files(__name__).joinpath(f"{language}.yaml")
        if not resource.is_file():
            raise FileNotFoundError(f"No message catalog for language '{language}'")
        messages = yaml.safe_load(resource.read_text(encoding="utf-8")) or {}
        if overrides:
            messages.update(overrides)
        return cls(messages, language=language)

    def translate(self, key: str, args: Optional[Sequence[Any]] = None) -> str:
        """
        Render the message for ``key`` with positional ``args``.

        Unknown keys render as the key itself so custom validators may pass
        pre-formatted text.
        """
        source = self.messages.get(key)
        if source is None:
            logger.debug(f"No message for key '{key}' in catalog '{self.language}'")
            return key
        template = self._template_cache.get(key)
        if template is None:
            try:
                template = self._env.from_string(source)
            except TemplateError as e:
                logger.warning(f"Invalid message template for '{key}': {e}")
                return source
            self._template_cache[key] = template
        return template.render(args=list(args or []))

    __call__ = translate

    def __repr__(self) -> str:
        return f"MessageCatalog(language={self.language!r}, messages={len(self.messages)})"


_default_catalogs: Dict[str, MessageCatalog] = {}


def default_translator(language: str = "en") -> MessageCatalog:
    """Get (or load and cache) the bundled catalog for a language."""
    catalog = _default_catalogs.get(language)
    if catalog is None:
        catalog = MessageCatalog.load(language)
        _default_catalogs[language] = catalog
    return catalog


__all__ = ["MessageCatalog", "Translator", "default_translator"]
