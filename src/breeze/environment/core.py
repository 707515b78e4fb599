"""Breeze Environment: configuration, globals and template cache."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from breeze.context import Context
from breeze.environment.exceptions import TemplateNotFoundError
from breeze.environment.loaders import Loader
from breeze.template import Template

logger = logging.getLogger(__name__)


class Environment:
    """Central configuration for loading and rendering templates.

    Args:
        loader: Source of named templates for ``get_template()``.
        globals: Variables visible to every template; render-time variables
            shadow them.
        capacity: Initial output buffer capacity (0 selects the default).
        max_output_size: Output size limit per render; exceeding it raises
            ``TemplateMemoryError``. None means unlimited.

    Example:
            >>> env = Environment(globals={"site": "Breeze"})
            >>> env.from_string("{{ site }}: {{ title }}").render(title="Home")
            'Breeze: Home'

    Thread-Safety:
        Templates are cached per name in a plain dict; a lost race only
        loads the same template twice.
    """

    def __init__(
        self,
        loader: Loader | None = None,
        *,
        globals: Context | Mapping[str, Any] | None = None,
        capacity: int = 0,
        max_output_size: int | None = None,
    ):
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        if max_output_size is not None and max_output_size < 0:
            raise ValueError("max_output_size must be non-negative")
        self.loader = loader
        if isinstance(globals, Context):
            self.globals = globals
        else:
            self.globals = Context.from_mapping(globals)
        self.capacity = capacity
        self.max_output_size = max_output_size
        self._cache: dict[str, Template] = {}

    def from_string(self, source: str, name: str | None = None) -> Template:
        """Create a template from source text (not cached)."""
        return Template(self, source, name)

    def get_template(self, name: str) -> Template:
        """Load a template by name through the loader, caching the result.

        Raises:
            TemplateNotFoundError: If there is no loader or it cannot find
                the template.
        """
        cached = self._cache.get(name)
        if cached is not None:
            logger.debug(f"Template cache hit: {name!r}")
            return cached
        if self.loader is None:
            raise TemplateNotFoundError(f"Template '{name}' not found: no loader configured")
        source, filename = self.loader.get_source(name)
        template = Template(self, source, name, filename)
        self._cache[name] = template
        return template

    def render(self, name: str, context: Context | Mapping[str, Any] | None = None, /, **variables: Any) -> str:
        """Shortcut for ``get_template(name).render(...)``."""
        return self.get_template(name).render(context, **variables)

    def list_templates(self) -> list[str]:
        if self.loader is None:
            return []
        return self.loader.list_templates()

    def clear_cache(self) -> None:
        self._cache.clear()
