"""Breeze Template: a template source bound to its environment.

Templates are immutable and thread-safe. Nothing is precompiled; every
``render()`` call builds a fresh ``Renderer`` (scan state, control stacks,
output buffer) so concurrent renders of one template never share state.

    >>> from breeze import Environment
    >>> t = Environment().from_string("Hello, {{ name }}!")
    >>> t.render(name="World")
    'Hello, World!'
    >>> t.render({"name": "World"})
    'Hello, World!'

"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from breeze.context import Context

if TYPE_CHECKING:
    from breeze.environment import Environment


class Template:
    """Template source ready for rendering.

    Attributes:
        name: Template identifier (for error messages)
        filename: Source file path, when loaded from disk
        source: Template text
    """

    __slots__ = ("_env", "filename", "name", "source")

    def __init__(
        self,
        env: Environment,
        source: str,
        name: str | None = None,
        filename: str | None = None,
    ):
        self._env = env
        self.source = source
        self.name = name
        self.filename = filename

    @property
    def environment(self) -> Environment:
        return self._env

    def render(self, context: Context | Mapping[str, Any] | None = None, /, **variables: Any) -> str:
        """Render the template.

        Lookup order (first match wins): keyword ``variables``, then
        ``context``, then the environment's globals.

        Raises:
            TemplateError: On the first parse, syntax, render or memory error.
        """
        layers: list[Context] = []
        if variables:
            layers.append(Context.from_mapping(variables))
        if isinstance(context, Context):
            layers.append(context)
        elif context:
            layers.append(Context.from_mapping(context))
        if self._env.globals:
            layers.append(self._env.globals)

        from breeze.engine import Renderer

        env = self._env
        renderer = Renderer(
            self.source,
            Context.chain(*layers),
            name=self.filename or self.name,
            capacity=env.capacity,
            max_output_size=env.max_output_size,
        )
        return renderer.render()

    def __repr__(self) -> str:
        return f"<Template {self.name or '(inline)'!r}>"
