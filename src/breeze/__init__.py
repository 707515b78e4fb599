"""Breeze: a minimal, single-pass template interpreter.

Renders templates made of literal text, ``{{ name }}`` substitutions,
``{% for %}``/``{% if %}`` blocks and ``<!-- -->`` comments against an
ordered, typed, read-only context.

Quickstart:
    >>> import breeze
    >>> breeze.render("Hello {{ name }}, you are {{ age }} years old.", name="John", age=30)
    'Hello John, you are 30 years old.'

Typed context:
    >>> from breeze import Context, Value, ValueType
    >>> ctx = Context([
    ...     ("fruits", Value.array(["apple", "banana"], ValueType.STRING)),
    ...     ("score", Value.float64(95.5)),
    ... ])
    >>> breeze.render("{% for f in fruits %}{{ f }} {% endfor %}{{ score }}", ctx)
    'apple banana 95.5000'

File-based templates:
    >>> from breeze import Environment, FileSystemLoader
    >>> env = Environment(loader=FileSystemLoader("templates/"))
    >>> env.get_template("index.html").render(user="Ada")

Architecture:
Template Source → Renderer (scanner + loop/conditional stacks) → OutputBuffer

There is no lexer, parser or compiler stage: the renderer interprets the
source directly, re-scanning loop bodies once per element.

Thread-Safety:
``Template`` and ``Context`` are immutable. Each render owns its scan state,
stacks and output buffer, so one template may be rendered concurrently from
many threads.

Errors:
Every failure is a ``TemplateError`` with a ``kind`` (parse, syntax, render,
memory), an ``ErrorCode`` and the 1-based line of the offending construct.

"""

from breeze.environment import (
    DictLoader,
    Environment,
    ErrorCode,
    ErrorKind,
    FileSystemLoader,
    SourceSnippet,
    TemplateError,
    TemplateMemoryError,
    TemplateNotFoundError,
    TemplateParseError,
    TemplateRenderError,
    TemplateSyntaxError,
    UndefinedError,
    build_source_snippet,
)
from breeze.buffer import OutputBuffer
from breeze.context import Context
from breeze.engine import Renderer, render
from breeze.template import Template
from breeze.values import Value, ValueType, infer, is_truthy, to_string

__version__ = "0.1.0"

__all__ = [
    "Context",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "ErrorKind",
    "FileSystemLoader",
    "OutputBuffer",
    "Renderer",
    "SourceSnippet",
    "Template",
    "TemplateError",
    "TemplateMemoryError",
    "TemplateNotFoundError",
    "TemplateParseError",
    "TemplateRenderError",
    "TemplateSyntaxError",
    "UndefinedError",
    "Value",
    "ValueType",
    "__version__",
    "build_source_snippet",
    "infer",
    "is_truthy",
    "render",
    "to_string",
]
