"""Environment, loaders and exceptions for Breeze."""

from breeze.environment.core import Environment
from breeze.environment.exceptions import (
    ErrorCode,
    ErrorKind,
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
from breeze.environment.loaders import DictLoader, FileSystemLoader, Loader

__all__ = [
    "DictLoader",
    "Environment",
    "ErrorCode",
    "ErrorKind",
    "FileSystemLoader",
    "Loader",
    "SourceSnippet",
    "TemplateError",
    "TemplateMemoryError",
    "TemplateNotFoundError",
    "TemplateParseError",
    "TemplateRenderError",
    "TemplateSyntaxError",
    "UndefinedError",
    "build_source_snippet",
]
