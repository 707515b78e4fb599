"""Exceptions for the Breeze template system.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError     # Template not found by loader
├── TemplateParseError        # Malformed tag syntax ({{ without }}, stray -->)
├── TemplateSyntaxError       # Structural mismatch (bad for header, unclosed if)
├── TemplateRenderError       # Missing or mistyped context variable
│   └── UndefinedError        # Missing variable, with "Did you mean?" hint
└── TemplateMemoryError       # Output buffer could not grow

Every render error carries an ``ErrorKind``, a searchable ``ErrorCode``, the
bare ``message`` and the 1-based ``lineno`` of the offending construct:

    ```
    Render Error: Missing template variable for 'titl'
      --> article.html:5
       |
     5 | <h1>{{ titl }}</h1>
    Did you mean 'title'?
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum

from breeze.environment import terminal

MAX_MESSAGE_LENGTH = 255


class ErrorKind(Enum):
    """Broad class of a template failure."""

    PARSE = "parse"
    SYNTAX = "syntax"
    RENDER = "render"
    MEMORY = "memory"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ErrorCode(Enum):
    """Searchable error codes for Breeze template errors.

    Format: B-{CATEGORY}-{NUMBER}
    Categories: PAR (parse), SYN (syntax), RUN (render), MEM (memory),
    TPL (template loading)
    """

    # Parse errors (B-PAR-xxx)
    UNCLOSED_VARIABLE = "B-PAR-001"
    UNCLOSED_TAG = "B-PAR-002"
    NAME_TOO_LONG = "B-PAR-003"
    DIRECTIVE_TOO_LONG = "B-PAR-004"
    UNMATCHED_COMMENT_CLOSE = "B-PAR-005"

    # Syntax errors (B-SYN-xxx)
    INVALID_FOR = "B-SYN-001"
    INVALID_IF = "B-SYN-002"
    UNKNOWN_DIRECTIVE = "B-SYN-003"
    UNMATCHED_END = "B-SYN-004"
    UNCLOSED_BLOCK = "B-SYN-005"
    UNCLOSED_COMMENT = "B-SYN-006"

    # Render errors (B-RUN-xxx)
    UNDEFINED_VARIABLE = "B-RUN-001"
    NOT_AN_ARRAY = "B-RUN-002"

    # Memory errors (B-MEM-xxx)
    OUTPUT_LIMIT = "B-MEM-001"

    # Template loading errors (B-TPL-xxx)
    TEMPLATE_NOT_FOUND = "B-TPL-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'parse', 'syntax', 'render')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parse",
            "SYN": "syntax",
            "RUN": "render",
            "MEM": "memory",
            "TPL": "template",
        }.get(prefix, "unknown")


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source lines around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int

    def format(self) -> str:
        """Format the snippet with line numbers, marking the error line."""
        parts: list[str] = [terminal.dim_text("   |")]
        for lineno, content in self.lines:
            parts.append(
                terminal.format_source_line(lineno, content, is_error=lineno == self.error_line)
            )
        parts.append(terminal.dim_text("   |"))
        return "\n".join(parts)


def build_source_snippet(source: str, error_line: int, *, context_lines: int = 1) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line)


class TemplateError(Exception):
    """Base exception for all Breeze template errors.

    Catch this to handle every failure a render can produce:

        >>> try:
        ...     template.render(ctx)
        ... except TemplateError as e:
        ...     log.error("line %s: %s", e.lineno, e.message)

    Attributes:
        kind: ErrorKind of the failure, None for loader errors.
        code: ErrorCode identifying the failure.
        message: Human-readable message without location.
        lineno: 1-based line of the offending construct.
        template_name: Template name or filename, when known.
        source: Template source, used for the snippet.
    """

    kind: ErrorKind | None = None
    code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        *,
        code: ErrorCode | None = None,
        template_name: str | None = None,
        source: str | None = None,
    ):
        self.message = message[:MAX_MESSAGE_LENGTH]
        self.lineno = lineno
        if code is not None:
            self.code = code
        self.template_name = template_name
        self.source = source
        super().__init__(self._format_message())

    @property
    def location(self) -> str:
        loc = self.template_name or "<template>"
        if self.lineno:
            loc += f":{self.lineno}"
        return loc

    @property
    def source_snippet(self) -> SourceSnippet | None:
        if not self.source or not self.lineno:
            return None
        if self.lineno > len(self.source.splitlines()):
            return None
        return build_source_snippet(self.source, self.lineno)

    def _title(self) -> str:
        if self.kind is None:
            return self.message
        return f"{self.kind.label} Error: {self.message}"

    def _hints(self) -> list[str]:
        return []

    def _format_message(self) -> str:
        parts = [self._title()]
        if self.lineno:
            parts.append(f"  --> {self.location}")
        snippet = self.source_snippet
        if snippet is not None:
            parts.append(snippet.format())
        parts.extend(self._hints())
        return "\n".join(parts)

    def format_compact(self) -> str:
        """Format error as a structured, human-readable summary.

        Produces a diagnostic suitable for terminal display, without Python
        traceback noise::

            B-RUN-001: Missing template variable for 'usernme'
              --> base.html:42
               |
            > 42 | <h1>{{ usernme }}</h1>
               |
              Hint: Did you mean 'username'?
        """
        parts = [
            terminal.format_error_header(self.code.value if self.code else None, self.message)
        ]
        if self.lineno:
            parts.append(f"  --> {terminal.location(self.location)}")
        snippet = self.source_snippet
        if snippet is not None:
            parts.append(snippet.format())
        for text in self._hints():
            parts.append(f"  {terminal.hint('Hint:')} {text}")
        return "\n".join(parts)


class TemplateNotFoundError(TemplateError):
    """Template not found by the configured loader.

    Raised when ``Environment.get_template(name)`` cannot locate the template.
    """

    code = ErrorCode.TEMPLATE_NOT_FOUND


class TemplateParseError(TemplateError):
    """Malformed tag syntax: unterminated ``{{``/``{%``, over-long names or
    directives, or a ``-->`` with no open comment."""

    kind = ErrorKind.PARSE


class TemplateSyntaxError(TemplateError):
    """Structural mismatch in the template.

    Raised for a malformed ``for`` header, an ``endfor``/``else``/``endif``
    with no opener, an unknown directive, or a loop, conditional or comment
    still open at end of input.
    """

    kind = ErrorKind.SYNTAX


class TemplateRenderError(TemplateError):
    """A referenced context variable is missing or has the wrong type."""

    kind = ErrorKind.RENDER


class UndefinedError(TemplateRenderError):
    """Raised when a template references a variable the context lacks.

    If ``available_names`` is given, a "Did you mean?" hint is added when a
    close match exists (``difflib.get_close_matches``).

    Example:
            >>> render("{{ age }}")
        UndefinedError: Render Error: Missing template variable for 'age'
    """

    code = ErrorCode.UNDEFINED_VARIABLE

    def __init__(
        self,
        name: str,
        lineno: int | None = None,
        *,
        available_names: frozenset[str] | None = None,
        template_name: str | None = None,
        source: str | None = None,
    ):
        self.name = name
        self._available_names = available_names
        super().__init__(
            f"Missing template variable for '{name}'",
            lineno,
            template_name=template_name,
            source=source,
        )

    @property
    def suggestion(self) -> str | None:
        """Closest available variable name, if any."""
        if not self._available_names:
            return None
        matches = get_close_matches(self.name, sorted(self._available_names), n=1, cutoff=0.6)
        return matches[0] if matches else None

    def _hints(self) -> list[str]:
        suggested = self.suggestion
        if suggested is None:
            return []
        return [f"Did you mean '{terminal.suggestion(suggested)}'?"]


class TemplateMemoryError(TemplateError):
    """The output buffer could not grow (allocation failure or size limit)."""

    kind = ErrorKind.MEMORY
    code = ErrorCode.OUTPUT_LIMIT
