"""Single-pass rendering engine.

The engine walks the template source once, left to right, and dispatches on
four markers:

- ``<!-- ... -->``: HTML comment, consumed without output
- ``{{ name }}``: substitution from the innermost loop or the context
- ``{% ... %}``: directive (``for``/``endfor``/``if``/``else``/``endif``)
- anything else: literal text, copied to the output

There is no syntax tree. Block structure comes from the loop and conditional
stacks (``breeze.stacks``): ``endfor`` jumps back to the loop body start
while elements remain, a false ``if`` jumps forward to its ``else`` or
``endif``, and a true branch reaching ``else`` jumps forward to ``endif``.
Loop bodies are re-scanned on every iteration.

Whitespace Control:
    A directive alone on its line (only whitespace around it) is removed
    together with its indentation and trailing newline, so block tags can
    be indented like markup without leaving blank lines in the output:

        >>> render("Hello\\n  {% if show %}\\n    {{ name }}\\n  {% endif %}\\nWorld",
        ...        show=True, name="John")
        'Hello\\n    John\\nWorld'

Errors:
    The first problem aborts the render with a ``TemplateError`` subclass
    carrying the 1-based line of the offending construct. Output written
    before the failure is discarded.

"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import Any, NamedTuple

from breeze.buffer import OutputBuffer
from breeze.context import Context
from breeze.environment.exceptions import (
    ErrorCode,
    TemplateError,
    TemplateMemoryError,
    TemplateParseError,
    TemplateRenderError,
    TemplateSyntaxError,
    UndefinedError,
)
from breeze.stacks import ConditionalFrame, ConditionalStack, LoopFrame, LoopStack
from breeze.values import Value, ValueType, is_truthy, to_string

logger = logging.getLogger(__name__)

VARIABLE_START = "{{"
VARIABLE_END = "}}"
BLOCK_START = "{%"
BLOCK_END = "%}"
COMMENT_START = "<!--"
COMMENT_END = "-->"

MAX_NAME_LENGTH = 127
MAX_DIRECTIVE_LENGTH = 127

_MARKER_RE = re.compile(r"<!--|-->|\{\{|\{%")

# keyword -> handler method name
_DIRECTIVES: dict[str, str] = {
    "for": "_handle_for",
    "endfor": "_handle_endfor",
    "if": "_handle_if",
    "else": "_handle_else",
    "endif": "_handle_endif",
}

# Keywords that must appear alone inside their tag.
_BARE_KEYWORDS = frozenset({"endfor", "else", "endif"})


class _Tag(NamedTuple):
    """A ``{% ... %}`` tag found by a forward search."""

    keyword: str
    start: int
    end: int  # -1 when the construct at ``start`` is never closed


class Renderer:
    """Renders one template source against one context, once.

    A Renderer owns all per-render state (scan position, loop stack,
    conditional stack, output buffer), so it must not be shared or reused;
    ``Template.render()`` creates a fresh one per call.

    Args:
        source: Template text.
        context: Variables visible to the template.
        name: Template name or filename for error messages.
        capacity: Initial output capacity (0 selects the default).
        max_output_size: Optional output limit; exceeding it raises
            ``TemplateMemoryError``.
    """

    __slots__ = (
        "_comment_start",
        "_conditionals",
        "_context",
        "_in_comment",
        "_loops",
        "_name",
        "_out",
        "_source",
    )

    def __init__(
        self,
        source: str,
        context: Context,
        *,
        name: str | None = None,
        capacity: int = 0,
        max_output_size: int | None = None,
    ):
        self._source = source
        self._context = context
        self._name = name
        self._out = OutputBuffer(capacity, max_output_size)
        self._loops = LoopStack()
        self._conditionals = ConditionalStack()
        self._in_comment = False
        self._comment_start = 0

    def render(self) -> str:
        """Render the template and return the output text.

        Raises:
            TemplateError: On the first parse, syntax, render or memory error.
        """
        src = self._source
        end = len(src)
        logger.debug(f"Rendering {self._name or '<template>'}: {end} chars, {len(self._context)} vars")

        pos = 0
        while pos < end:
            if self._in_comment:
                close = src.find(COMMENT_END, pos)
                if close == -1:
                    break
                self._in_comment = False
                pos = close + len(COMMENT_END)
                continue

            skip = self._conditionals.skipping
            match = _MARKER_RE.search(src, pos)
            literal_end = match.start() if match else end
            if literal_end > pos:
                if not skip:
                    self._emit(src[pos:literal_end], pos)
                pos = literal_end
            if match is None:
                break

            marker = match.group()
            if marker == COMMENT_START:
                self._in_comment = True
                self._comment_start = pos
                pos += len(COMMENT_START)
            elif marker == COMMENT_END:
                raise self._error(
                    TemplateParseError,
                    "Unmatched comment closing tag '-->'",
                    pos,
                    ErrorCode.UNMATCHED_COMMENT_CLOSE,
                )
            elif marker == VARIABLE_START:
                pos = self._substitute(pos, skip)
            else:
                pos = self._directive(pos, skip)

        self._check_closed()
        return self._out.getvalue()

    # ------------------------------------------------------------------
    # Constructs
    # ------------------------------------------------------------------

    def _substitute(self, pos: int, skip: bool) -> int:
        """Handle ``{{ name }}`` at ``pos``; return the position after it."""
        start = pos + len(VARIABLE_START)
        close = self._source.find(VARIABLE_END, start)
        if close == -1:
            raise self._error(
                TemplateParseError, "Unterminated '{{' tag", pos, ErrorCode.UNCLOSED_VARIABLE
            )
        if not skip:
            raw = self._source[start:close]
            if len(raw) > MAX_NAME_LENGTH:
                raise self._error(
                    TemplateParseError, "Variable name is too long", pos, ErrorCode.NAME_TOO_LONG
                )
            self._emit(to_string(self._resolve(raw.strip(), pos)), pos)
        return close + len(VARIABLE_END)

    def _directive(self, pos: int, skip: bool) -> int:
        """Handle the ``{% ... %}`` tag at ``pos``; return where to resume."""
        src = self._source
        start = pos + len(BLOCK_START)
        close = src.find(BLOCK_END, start)
        if close == -1:
            raise self._error(TemplateParseError, "Unterminated '{%' tag", pos, ErrorCode.UNCLOSED_TAG)
        after = close + len(BLOCK_END)

        if self._is_standalone(pos, after):
            if not skip:
                self._out.truncate_to_line_start()
            newline = src.find("\n", after)
            resume = len(src) if newline == -1 else newline + 1
        else:
            resume = after

        raw = src[start:close]
        if len(raw) > MAX_DIRECTIVE_LENGTH:
            raise self._error(
                TemplateParseError, "Directive is too long", pos, ErrorCode.DIRECTIVE_TOO_LONG
            )
        command = raw.strip()
        keyword = command.split(None, 1)[0] if command else ""
        method = _DIRECTIVES.get(keyword)
        if method is None:
            raise self._error(
                TemplateSyntaxError,
                f"Unknown directive '{command}'",
                pos,
                ErrorCode.UNKNOWN_DIRECTIVE,
            )
        if keyword in _BARE_KEYWORDS and command != keyword:
            raise self._error(
                TemplateSyntaxError,
                f"'{keyword}' takes no arguments",
                pos,
                ErrorCode.UNKNOWN_DIRECTIVE,
            )
        handler = getattr(self, method)
        return handler(command, pos, resume, skip)

    def _handle_for(self, command: str, tag_start: int, pos: int, skip: bool) -> int:
        if skip:
            return pos
        parts = command.split()
        if len(parts) != 4 or parts[2] != "in":
            raise self._error(
                TemplateSyntaxError,
                "Invalid 'for' loop. Use: {% for item in items %}",
                tag_start,
                ErrorCode.INVALID_FOR,
            )
        _, var_name, _, array_name = parts
        array = self._context.get(array_name)
        if array is None:
            raise self._undefined(array_name, tag_start)
        if array.type is not ValueType.ARRAY:
            raise self._error(
                TemplateRenderError,
                f"Variable '{array_name}' for loop is not a valid array",
                tag_start,
                ErrorCode.NOT_AN_ARRAY,
            )

        self._loops.push(LoopFrame(array, var_name, body_start=pos, opened_at=tag_start))
        if array.count == 0:
            tag = self._find_terminator(pos, "for", "endfor", frozenset({"endfor"}))
            if tag is None:
                logger.debug(f"No 'endfor' for empty loop at line {self._line_of(tag_start)}")
                return len(self._source)
            if tag.end == -1:
                return tag.start
            self._loops.pop()
            return tag.end
        return pos

    def _handle_endfor(self, command: str, tag_start: int, pos: int, skip: bool) -> int:
        if skip:
            return pos
        frame = self._loops.top()
        if frame is None:
            raise self._error(
                TemplateSyntaxError,
                "Found 'endfor' with no matching 'for'",
                tag_start,
                ErrorCode.UNMATCHED_END,
            )
        frame.index += 1
        if not frame.exhausted:
            return frame.body_start
        self._loops.pop()
        return pos

    def _handle_if(self, command: str, tag_start: int, pos: int, skip: bool) -> int:
        condition = command[len("if") :].strip()
        if not condition:
            raise self._error(
                TemplateSyntaxError,
                "Invalid 'if' statement. Use: {% if condition %}",
                tag_start,
                ErrorCode.INVALID_IF,
            )
        if skip:
            self._conditionals.push(
                ConditionalFrame(condition_met=False, opened_at=tag_start, outer_skipped=True)
            )
            return pos

        result = self._evaluate(condition, tag_start)
        frame = self._conditionals.push(ConditionalFrame(result, opened_at=tag_start))
        if result:
            return pos

        tag = self._find_terminator(pos, "if", "endif", frozenset({"else", "endif"}))
        if tag is None or tag.end == -1:
            logger.debug(f"No 'else'/'endif' for 'if' at line {self._line_of(tag_start)}")
            return pos
        if tag.keyword == "else":
            frame.in_else_branch = True
        else:
            self._conditionals.pop()
        return self._skip_newlines(tag.end)

    def _handle_else(self, command: str, tag_start: int, pos: int, skip: bool) -> int:
        frame = self._require_conditional("else", tag_start)
        frame.in_else_branch = True
        if skip or not frame.condition_met:
            return pos

        tag = self._find_terminator(pos, "if", "endif", frozenset({"endif"}))
        if tag is None or tag.end == -1:
            logger.debug(f"No 'endif' for 'else' at line {self._line_of(tag_start)}")
            return pos
        self._conditionals.pop()
        return self._skip_newlines(tag.end)

    def _handle_endif(self, command: str, tag_start: int, pos: int, skip: bool) -> int:
        self._require_conditional("endif", tag_start)
        self._conditionals.pop()
        return pos

    def _check_closed(self) -> None:
        if self._in_comment:
            raise self._error(
                TemplateSyntaxError,
                "Unterminated HTML comment '<!--'",
                self._comment_start,
                ErrorCode.UNCLOSED_COMMENT,
            )
        loop = self._loops.top()
        if loop is not None:
            raise self._error(
                TemplateSyntaxError,
                "Unclosed 'for' loop at end of template",
                loop.opened_at,
                ErrorCode.UNCLOSED_BLOCK,
            )
        conditional = self._conditionals.top()
        if conditional is not None:
            raise self._error(
                TemplateSyntaxError,
                "Unclosed 'if' statement at end of template",
                conditional.opened_at,
                ErrorCode.UNCLOSED_BLOCK,
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, name: str, pos: int) -> Value:
        value = self._loops.lookup(name)
        if value is None:
            value = self._context.get(name)
        if value is None:
            raise self._undefined(name, pos)
        return value

    def _evaluate(self, condition: str, pos: int) -> bool:
        """Truthiness of a single bare identifier."""
        return is_truthy(self._resolve(condition, pos))

    def _require_conditional(self, keyword: str, tag_start: int) -> ConditionalFrame:
        frame = self._conditionals.top()
        if frame is None:
            raise self._error(
                TemplateSyntaxError,
                f"Found '{keyword}' with no matching 'if'",
                tag_start,
                ErrorCode.UNMATCHED_END,
            )
        return frame

    def _emit(self, text: str, pos: int) -> None:
        try:
            self._out.append(text)
        except MemoryError as exc:
            raise self._error(TemplateMemoryError, str(exc) or "Out of memory", pos) from exc

    def _is_standalone(self, tag_start: int, tag_end: int) -> bool:
        """True if only whitespace shares the source line with the tag."""
        src = self._source
        line_start = src.rfind("\n", 0, tag_start) + 1
        if src[line_start:tag_start].strip():
            return False
        line_end = src.find("\n", tag_end)
        if line_end == -1:
            line_end = len(src)
        return not src[tag_end:line_end].strip()

    def _skip_newlines(self, pos: int) -> int:
        src = self._source
        while pos < len(src) and src[pos] == "\n":
            pos += 1
        return pos

    def _iter_tags(self, pos: int) -> Iterator[_Tag]:
        """Yield directive tags from ``pos`` on, stepping over comments and
        substitutions. An unterminated construct ends the walk with a tag
        whose ``end`` is -1."""
        src = self._source
        while True:
            match = _MARKER_RE.search(src, pos)
            if match is None:
                return
            marker = match.group()
            start = match.start()
            if marker == COMMENT_START:
                close, width = src.find(COMMENT_END, start + len(COMMENT_START)), len(COMMENT_END)
            elif marker == VARIABLE_START:
                close, width = src.find(VARIABLE_END, start + len(VARIABLE_START)), len(VARIABLE_END)
            elif marker == BLOCK_START:
                close, width = src.find(BLOCK_END, start + len(BLOCK_START)), len(BLOCK_END)
            else:
                pos = match.end()
                continue
            if close == -1:
                yield _Tag("", start, -1)
                return
            pos = close + width
            if marker == BLOCK_START:
                words = src[start + len(BLOCK_START) : close].split(None, 1)
                yield _Tag(words[0] if words else "", start, pos)

    def _find_terminator(
        self, pos: int, opener: str, closer: str, targets: frozenset[str]
    ) -> _Tag | None:
        """Find the first tag in ``targets`` at nesting depth zero.

        Nested ``opener``/``closer`` pairs are stepped over, so an inner
        block's ``else`` or ``endif`` never matches the outer one.
        Returns the unterminated tag if the walk hits one first.
        """
        depth = 0
        for tag in self._iter_tags(pos):
            if tag.end == -1:
                return tag
            if tag.keyword == opener:
                depth += 1
            elif depth == 0 and tag.keyword in targets:
                return tag
            elif tag.keyword == closer:
                depth -= 1
        return None

    def _line_of(self, pos: int) -> int:
        return self._source.count("\n", 0, pos) + 1

    def _error(
        self,
        cls: type[TemplateError],
        message: str,
        pos: int,
        code: ErrorCode | None = None,
    ) -> TemplateError:
        return cls(
            message,
            self._line_of(pos),
            code=code,
            template_name=self._name,
            source=self._source,
        )

    def _undefined(self, name: str, pos: int) -> UndefinedError:
        return UndefinedError(
            name,
            self._line_of(pos),
            available_names=self._context.names(),
            template_name=self._name,
            source=self._source,
        )


def render(source: str, context: Context | dict[str, Any] | None = None, /, **variables: Any) -> str:
    """Render ``source`` against a context in one call.

    Args:
        source: Template text.
        context: A ``Context``, or a mapping converted with
            ``Context.from_mapping``.
        **variables: Extra variables; they shadow ``context`` entries.

    Example:
        >>> render("Hello {{ name }}, you are {{ age }} years old.", name="John", age=30)
        'Hello John, you are 30 years old.'
    """
    if isinstance(context, Context):
        ctx = Context.chain(Context.from_mapping(variables), context) if variables else context
    else:
        ctx = Context.from_mapping(context, **variables)
    return Renderer(source, ctx).render()
