"""Template loaders for the Breeze environment.

Loaders provide template source to the Environment. They implement
``get_source(name)`` returning ``(source, filename)`` and
``list_templates()``.

Built-in Loaders:
- ``FileSystemLoader``: Load from filesystem directories
- ``DictLoader``: Load from an in-memory dictionary (testing/embedded)

Custom Loaders:
Anything with the same two methods works:
    ```python
    class DatabaseLoader:
        def get_source(self, name: str) -> tuple[str, str | None]:
            row = db.query("SELECT source FROM templates WHERE name = ?", name)
            if not row:
                raise TemplateNotFoundError(f"Template '{name}' not found")
            return row.source, f"db://{name}"

        def list_templates(self) -> list[str]:
            return [r.name for r in db.query("SELECT name FROM templates")]
    ```

"""

from __future__ import annotations

import logging
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol

from breeze.environment.exceptions import TemplateNotFoundError

logger = logging.getLogger(__name__)


class Loader(Protocol):
    def get_source(self, name: str) -> tuple[str, str | None]: ...

    def list_templates(self) -> list[str]: ...


class FileSystemLoader:
    """Load templates from one or more directories.

    Directories are searched in order and the first match wins:

            >>> loader = FileSystemLoader(["themes/custom/", "themes/default/"])
            >>> source, filename = loader.get_source("page.html")

    Raises:
        TemplateNotFoundError: If the template is in none of the directories.
    """

    __slots__ = ("_encoding", "_paths")

    def __init__(self, paths: str | Path | list[str | Path], encoding: str = "utf-8"):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]
        self._encoding = encoding

    def get_source(self, name: str) -> tuple[str, str]:
        for base in self._paths:
            path = base / name
            if path.is_file():
                logger.debug(f"Loading template {name!r} from {path}")
                return path.read_text(self._encoding), str(path)

        raise TemplateNotFoundError(
            f"Template '{name}' not found in: {', '.join(str(p) for p in self._paths)}"
        )

    def list_templates(self) -> list[str]:
        """All files below the search paths, as loader-relative names."""
        templates: set[str] = set()
        for base in self._paths:
            if base.is_dir():
                for path in base.rglob("*"):
                    if path.is_file():
                        templates.add(path.relative_to(base).as_posix())
        return sorted(templates)


class DictLoader:
    """Load templates from an in-memory dictionary.

    Returns ``None`` as filename, so error messages show the template name.

            >>> env = Environment(loader=DictLoader({"hello.txt": "Hi {{ name }}"}))
            >>> env.render("hello.txt", name="Ada")
            'Hi Ada'
    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: dict[str, str]):
        self._mapping = mapping

    def get_source(self, name: str) -> tuple[str, None]:
        if name not in self._mapping:
            available = sorted(self._mapping)
            msg = f"Template '{name}' not found"
            matches = get_close_matches(name, available, n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
            elif available:
                msg += f". Available: {', '.join(available[:10])}"
                if len(available) > 10:
                    msg += f" ... ({len(available)} total)"
            raise TemplateNotFoundError(msg)
        return self._mapping[name], None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping)
