"""Shared pytest configuration for Breeze examples.

Each example directory holds an ``app.py`` (and optionally a ``templates/``
directory) next to its test module. ``example_app`` executes that ``app.py``
in a fresh module namespace, so module-level renders run again for every
test and no state leaks between them.
"""

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest


def _load_app(app_path: Path) -> ModuleType:
    module_name = f"breeze_example_{app_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load example from {app_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_dir(request: pytest.FixtureRequest) -> Path:
    """Directory of the requesting example test."""
    return Path(request.path).parent


@pytest.fixture
def example_app(example_dir: Path) -> ModuleType:
    """Load a fresh module from the sibling app.py next to the test file."""
    return _load_app(example_dir / "app.py")
