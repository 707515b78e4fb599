"""Pytest configuration and fixtures for Breeze tests."""

import pytest

from breeze import Context, DictLoader, Environment, Value, ValueType


@pytest.fixture
def env():
    """Create a basic Breeze Environment."""
    return Environment()


@pytest.fixture
def env_with_loader():
    """Create a Breeze Environment with DictLoader and test templates."""
    loader = DictLoader(
        {
            "greeting.txt": "Hello {{ name }}!",
            "list.html": (
                "<ul>\n"
                "  {% for item in items %}\n"
                "  <li>{{ item }}</li>\n"
                "  {% endfor %}\n"
                "</ul>\n"
            ),
            "broken.html": "line 1\nline 2\n{{ missing }}\n",
        }
    )
    return Environment(loader=loader)


@pytest.fixture
def typed_context():
    """Context holding one value of every type, like a typical dashboard."""
    return Context(
        [
            ("user", Value.string("Dr. Nathan")),
            ("is_admin", Value.boolean(True)),
            ("is_guest", Value.boolean(False)),
            ("user_id", Value.int32(42)),
            ("score", Value.float64(95.5)),
            ("big_num", Value.int64(9876543210)),
            ("temperature", Value.float32(36.6)),
            ("visits", Value.uint32(4294967295)),
            ("fruits", Value.array(["Apple", "Banana", "Cherry"], ValueType.STRING)),
            ("numbers", Value.array([1, 2, 3, 4, 5], ValueType.INT)),
        ]
    )

