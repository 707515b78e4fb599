"""Typed dashboard -- one value of every Breeze type, loaded from disk.

Builds an explicit ``Context`` of typed ``Value`` objects (string, bool,
32/64-bit integers, unsigned, float, double and arrays) and renders a page
from the templates directory with FileSystemLoader.

Run:
    python app.py
"""

import sys
from pathlib import Path

from breeze import Context, Environment, FileSystemLoader, TemplateError, Value, ValueType

templates_dir = Path(__file__).parent / "templates"
env = Environment(loader=FileSystemLoader(templates_dir), capacity=2048)

context = Context(
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

template = env.get_template("dashboard.html")
output = template.render(context)


def main() -> None:
    try:
        print(template.render(context), end="")
    except TemplateError as e:
        print("\n--- Render Failed ---", file=sys.stderr)
        print(f"Error on line {e.lineno}: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
