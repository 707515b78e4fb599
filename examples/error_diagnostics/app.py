"""Error diagnostics -- what a failed render tells you.

Renders a handful of broken templates from a DictLoader and collects the
structured errors: kind, searchable code, 1-based line, source snippet and
"Did you mean?" hints. Colors follow the terminal (NO_COLOR/FORCE_COLOR).

Run:
    python app.py
"""

from breeze import DictLoader, Environment, TemplateError

env = Environment(
    loader=DictLoader(
        {
            "typo.html": (
                "<nav>\n"
                "  <a href=\"/\">Home</a>\n"
                "  <span>Welcome, {{ usernme }}</span>\n"
                "</nav>\n"
            ),
            "unclosed.html": "<ul>\n{% for item in items %}\n  <li>{{ item }}</li>\n</ul>\n",
            "not_array.html": "{% for c in username %}{{ c }}{% endfor %}",
            "stray.html": "text\n{% endif %}\n",
        }
    ),
    globals={"username": "Alice", "items": ["a", "b"]},
)

errors: dict[str, TemplateError] = {}
for name in env.list_templates():
    try:
        env.render(name)
    except TemplateError as e:
        errors[name] = e


def main() -> None:
    for name, error in errors.items():
        print(f"=== {name} ===")
        print(error.format_compact())
        print()


if __name__ == "__main__":
    main()
