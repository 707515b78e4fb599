"""Hello World -- the simplest Breeze example.

Create a template from a string and render it with context variables.
No templates directory needed.

Run:
    python app.py
"""

from breeze import Environment

env = Environment()

template = env.from_string("Hello {{ name }}, you are {{ age }} years old.")

output = template.render(name="John", age=30)


def main() -> None:
    print(output)
    print()

    # Multiple renders with different context
    for name, age in [("Ada", 36), ("Grace", 85), ("Linus", 54)]:
        print(template.render(name=name, age=age))


if __name__ == "__main__":
    main()
