"""Standalone directive lines are removed from the output."""

from breeze import render


class TestStandaloneLines:
    def test_indented_if_block(self):
        template = "Hello\n  {% if show %}\n    {{ name }}\n  {% endif %}\nWorld"
        assert render(template, show=True, name="John") == "Hello\n    John\nWorld"

    def test_indented_if_block_false(self):
        template = "Hello\n  {% if show %}\n    {{ name }}\n  {% endif %}\nWorld"
        assert render(template, show=False, name="John") == "Hello\nWorld"

    def test_list_markup(self):
        template = (
            "<ul>\n"
            "  {% for item in items %}\n"
            "  <li>{{ item }}</li>\n"
            "  {% endfor %}\n"
            "</ul>\n"
        )
        assert render(template, items=["a", "b"]) == "<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>\n"

    def test_if_else_lines(self):
        template = "{% if flag %}\nyes\n{% else %}\nno\n{% endif %}\nend"
        assert render(template, flag=True) == "yes\nend"
        assert render(template, flag=False) == "no\nend"

    def test_tabs_and_spaces_around_tag(self):
        assert render("a\n \t{% if f %}\t \nb\n{% endif %}\n", f=True) == "a\nb\n"

    def test_tag_on_last_line_without_newline(self):
        assert render("text\n{% if f %}x\n  {% endif %}", f=True) == "text\nx\n"

    def test_whole_template_is_one_tag(self):
        assert render("{% for x in xs %}{% endfor %}", xs=[1]) == ""


class TestInlineTags:
    def test_inline_tags_keep_surrounding_text(self):
        assert render("a {% if f %}b{% endif %} c\n", f=True) == "a b c\n"

    def test_text_before_tag_disables_stripping(self):
        assert render("x {% if f %}\ny{% endif %}", f=True) == "x \ny"

    def test_text_after_tag_disables_stripping(self):
        assert render("  {% if f %} y\n{% endif %}", f=True) == "   y\n"

    def test_substitution_lines_are_never_stripped(self):
        assert render("  {{ v }}  \n", v="") == "    \n"
