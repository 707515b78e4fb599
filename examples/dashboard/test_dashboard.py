"""Tests for the typed dashboard example."""


class TestDashboardApp:
    """Verify every value type renders and block lines are stripped."""

    def test_scalars(self, example_app) -> None:
        out = example_app.output
        assert "<title>Dashboard for Dr. Nathan</title>" in out
        assert "User ID: 42 | Score: 95.5000 | Visits: 4294967295" in out
        assert "Big number: 9876543210 | Temperature: 36.6000" in out

    def test_comment_removed(self, example_app) -> None:
        assert "<!--" not in example_app.output
        assert "Header: user summary" not in example_app.output

    def test_conditionals(self, example_app) -> None:
        out = example_app.output
        assert '<p class="badge">Administrator</p>' in out
        assert "Member" not in out
        assert "Goodbye!" in out
        assert "Welcome, guest!" not in out

    def test_array_placeholder(self, example_app) -> None:
        assert "<h2>Fruits ([array of size 3])</h2>" in example_app.output

    def test_list_lines(self, example_app) -> None:
        assert (
            "  <ul>\n"
            "    <li>Apple</li>\n"
            "    <li>Banana</li>\n"
            "    <li>Cherry</li>\n"
            "  </ul>\n"
        ) in example_app.output

    def test_inline_loop(self, example_app) -> None:
        assert "<p>1 2 3 4 5 </p>" in example_app.output

    def test_no_directive_markup_left(self, example_app) -> None:
        assert "{%" not in example_app.output
        assert "{{" not in example_app.output

    def test_cached_template(self, example_app) -> None:
        assert example_app.env.get_template("dashboard.html") is example_app.template

    def test_lists_templates(self, example_app, example_dir) -> None:
        assert (example_dir / "templates" / "dashboard.html").is_file()
        assert example_app.env.list_templates() == ["dashboard.html"]
