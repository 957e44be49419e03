"""Tests for Rich Console factory and theme."""

from io import StringIO

from memoctl.output.console import MEMO_THEME, create_console, get_output, style_for_type


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        assert isinstance(create_console().file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[bold red]hello[/bold red]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80


class TestTheme:
    def test_every_type_has_a_style(self) -> None:
        for doc_type in ("memo", "listify", "deepDive", "article", "topic-notification"):
            assert f"memo.type.{doc_type}" in MEMO_THEME.styles

    def test_style_for_type(self) -> None:
        assert style_for_type("listify") == "memo.type.listify"
        assert style_for_type("unknown") == ""
        assert style_for_type(None) == ""
