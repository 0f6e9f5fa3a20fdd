"""Tests for the template renderer (core/renderer.py).

Coverage:
* Variable and color substitution through dotted paths.
* Every helper, including nesting.
* Strict mode: missing variables are errors, never blanks.
* Error kinds and template line numbers.
* Partials resolved from the template directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tinct.core.context import build_context
from tinct.core.renderer import Renderer
from tinct.core.theme import Theme
from tinct.exceptions import RenderError, RenderErrorKind


@pytest.fixture()
def renderer(theme: Theme) -> Renderer:
    variables = {
        "name": "John",
        "age": 21,
        "alpha": 0.1,
        "flag": True,
        "nothing": None,
        "items": "not a method",
        "fonts": ["mono", "sans"],
        "bar": {"height": 24},
    }
    return Renderer(build_context(theme, variables))


def _render_error(renderer: Renderer, template: str) -> RenderError:
    with pytest.raises(RenderError) as exc_info:
        renderer.render(template)
    return exc_info.value


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------

class TestSubstitution:
    def test_plain_text(self, renderer: Renderer) -> None:
        assert renderer.render("no placeholders here") == "no placeholders here"

    def test_variable(self, renderer: Renderer) -> None:
        assert renderer.render("Hello {{ variables.name }}!") == "Hello John!"

    def test_numbers(self, renderer: Renderer) -> None:
        assert renderer.render("{{ variables.age }} {{ variables.alpha }}") == "21 0.1"

    def test_bool_and_null(self, renderer: Renderer) -> None:
        assert renderer.render("[{{ variables.flag }}][{{ variables.nothing }}]") == "[true][]"

    def test_nested_and_indexed(self, renderer: Renderer) -> None:
        template = "{{ variables.bar.height }} {{ variables.fonts[1] }}"
        assert renderer.render(template) == "24 sans"

    def test_colors(self, renderer: Renderer) -> None:
        template = "{{ colors.special.background }} {{ colors.bright.white }}"
        assert renderer.render(template) == "#222222 #f7f1ff"

    def test_key_named_like_a_mapping_method(self, renderer: Renderer) -> None:
        assert renderer.render("{{ variables.items }}") == "not a method"

    def test_trailing_newline_is_kept(self, renderer: Renderer) -> None:
        assert renderer.render("{{ variables.name }}\n") == "John\n"

    def test_control_flow(self, renderer: Renderer) -> None:
        template = "{% for font in variables.fonts %}{{ font }};{% endfor %}"
        assert renderer.render(template) == "mono;sans;"

    def test_html_is_not_escaped(self, theme: Theme) -> None:
        renderer = Renderer(build_context(theme, {"markup": "<b>&</b>"}))
        assert renderer.render("{{ variables.markup }}") == "<b>&</b>"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    @pytest.mark.parametrize(
        ("template", "expected"),
        [
            ("{{ hex(20) }}", "14"),
            ("{{ hex(255) }}", "ff"),
            ("{{ div(20, 5) }}", "4.0"),
            ("{{ mul(20, 5) }}", "100.0"),
            ("{{ int(mul(20, 5)) }}", "100"),
            ("{{ int(2.9) }}", "2"),
            ("{{ int(-4) }}", "0"),
            ("{{ div(1, 0) }}", "inf"),
            ("{{ lighten('#000000', 0.5) }}", "#808080"),
            ("{{ darken('#ffffff', 1) }}", "#000000"),
        ],
    )
    def test_helper_values(self, renderer: Renderer, template: str, expected: str) -> None:
        assert renderer.render(template) == expected

    def test_opacity_byte(self, renderer: Renderer) -> None:
        template = "{{ colors.normal.red }}{{ hex(int(mul(variables.alpha, 255))) }}"
        assert renderer.render(template) == "#fc618d19"

    def test_helper_on_theme_color(self, renderer: Renderer) -> None:
        assert renderer.render("{{ darken(colors.special.foreground, 1) }}") == "#000000"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestErrors:
    def test_missing_variable(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{{ variables.missing }}")
        assert error.kind is RenderErrorKind.MISSING_VARIABLE
        assert error.name == "missing"

    def test_missing_top_level_name(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{{ name }}")
        assert error.kind is RenderErrorKind.MISSING_VARIABLE
        assert error.name == "name"

    def test_missing_variable_reports_line(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "first\nsecond {{ variables.nope }}\n")
        assert error.line == 2
        assert error.column is None
        assert "at line 2" in str(error)

    def test_missing_variable_as_helper_argument(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{{ lighten(variables.nope, 0.1) }}")
        assert error.kind is RenderErrorKind.MISSING_VARIABLE
        assert error.name == "nope"

    def test_syntax_error_reports_line(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "a\nb\n{% if %}\n")
        assert error.kind is RenderErrorKind.TEMPLATE_SYNTAX
        assert error.line == 3

    def test_unclosed_block(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{% for x in variables.fonts %}{{ x }}")
        assert error.kind is RenderErrorKind.TEMPLATE_SYNTAX

    def test_unknown_helper(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{{ brighten(colors.normal.red, 0.1) }}")
        assert error.kind is RenderErrorKind.HELPER_NOT_FOUND
        assert error.name == "brighten"

    def test_read_of_name_called_elsewhere_is_missing_variable(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{{ foo }}{% if false %}{{ foo(1) }}{% endif %}")
        assert error.kind is RenderErrorKind.MISSING_VARIABLE
        assert error.name == "foo"

    def test_call_of_name_read_elsewhere_is_unknown_helper(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{% if false %}{{ foo }}{% endif %}\n{{ foo(1) }}")
        assert error.kind is RenderErrorKind.HELPER_NOT_FOUND
        assert error.name == "foo"
        assert error.line == 2

    def test_calling_missing_variable_member_is_missing_variable(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{{ variables.nope(1) }}")
        assert error.kind is RenderErrorKind.MISSING_VARIABLE
        assert error.name == "nope"

    @pytest.mark.parametrize(
        ("template", "helper"),
        [
            ("{{ hex('a') }}", "hex"),
            ("{{ hex(256) }}", "hex"),
            ("{{ hex(1.5) }}", "hex"),
            ("{{ div('a', 1) }}", "div"),
            ("{{ mul(1, true) }}", "mul"),
            ("{{ int('3') }}", "int"),
            ("{{ lighten(1, 0.5) }}", "lighten"),
            ("{{ darken('#000000', 'x') }}", "darken"),
        ],
    )
    def test_param_type_mismatch(self, renderer: Renderer, template: str, helper: str) -> None:
        error = _render_error(renderer, template)
        assert error.kind is RenderErrorKind.PARAM_TYPE_MISMATCH
        assert error.name == helper

    def test_param_type_mismatch_message(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{{ hex('a') }}")
        assert "helper 'hex' expected 'u8' value for param 'number'" in str(error)

    def test_invalid_color_in_helper(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{{ lighten('red', 0.1) }}")
        assert error.kind is RenderErrorKind.OTHER
        assert "#RRGGBB" in str(error)

    def test_partial_without_template_dir(self, renderer: Renderer) -> None:
        error = _render_error(renderer, "{% include 'header.txt' %}")
        assert error.kind is RenderErrorKind.PARTIAL_NOT_FOUND
        assert error.name == "header.txt"


# ---------------------------------------------------------------------------
# Partials
# ---------------------------------------------------------------------------

class TestPartials:
    def test_include_from_template_dir(self, theme: Theme, tmp_path: Path) -> None:
        (tmp_path / "header.txt").write_text("# {{ variables.name }}\n", encoding="utf-8")
        renderer = Renderer(build_context(theme, {"name": "John"}), template_dir=tmp_path)
        assert renderer.render("{% include 'header.txt' %}body") == "# John\nbody"

    def test_missing_partial(self, theme: Theme, tmp_path: Path) -> None:
        renderer = Renderer(build_context(theme, {}), template_dir=tmp_path)
        with pytest.raises(RenderError) as exc_info:
            renderer.render("{% include 'nope.txt' %}")
        assert exc_info.value.kind is RenderErrorKind.PARTIAL_NOT_FOUND


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------

class TestSharedContext:
    def test_context_survives_many_renders(self, renderer: Renderer) -> None:
        renderer.render("{% set x = 1 %}{{ x }}")
        with pytest.raises(RenderError):
            renderer.render("{{ x }}")
        assert renderer.render("{{ variables.name }}") == "John"
