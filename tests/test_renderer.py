"""Tests for the code renderer."""

import ast

import pytest

from conftest import write_files
from tmplpack import new_configuration
from tmplpack.config import Configuration
from tmplpack.encoding import encode
from tmplpack.errors import RenderError, TemplateParseError
from tmplpack.options import (
    base,
    enable_compression,
    enable_html_templates,
    enable_text_templates,
    function_prefix,
    package,
)
from tmplpack.templates import TEMPLATE_DIR, CodeRenderer, build_context, py_str_filter


def _function_names(text):
    tree = ast.parse(text)
    return {node.name for node in tree.body if isinstance(node, ast.FunctionDef)}


class TestTemplateLocation:
    def test_loader_template_ships_with_package(self):
        assert (TEMPLATE_DIR / "loader.py.j2").exists()


class TestRender:
    def test_output_is_valid_python(self, template_tree):
        artifact = new_configuration(base(template_tree)).render()
        ast.parse(artifact.text)

    def test_base_functions_only_by_default(self, template_tree):
        artifact = new_configuration(base(template_tree), function_prefix("app")).render()

        names = _function_names(artifact.text)
        assert {"app_template", "app_template_must"} <= names
        assert "app_text_template" not in names
        assert "app_html_template" not in names
        assert "import jinja2" not in artifact.text

    def test_text_helpers(self, template_tree):
        artifact = new_configuration(
            base(template_tree), function_prefix("app"), enable_text_templates()
        ).render()

        names = _function_names(artifact.text)
        assert "app_text_template" in names
        assert "app_html_template" not in names
        assert "import jinja2" in artifact.text

    def test_html_helpers(self, template_tree):
        artifact = new_configuration(
            base(template_tree), function_prefix("app"), enable_html_templates()
        ).render()

        names = _function_names(artifact.text)
        assert {"app_html_template", "app_html_template_map"} <= names
        assert "app_text_template" not in names

    def test_empty_prefix(self, template_tree):
        artifact = new_configuration(base(template_tree), function_prefix("")).render()
        assert {"template", "template_must"} <= _function_names(artifact.text)

    def test_package_is_recorded(self, template_tree):
        artifact = new_configuration(base(template_tree), package("web.assets")).render()
        assert 'PACKAGE = "web.assets"' in artifact.text

    def test_payloads_are_embedded_verbatim(self, template_tree):
        artifact = new_configuration(base(template_tree)).render()
        assert encode(b"<h1>{{.Title}}</h1>") in artifact.text

    def test_compression_flag(self, template_tree):
        artifact = new_configuration(base(template_tree), enable_compression()).render()
        assert "import zlib" in artifact.text
        assert "zlib.decompress" in artifact.text

    def test_long_payload_is_wrapped(self, tmp_path):
        write_files(tmp_path / "templates", {"big.bin": bytes(range(256)) * 8})
        artifact = new_configuration(base(tmp_path)).render()
        assert max(len(line) for line in artifact.text.splitlines()) < 120

    def test_no_templates(self, tmp_path):
        (tmp_path / "templates").mkdir()
        artifact = new_configuration(base(tmp_path), enable_html_templates()).render()
        ast.parse(artifact.text)


class TestDeterminism:
    def test_repeated_render_is_identical(self, template_tree):
        config = new_configuration(base(template_tree), enable_html_templates())
        assert config.render().text == config.render().text

    def test_independent_builds_are_identical(self, tmp_path):
        files = {"b.html": b"b", "a/z.html": b"z", "a/a.html": b"a", "c.txt": b"c"}
        first = write_files(tmp_path / "first" / "templates", files)
        second = tmp_path / "second" / "templates"
        # create in reverse order so directory listing order differs
        write_files(second, dict(reversed(list(files.items()))))

        text1 = new_configuration(base(first.parent), enable_text_templates()).render().text
        text2 = new_configuration(base(second.parent), enable_text_templates()).render().text

        assert text1 == text2

    def test_entries_sorted_in_context(self, tmp_path):
        config = Configuration(
            base=tmp_path, mappings=(), sources={"b": b"", "a": b"", "c/a": b""}
        )
        assert [e["name"] for e in build_context(config)["entries"]] == ["a", "b", "c/a"]


class TestNames:
    @pytest.mark.parametrize(
        "name", ['quote".html', "back\\slash.html", "ünï.html", "it's.html", "{{x}}.html"]
    )
    def test_unusual_names_are_escaped(self, tmp_path, name):
        config = Configuration(base=tmp_path, mappings=(), sources={name: b"x"})
        text = config.render().text
        ast.parse(text)
        assert py_str_filter(name) in text

    @pytest.mark.parametrize("name", ["new\nline.html", "tab\t.html", "nul\x00.html"])
    def test_control_characters_raise_render_error(self, tmp_path, name):
        config = Configuration(base=tmp_path, mappings=(), sources={name: b"x"})
        with pytest.raises(RenderError):
            config.render()


class TestRenderErrors:
    def test_missing_code_template(self, tmp_path, template_tree):
        renderer = CodeRenderer(template_dir=tmp_path / "empty")
        with pytest.raises(TemplateParseError):
            new_configuration(base(template_tree)).render(renderer)

    def test_malformed_code_template(self, tmp_path, template_tree):
        bad = tmp_path / "bad"
        bad.mkdir()
        (bad / "loader.py.j2").write_text("{% if %}")
        with pytest.raises(TemplateParseError):
            new_configuration(base(template_tree)).render(CodeRenderer(template_dir=bad))

    def test_undefined_variable_is_render_error(self, tmp_path, template_tree):
        bad = tmp_path / "bad"
        bad.mkdir()
        (bad / "loader.py.j2").write_text("X = {{ missing }}\n")
        with pytest.raises(RenderError):
            new_configuration(base(template_tree)).render(CodeRenderer(template_dir=bad))

    def test_invalid_python_is_render_error(self, tmp_path, template_tree):
        bad = tmp_path / "bad"
        bad.mkdir()
        (bad / "loader.py.j2").write_text("def {{ package }}(:\n")
        with pytest.raises(RenderError):
            new_configuration(base(template_tree)).render(CodeRenderer(template_dir=bad))

    def test_failed_render_writes_nothing(self, tmp_path):
        import io

        config = Configuration(base=tmp_path, mappings=(), sources={"bad\n": b""})
        stream = io.StringIO()
        with pytest.raises(RenderError):
            config.write_to(stream)
        assert stream.getvalue() == ""
