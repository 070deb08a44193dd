"""Tests for errors, logging and the output writer."""

import io
import json
import logging

import pytest

from tmplpack.errors import (
    DecodeError,
    NameCollisionError,
    NotFoundError,
    ReadError,
    TmplpackError,
    ValidationError,
    WalkError,
)
from tmplpack.logger import configure_logging, get_logger
from tmplpack.output import GeneratedArtifact, write_artifact


class TestErrors:
    def test_base_error(self):
        error = TmplpackError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.code == "TMPLPACK_ERROR"
        assert str(error) == "Something went wrong"

    def test_custom_code(self):
        error = TmplpackError("boom", code="CUSTOM")
        assert error.code == "CUSTOM"

    def test_to_dict(self):
        assert ValidationError("bad value").to_dict() == {
            "error": "ValidationError",
            "code": "VALIDATION_ERROR",
            "message": "bad value",
        }

    def test_path_errors_carry_path(self, tmp_path):
        error = WalkError("cannot walk", tmp_path)
        assert error.path == str(tmp_path)
        assert error.to_dict()["path"] == str(tmp_path)
        assert ReadError("cannot read").path is None

    def test_name_collision(self):
        error = NameCollisionError("a.html", "/one", "/two")
        assert error.name == "a.html"
        assert "/one" in error.message and "/two" in error.message
        assert error.to_dict()["roots"] == ["/one", "/two"]

    def test_not_found(self):
        error = NotFoundError("x.html")
        assert error.name == "x.html"
        assert error.message == "template 'x.html' not found"
        assert error.to_dict()["name"] == "x.html"

    def test_decode_error_names_template(self):
        assert DecodeError("bad padding").message == "bad padding"
        named = DecodeError("bad padding", name="x.html")
        assert named.name == "x.html"
        assert named.message == "failed to load template 'x.html': bad padding"

    def test_hierarchy(self):
        for cls in (ValidationError, WalkError, NotFoundError, DecodeError):
            assert issubclass(cls, TmplpackError)


class TestLogger:
    def test_namespacing(self):
        assert get_logger("collector").name == "tmplpack.collector"
        assert get_logger("tmplpack.config").name == "tmplpack.config"
        assert get_logger().name == "tmplpack"

    def test_plain_output_with_context(self):
        stream = io.StringIO()
        configure_logging("info", stream=stream)

        get_logger("test").info("Collected mapping", files=3)

        line = stream.getvalue().strip()
        assert line == "INFO tmplpack.test: Collected mapping files=3"

    def test_json_output(self):
        stream = io.StringIO()
        configure_logging("debug", json_format=True, stream=stream)

        get_logger("test").debug("Rendered module", chars=120)

        record = json.loads(stream.getvalue())
        assert record == {
            "level": "debug",
            "logger": "tmplpack.test",
            "message": "Rendered module",
            "chars": 120,
        }

    def test_level_filters(self):
        stream = io.StringIO()
        configure_logging("warning", stream=stream)

        get_logger("test").info("hidden")
        get_logger("test").warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_reconfigure_replaces_handler(self):
        configure_logging("info", stream=io.StringIO())
        configure_logging("info", stream=io.StringIO())
        assert len(logging.getLogger("tmplpack").handlers) == 1

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging("loud")


class TestOutput:
    def test_write_to_stream(self):
        stream = io.StringIO()
        assert write_artifact(GeneratedArtifact("X = 1\n"), stream) == 6
        assert stream.getvalue() == "X = 1\n"

    def test_write_to_stdout(self, capsys):
        write_artifact(GeneratedArtifact("X = 1\n"), "-")
        assert capsys.readouterr().out == "X = 1\n"

    def test_write_to_path(self, tmp_path):
        target = tmp_path / "pkg" / "embedded.py"

        write_artifact(GeneratedArtifact("X = 1\n"), target)

        assert target.read_text(encoding="utf-8") == "X = 1\n"
        assert target.stat().st_mode & 0o777 == 0o644
        assert [p.name for p in target.parent.iterdir()] == ["embedded.py"]

    def test_replaces_existing_file(self, tmp_path):
        target = tmp_path / "embedded.py"
        target.write_text("old")
        write_artifact(GeneratedArtifact("new"), str(target))
        assert target.read_text() == "new"

    def test_failed_write_leaves_previous_file(self, tmp_path):
        class Broken(GeneratedArtifact):
            def write_to(self, stream):
                stream.write("partial")
                raise OSError("disk full")

        target = tmp_path / "embedded.py"
        target.write_text("previous")

        with pytest.raises(OSError):
            write_artifact(Broken("ignored"), target)

        assert target.read_text() == "previous"
        assert [p.name for p in tmp_path.iterdir()] == ["embedded.py"]
