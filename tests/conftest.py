"""Pytest configuration and fixtures for tmplpack tests."""
import importlib.util
import logging
import sys
import uuid
from pathlib import Path

import pytest
from typer.testing import CliRunner


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that import generated modules"
    )


@pytest.fixture(autouse=True)
def reset_tmplpack_logging():
    """Undo handlers installed by configure_logging (the CLI calls it)."""
    yield
    root = logging.getLogger("tmplpack")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def template_tree(tmp_path):
    """A base directory with a ``templates`` mapping root.

    Layout:
        templates/index.html
        templates/partials/header.html
        templates/notes.txt
        templates/logo.bin   (non-UTF-8 bytes)
    """
    root = tmp_path / "site" / "templates"
    (root / "partials").mkdir(parents=True)
    (root / "index.html").write_bytes(b"<h1>{{.Title}}</h1>")
    (root / "partials" / "header.html").write_bytes(b"<header>{{ title }}</header>\n")
    (root / "notes.txt").write_bytes(b"plain notes\n")
    (root / "logo.bin").write_bytes(bytes(range(256)) + b'"""\\`\x00')
    return tmp_path / "site"


@pytest.fixture
def load_generated(tmp_path, monkeypatch):
    """Write an artifact to disk and import it as a fresh module."""

    def _load(artifact, module_name=None):
        module_name = module_name or f"tmplpack_generated_{uuid.uuid4().hex}"
        path = tmp_path / "generated" / f"{module_name}.py"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(artifact.text, encoding="utf-8")

        spec = importlib.util.spec_from_file_location(module_name, path)
        module = importlib.util.module_from_spec(spec)
        monkeypatch.setitem(sys.modules, module_name, module)
        spec.loader.exec_module(module)
        return module

    return _load


def write_files(root: Path, files: dict) -> Path:
    """Create ``files`` (relative name -> bytes) below ``root``."""
    for name, data in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    return root
