"""Shared fixtures for the svg2excalidraw test suite."""

import logging

import pytest


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Keep configuration search away from the developer's own files."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def restore_logging():
    """Restore root logger handlers replaced by setup_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def make_svg():
    """Wrap markup in an SVG root element with the usual namespaces."""

    def wrap(body: str) -> str:
        return (
            '<svg xmlns="http://www.w3.org/2000/svg" '
            'xmlns:xlink="http://www.w3.org/1999/xlink">'
            f"{body}</svg>"
        )

    return wrap
