"""Shared test fixtures for shelltools tests."""

import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory, monkeypatch):
    """Keep the user's ~/.shelltools.toml and SHELLTOOLS_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("SHELLTOOLS_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def write_file(tmp_path):
    """Write text or bytes below tmp_path, creating parent directories."""

    def _write(name: str, content="", mtime=None) -> Path:
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            p.write_bytes(content)
        else:
            p.write_text(content, encoding="utf-8")
        if mtime is not None:
            os.utime(p, (mtime, mtime))
        return p

    return _write


@pytest.fixture
def find_tree(tmp_path, monkeypatch):
    """Directory ``d`` holding ``x.txt`` and a broken link ``link``; cwd is its parent."""
    d = tmp_path / "d"
    d.mkdir()
    (d / "x.txt").write_text("x\n")
    os.symlink("missing-target", d / "link")
    monkeypatch.chdir(tmp_path)
    return d
