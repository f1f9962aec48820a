"""Shared test fixtures."""

import logging
import shutil

import pytest
from click.testing import CliRunner

import setup_git_config
from git_identity import GitConfigStore, Scope


class FakeGitConfigStore(GitConfigStore):
    """GitConfigStore backed by a dict instead of the git binary."""

    def __init__(self, scope=Scope.GLOBAL, cwd=None, values=None):
        super().__init__(scope, cwd)
        self.values = values if values is not None else {}
        self.writes = []

    def get(self, key):
        return self.values.get(key, "")

    def set(self, key, value):
        self.writes.append((key, value))
        self.values[key] = value


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's identity variables out of the tests."""
    monkeypatch.delenv("GIT_USER_NAME", raising=False)
    monkeypatch.delenv("GIT_USER_EMAIL", raising=False)


@pytest.fixture
def fake_store(monkeypatch):
    """Route the CLI to an in-memory store; returns the store per scope."""
    stores = {}

    def factory(scope=Scope.GLOBAL, cwd=None):
        if scope not in stores:
            stores[scope] = FakeGitConfigStore(scope, cwd)
        return stores[scope]

    monkeypatch.setattr(setup_git_config, "GitConfigStore", factory)
    monkeypatch.setattr(setup_git_config, "ensure_git", lambda: None)
    return factory


@pytest.fixture
def git_home(tmp_path, monkeypatch):
    """Isolated HOME and global config for tests that run the real git."""
    if not shutil.which("git"):
        pytest.skip("git is not installed")
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    monkeypatch.chdir(tmp_path)
    return home


@pytest.fixture(autouse=True)
def restore_root_logger_level():
    """--verbose changes the root logger level; put it back after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
