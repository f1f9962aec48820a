#!/usr/bin/env python3
"""Read and write the git user identity (user.name / user.email)."""
from __future__ import annotations

import enum
import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

NAME_KEY = "user.name"
EMAIL_KEY = "user.email"

# something@something.something, nothing stricter
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class GitIdentityError(Exception):
    """Raised for failures that should end the program with a message."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class Scope(enum.Enum):
    GLOBAL = "--global"
    LOCAL = "--local"

    @property
    def flag(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class Identity:
    name: str
    email: str


def ensure_git() -> None:
    """Check that git is installed."""
    if not shutil.which("git"):
        raise GitIdentityError("git is not installed.", exit_code=127)


def is_valid_email(email: str) -> bool:
    """Loose shape check: something@something.something"""
    return EMAIL_PATTERN.match(email) is not None


def validate_identity(name: str, email: str) -> Identity:
    """
    Validate the requested identity.

    Args:
        name: Desired user.name
        email: Desired user.email

    Returns:
        Identity built from the two values

    Raises:
        GitIdentityError: if a field is empty or the email is malformed
    """
    if not name:
        raise GitIdentityError("Name (user.name) cannot be empty.")
    if not email:
        raise GitIdentityError("Email (user.email) cannot be empty.")
    if not is_valid_email(email):
        raise GitIdentityError(f"Invalid email format: {email}")
    return Identity(name=name, email=email)


class GitConfigStore:
    """Thin wrapper around `git config` at a single scope."""

    def __init__(self, scope: Scope = Scope.GLOBAL, cwd: Optional[Path] = None):
        self.scope = scope
        self.cwd = cwd or Path.cwd()

    def _run(self, args: Sequence[str]) -> subprocess.CompletedProcess:
        cmd = ["git", "config", self.scope.flag, *args]
        logger.debug("Running: %s", " ".join(cmd))
        return subprocess.run(
            cmd,
            cwd=str(self.cwd),
            check=False,
            text=True,
            capture_output=True,
        )

    def get(self, key: str) -> str:
        """Return the value of key, or an empty string when it is unset."""
        result = self._run(["--get", key])
        if result.returncode != 0:
            logger.debug("%s is not set (git exited with %d)", key, result.returncode)
            return ""
        return result.stdout.rstrip("\n")

    def set(self, key: str, value: str) -> None:
        """Store key=value; raise GitIdentityError if git refuses."""
        result = self._run([key, value])
        if result.returncode != 0:
            stderr = result.stderr.strip() or result.stdout.strip()
            raise GitIdentityError(f"git config {self.scope.flag} {key} failed: {stderr}")

    def read_identity(self) -> Identity:
        return Identity(name=self.get(NAME_KEY), email=self.get(EMAIL_KEY))

    def write_identity(self, identity: Identity) -> None:
        self.set(NAME_KEY, identity.name)
        self.set(EMAIL_KEY, identity.email)
