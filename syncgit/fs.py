"""Filesystem helpers for syncgit."""

from __future__ import annotations

import re
from pathlib import Path

from .exceptions import ValidationError


_REPO_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
_UNSAFE_PATTERN = re.compile(r"[^A-Za-z0-9._-]")

DEFAULT_GITIGNORE = """\
# OS
.DS_Store
Thumbs.db
desktop.ini

# Editors
.idea/
.vscode/
*.swp
*~

# Build artifacts
build/
dist/
target/
*.egg-info/
__pycache__/
*.py[cod]
node_modules/

# Environment
.env
.venv/
*.log
"""


def validate_repo_name(name: str) -> str:
    """Return `name` stripped, or raise if the hosting service would reject it."""

    candidate = name.strip()
    if not candidate:
        raise ValidationError("Repository name cannot be empty.")
    if candidate in (".", ".."):
        raise ValidationError("Repository name cannot be '.' or '..'.")
    if not _REPO_NAME_PATTERN.match(candidate):
        raise ValidationError(
            "Repository name may only contain letters, digits, '.', '-' and '_'."
        )
    return candidate


def suggest_repo_name(name: str) -> str:
    """Produce a valid repository name from a directory name."""

    slug = _UNSAFE_PATTERN.sub("-", name.strip().replace(" ", "-")).strip("-")
    return slug or "repository"


def write_default_gitignore(root: Path) -> bool:
    """Write the default ignore file unless one exists; return whether it was written."""

    target = root / ".gitignore"
    if target.exists():
        return False
    target.write_text(DEFAULT_GITIGNORE, encoding="utf-8")
    return True
