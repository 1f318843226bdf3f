"""Application version module.

In development the version is the VERSION file (major.minor) plus the number
of git commits since the last tag. A frozen build bakes the full string into
_BAKED_VERSION instead.
"""

import subprocess
from pathlib import Path

# Overwritten when packaging a frozen build
_BAKED_VERSION = None

# editor/src/version.py -> project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def get_version() -> str:
    """Get the application version string (e.g. '0.1.4')."""
    if _BAKED_VERSION is not None:
        return _BAKED_VERSION
    return f"{_major_minor()}.{_commit_count()}"


def _major_minor() -> str:
    try:
        return (_PROJECT_ROOT / "VERSION").read_text().strip()
    except FileNotFoundError:
        return "0.0"


def _git(*args):
    """Output of a git command run at the project root, or None if it fails."""
    try:
        result = subprocess.run(
            ['git', *args],
            capture_output=True, text=True, check=False,
            cwd=str(_PROJECT_ROOT),
        )
    except FileNotFoundError:
        return None  # git not installed
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def _commit_count() -> str:
    # Format: v0.1-5-gabcdef -> 5 commits since the tag
    described = _git('describe', '--tags', '--long')
    if described:
        parts = described.rsplit('-', 2)
        if len(parts) == 3:
            return parts[1]
    return _git('rev-list', '--count', 'HEAD') or "0"
