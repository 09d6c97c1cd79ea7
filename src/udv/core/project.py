"""Project bootstrap: the .udv control directory."""

from pathlib import Path

from .config import CONFIG_FILENAME
from .errors import ProjectError
from .walker import CONTROL_DIR

CONTROL_GITIGNORE = "/config.local\n/tmp\n/cache"


def find_project_root(start: Path) -> Path:
    """Return the nearest directory at or above start that holds a control directory."""
    start = start.resolve()
    for candidate in (start, *start.parents):
        if (candidate / CONTROL_DIR).is_dir():
            return candidate
    raise ProjectError(f"Not a udv project (or any parent up to /): {start}. Run 'udv init' first.")


def init_project(root: Path) -> Path:
    """Create the control directory in a git working tree. Returns its path."""
    if not (root / ".git").exists():
        raise ProjectError("Current directory is not a Git repository.", path=root)
    if (root / ".dvc").exists():
        raise ProjectError(
            "Current directory already contains data versioning config (.dvc folder).", path=root
        )
    control_dir = root / CONTROL_DIR
    if control_dir.exists():
        raise ProjectError(
            f"Current directory already contains data versioning config ({CONTROL_DIR} folder).",
            path=root,
        )

    try:
        control_dir.mkdir()
        (control_dir / ".gitignore").write_text(CONTROL_GITIGNORE, encoding="utf-8")
        (control_dir / CONFIG_FILENAME).touch()
    except OSError as e:
        raise ProjectError(f"Failed to initialize {control_dir}: {e}", path=root) from e
    return control_dir
