"""CLI utilities."""

from pathlib import Path


def find_module_root(start_path: Path | None = None) -> Path:
    """Find the Go module root from the given path.

    Walks up the directory tree looking for a go.mod file. If none is
    found, the starting directory itself is used as the workspace root.

    Args:
        start_path: File or directory to search from (default: cwd)

    Returns:
        Path to the module root
    """
    if start_path is None:
        start_path = Path.cwd()

    start = start_path.resolve()
    if start.is_file():
        start = start.parent

    current = start
    while current != current.parent:
        if (current / "go.mod").is_file():
            return current
        current = current.parent

    # Check root as well
    if (current / "go.mod").is_file():
        return current

    return start
