"""File handling utilities."""

from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The path (for chaining)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_text_file(path: Path, content: str) -> Path:
    """Write UTF-8 text to a file, replacing any previous content.

    Args:
        path: Target file path
        content: Text to write

    Returns:
        The path written
    """
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")
    return path


def iter_files(root: Path) -> list[Path]:
    """List every regular file below a directory, in sorted order.

    Args:
        root: Directory to walk

    Returns:
        Sorted list of file paths
    """
    return sorted(p for p in root.rglob("*") if p.is_file())
