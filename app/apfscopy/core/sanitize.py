"""Destination-safe path names.

exFAT and the other targets of this tool reject a handful of characters
that APFS happily stores in file names. Every source path component is
mapped to a destination component of equal length with those characters
replaced by an underscore.
"""

from pathlib import Path

# " * / : < > ? \ |
FORBIDDEN_CHARACTERS = frozenset('"*/:<>?\\|')
REPLACEMENT = "_"

_TRANSLATION = str.maketrans({char: REPLACEMENT for char in FORBIDDEN_CHARACTERS})


def sanitize_component(name: str) -> str:
    """Replace every forbidden character in a single path component.

    Args:
        name: One path component (no separators expected, but tolerated).

    Returns:
        The component with each forbidden character replaced by "_".
    """
    return name.translate(_TRANSLATION)


def map_destination(path: Path, source_root: Path, dest_root: Path) -> Path:
    """Map a source path below source_root to its destination path.

    The source-root prefix is stripped and each remaining component is
    sanitized on its own before being joined under dest_root.

    Args:
        path: Source path, equal to or below source_root.
        source_root: Root of the tree being copied.
        dest_root: Root of the destination tree.

    Returns:
        The destination path.

    Raises:
        ValueError: If path is not below source_root.
    """
    relative = path.relative_to(source_root)
    return dest_root.joinpath(*(sanitize_component(part) for part in relative.parts))


def repair_final_component(path: Path) -> Path:
    """Re-sanitize only the last component of a destination path.

    Args:
        path: Destination path rejected by the filesystem.

    Returns:
        The same path with its final component sanitized.
    """
    if not path.name:
        return path
    return path.with_name(sanitize_component(path.name))
