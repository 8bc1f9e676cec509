"""
Path Resolution

Pure string functions for canonical absolute paths. A canonical path starts
with "/", has no empty, "." or ".." segments, and no trailing slash except
for the root itself.

Hierarchy is derived from these strings alone: the children of a directory
are the keys that start with child_prefix(directory).

Example:
    >>> normalize("a/b/../c", "/x")
    '/x/a/c'
    >>> normalize("../../../x", "/a")
    '/x'
"""

ROOT = "/"
SEPARATOR = "/"


def normalize(path: str, cwd: str = ROOT) -> str:
    """
    Resolve a relative or absolute path into a canonical absolute path.

    Relative paths (empty, or not starting with "/") are joined to cwd.
    ".." never climbs above the root; it is silently ignored there.

    Args:
        path: Path as typed by the user
        cwd: Canonical current working directory

    Returns:
        Canonical absolute path
    """
    if not path.startswith(SEPARATOR):
        joined = cwd + path if cwd == ROOT else f"{cwd}{SEPARATOR}{path}"
    else:
        joined = path

    segments: list[str] = []
    for segment in joined.split(SEPARATOR):
        if not segment or segment == ".":
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)

    return SEPARATOR + SEPARATOR.join(segments)


def dirname(path: str) -> str:
    """Return everything before the last "/" ("/" for top-level paths)."""
    index = path.rfind(SEPARATOR)
    if index <= 0:
        return ROOT
    return path[:index]


def basename(path: str) -> str:
    """Return everything after the last "/" ("" for the root)."""
    return path[path.rfind(SEPARATOR) + 1:]


def child_prefix(path: str) -> str:
    """Prefix shared by every key inside the directory at path."""
    return ROOT if path == ROOT else path + SEPARATOR


def is_within(path: str, ancestor: str) -> bool:
    """True when path is ancestor itself or lies in its subtree.

    "/ab" is not within "/a": matching is on the separator-terminated prefix.
    """
    return path == ancestor or path.startswith(child_prefix(ancestor))


def rebase(path: str, src: str, dst: str) -> str:
    """Replace the src prefix of path with dst."""
    if path == src:
        return dst
    return child_prefix(dst) + path[len(child_prefix(src)):]


def depth(path: str) -> int:
    """Number of segments in a canonical path (root is 0)."""
    if path == ROOT:
        return 0
    return path.count(SEPARATOR)


def ancestors(path: str) -> list[str]:
    """Proper ancestors of path, nearest first, excluding the root."""
    result: list[str] = []
    parent = dirname(path)
    while parent != ROOT:
        result.append(parent)
        parent = dirname(parent)
    return result
