"""Helpers for slash-separated database paths."""

PATH_SEPARATOR = "/"


def normalize_path(path: str | None) -> str:
    """
    Strip leading and trailing separators from a path.

    Example:
        >>> normalize_path("/users/{uid}/")
        'users/{uid}'
    """
    if not path:
        return ""
    return path.strip(PATH_SEPARATOR)


def path_parts(path: str | None) -> list[str]:
    """
    Split a path into its components after normalizing it.

    The root path ("", "/") has no components.

    Example:
        >>> path_parts("/a/b/c")
        ['a', 'b', 'c']
        >>> path_parts("/")
        []
    """
    normalized = normalize_path(path)
    if not normalized:
        return []
    return normalized.split(PATH_SEPARATOR)


def join_path(path: str, child: str) -> str:
    """Join a child path onto a parent path, normalizing both."""
    parent = normalize_path(path)
    child = normalize_path(child)
    if not parent:
        return child
    if not child:
        return parent
    return f"{parent}{PATH_SEPARATOR}{child}"


def trim_param(param: str) -> str:
    """
    Strip capture braces and a multi-segment suffix from a template token.

    Example:
        >>> trim_param("{uid}")
        'uid'
        >>> trim_param("{path=**}")
        'path'
    """
    name = param
    if name.startswith("{"):
        name = name[1:]
    if name.endswith("}"):
        name = name[:-1]
    if name.endswith("=**"):
        name = name[:-3]
    return name


__all__ = [
    "PATH_SEPARATOR",
    "normalize_path",
    "path_parts",
    "join_path",
    "trim_param",
]
