# paths.py
SEPARATOR = "/"


def path_join(base: str | None, name: str) -> str:
    """Joins a logical directory path and a name with exactly one separator."""
    base = base or ""
    if base.endswith(SEPARATOR):
        return f"{base}{name}"
    return f"{base}{SEPARATOR}{name}"


def basename(path: str | None) -> str:
    """Last segment of a slash-separated path."""
    return (path or "").split(SEPARATOR)[-1]
