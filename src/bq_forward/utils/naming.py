import re
from typing import Optional

_PLAIN_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def get_full_name(
    project_id: Optional[str],
    database_name: Optional[str],
    name: Optional[str] = None,
) -> str:
    """
    Build a qualified name using {project}.{dataset}.{table}.
    Missing parts are skipped; the whole path is backtick-quoted
    when any part is not a plain identifier (e.g. "my-project").
    """
    parts = [part for part in (project_id, database_name, name) if part]
    full_name = ".".join(parts)

    if any(not _PLAIN_IDENTIFIER.match(part) for part in parts):
        return f"`{full_name}`"
    return full_name
