from dataclasses import dataclass
from typing import Optional

NOT_NULL = " NOT NULL"


def build_column(
    name: Optional[str],
    rendered_type: str,
    options: str = "",
    not_null: str = "",
) -> str:
    """
    Fill the column definition template:
        <name> <type><options><notNull>

    Array items are rendered without a name.
    """
    if name:
        return f"{name} {rendered_type}{options}{not_null}"
    return f"{rendered_type}{options}{not_null}"


@dataclass(frozen=True)
class ColumnDefinition:
    name: Optional[str]
    rendered_type: str
    not_null: str = ""
    options: str = ""

    @property
    def text(self) -> str:
        return build_column(self.name, self.rendered_type, self.options, self.not_null)
