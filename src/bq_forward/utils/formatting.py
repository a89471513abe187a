INDENT = "  "


def indent_block(text: str, prefix: str = INDENT) -> str:
    """
    Indent every line of a (possibly multi-line) block by one level.
    """
    return "\n".join(prefix + line for line in text.split("\n"))


def escape_string(value) -> str:
    """
    Escape a value for embedding inside a double-quoted BigQuery literal.
    """
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


def quote(value) -> str:
    return f'"{escape_string(value)}"'
