from typing import List

from bq_forward.canonical.table import Label
from bq_forward.utils.formatting import indent_block, quote


def format_labels(labels: List[Label]) -> str:
    """
    Render labels as BigQuery key/value tuples, one per line.
    """
    return ",\n".join(
        f"({quote(label.key)}, {quote(label.value)})"
        for label in labels
    )


def render_labels_option(labels: List[Label]) -> str:
    return f"labels=[\n{indent_block(format_labels(labels))}\n]"
