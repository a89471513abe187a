import math
from datetime import datetime, timedelta, timezone
from typing import List

from bq_forward.canonical.table import DatabaseConfig, TableConfig
from bq_forward.pipeline.labels import render_labels_option
from bq_forward.pipeline.partitioning import BY_INGESTION_TIME, to_number
from bq_forward.utils.formatting import indent_block, quote

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def get_timestamp(epoch_millis) -> str:
    """
    Epoch milliseconds -> "YYYY-MM-DD HH:MM:SS UTC" (always UTC).
    Returns "" when the value is not a representable instant.
    """
    millis = to_number(epoch_millis)
    if not math.isfinite(millis):
        return ""

    try:
        moment = _EPOCH + timedelta(milliseconds=int(millis))
    except OverflowError:
        return ""

    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} UTC"
    )


def render_options_block(options: List[str]) -> str:
    if not options:
        return ""
    return "OPTIONS(\n" + indent_block(",\n".join(options)) + "\n)"


def get_table_options(config: TableConfig) -> str:
    options: List[str] = []

    if config.friendly_name:
        options.append(f"friendly_name={quote(config.friendly_name)}")

    if config.description:
        options.append(f"description={quote(config.description)}")

    expiration = get_timestamp(config.expiration) if config.expiration else ""
    if expiration:
        options.append(f'expiration_timestamp=TIMESTAMP "{expiration}"')

    # Only meaningful for ingestion-time partitioned tables
    if config.partitioning == BY_INGESTION_TIME and config.partitioning_filter_required:
        options.append("require_partition_filter=true")

    if config.customer_encryption_key:
        options.append(f"kms_key_name={quote(config.customer_encryption_key)}")

    if config.labels:
        options.append(render_labels_option(config.labels))

    return render_options_block(options)


def get_database_options(config: DatabaseConfig) -> str:
    options: List[str] = []

    if config.friendly_name:
        options.append(f"friendly_name={quote(config.friendly_name)}")

    if config.description:
        options.append(f"description={quote(config.description)}")

    if config.customer_encryption_key:
        options.append(f"default_kms_key_name={quote(config.customer_encryption_key)}")

    if config.default_expiration:
        options.append(f"default_table_expiration_days={config.default_expiration}")

    if config.labels:
        options.append(render_labels_option(config.labels))

    return render_options_block(options)
