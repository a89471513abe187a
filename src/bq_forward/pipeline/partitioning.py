import math
from typing import Optional

from bq_forward.canonical.table import RangeOptions, TableConfig

"""
PARTITION BY clause selection.

- Best-effort: never raises
- Sub-parameters are read only for the matching partitioning mode
- Returns clause text without a leading newline, or "" when not applicable
"""

NO_PARTITIONING = "No partitioning"
BY_INGESTION_TIME = "By ingestion time"
BY_TIME_UNIT_COLUMN = "By time-unit column"
BY_INTEGER_RANGE = "By integer-range"

INGESTION_GRANULARITY = {
    "By day": "DAY",
    "By hour": "HOUR",
    "By month": "MONTH",
    "By year": "YEAR",
}
DEFAULT_GRANULARITY = "DAY"


def to_number(value) -> float:
    """
    Parse a bound the way the design tool stores it:
    blank string -> 0, missing / unparsable -> NaN.
    """
    if value is None or isinstance(value, bool):
        return math.nan

    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip()
    if not text:
        return 0.0

    try:
        return float(text)
    except ValueError:
        return math.nan


def format_number(value: float) -> str:
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return str(value)


def get_partitioning_by_ingestion_time(partitioning_type: Optional[str]) -> str:
    granularity = INGESTION_GRANULARITY.get(partitioning_type, DEFAULT_GRANULARITY)
    return f"TIMESTAMP_TRUNC(_PARTITIONTIME, {granularity})"


def get_partitioning_by_integer_range(range_options: Optional[RangeOptions]) -> str:
    if not range_options or not range_options.partition_key:
        return ""

    start = to_number(range_options.start)
    end = to_number(range_options.end)
    if math.isnan(start) or math.isnan(end):
        return ""

    interval = to_number(range_options.interval)
    interval_part = "" if math.isnan(interval) else f", {format_number(interval)}"

    name = range_options.partition_key[0]
    return (
        f"RANGE_BUCKET({name}, GENERATE_ARRAY("
        f"{format_number(start)}, {format_number(end)}{interval_part}))"
    )


def get_table_partitioning(config: TableConfig) -> str:
    partitioning = config.partitioning

    if partitioning == BY_INGESTION_TIME:
        return "PARTITION BY " + get_partitioning_by_ingestion_time(config.partitioning_type)

    if partitioning == BY_TIME_UNIT_COLUMN:
        if not config.time_unit_partition_key:
            return ""
        return f"PARTITION BY DATE({config.time_unit_partition_key[0]})"

    if partitioning == BY_INTEGER_RANGE:
        expression = get_partitioning_by_integer_range(config.range_options)
        return f"PARTITION BY {expression}" if expression else ""

    # NO_PARTITIONING or unknown mode
    return ""
