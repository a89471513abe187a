from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from bq_forward.canonical.descriptor import TypeDescriptor


@dataclass(frozen=True)
class Label:
    key: str
    value: str


@dataclass
class RangeOptions:
    """
    Integer-range partitioning bounds as entered in the design tool.
    Values are kept raw (string or number) and parsed at render time.
    """
    partition_key: List[str] = field(default_factory=list)
    start: Union[str, int, float, None] = None
    end: Union[str, int, float, None] = None
    interval: Union[str, int, float, None] = None


@dataclass
class DatabaseConfig:
    """
    Flat representation of a BigQuery dataset.
    """
    database_name: str
    project_id: Optional[str] = None

    friendly_name: Optional[str] = None
    description: Optional[str] = None
    if_not_exist: bool = False
    default_expiration: Union[str, int, None] = None
    customer_encryption_key: Optional[str] = None
    labels: List[Label] = field(default_factory=list)


@dataclass
class TableConfig:
    """
    Flat representation of a BigQuery table.

    Only identity (name, owning dataset / project) is meaningful on its own.
    Partitioning sub-parameters are read only when `partitioning`
    selects the matching mode.
    """
    name: str
    database_name: Optional[str] = None
    project_id: Optional[str] = None

    columns: Dict[str, TypeDescriptor] = field(default_factory=dict)

    description: Optional[str] = None
    friendly_name: Optional[str] = None

    # Statement flags
    or_replace: bool = False
    if_not_exist: bool = False
    temporary: bool = False
    external: bool = False

    # Partitioning
    partitioning: Optional[str] = None
    partitioning_type: Optional[str] = None
    time_unit_partition_key: List[str] = field(default_factory=list)
    partitioning_filter_required: bool = False
    range_options: Optional[RangeOptions] = None

    # Options
    expiration: Union[str, int, None] = None
    clustering_key: List[str] = field(default_factory=list)
    customer_encryption_key: Optional[str] = None
    labels: List[Label] = field(default_factory=list)
