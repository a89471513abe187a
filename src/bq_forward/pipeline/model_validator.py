import math
from typing import Dict, List, Optional

from bq_forward.canonical.descriptor import ArrayType, Mode, ScalarType, StructType, TypeDescriptor
from bq_forward.canonical.table import DatabaseConfig, TableConfig
from bq_forward.pipeline.clustering import MAX_CLUSTERING_COLUMNS
from bq_forward.pipeline.partitioning import BY_INTEGER_RANGE, BY_TIME_UNIT_COLUMN, to_number
from bq_forward.standards.bigquery_types import has_type
from bq_forward.utils.exceptions import ModelValidationError

ERROR = "ERROR"
WARNING = "WARNING"


class ModelValidator:
    """
    Optional strict layer over the canonical model.

    This class:
    - NEVER mutates the model
    - Is not used by the rendering path (rendering stays best-effort)
    - Reports output the renderer would emit malformed or silently drop
    """

    def __init__(self, database: Optional[DatabaseConfig], tables: List[TableConfig]):
        self.database = database
        self.tables = tables
        self.issues: List[Dict] = []

    def _add(self, severity: str, code: str, path: str, message: str):
        self.issues.append({
            "severity": severity,
            "code": code,
            "path": path,
            "message": message,
        })

    # ------------------------------------------------------------------
    # Column-level validation
    # ------------------------------------------------------------------

    def _validate_descriptor(self, descriptor: TypeDescriptor, path: str):
        if not Mode.is_valid(descriptor.mode):
            self._add(
                WARNING,
                "UNKNOWN_MODE",
                path,
                f"Mode '{descriptor.mode}' is not Nullable, Required or Repeated",
            )

        if isinstance(descriptor, StructType):
            if not descriptor.fields:
                self._add(ERROR, "EMPTY_STRUCT", path, "STRUCT has no fields and would render as STRUCT<>")
            for name, child in descriptor.fields.items():
                if not name:
                    self._add(ERROR, "MISSING_COLUMN_NAME", path, "STRUCT field has no name")
                self._validate_descriptor(child, f"{path}.{name}")
            return

        if isinstance(descriptor, ArrayType):
            if not descriptor.items:
                self._add(ERROR, "EMPTY_ARRAY", path, "ARRAY has no item type and would render as ARRAY<>")
            for index, item in enumerate(descriptor.items):
                self._validate_descriptor(item, f"{path}[{index}]")
            return

        if isinstance(descriptor, ScalarType) and not has_type(descriptor.name):
            self._add(
                WARNING,
                "UNKNOWN_TYPE",
                path,
                f"Type '{descriptor.name}' is not a known BigQuery type",
            )

    # ------------------------------------------------------------------
    # Table-level validation
    # ------------------------------------------------------------------

    def _validate_partitioning(self, table: TableConfig, path: str):
        if table.partitioning == BY_TIME_UNIT_COLUMN and not table.time_unit_partition_key:
            self._add(
                ERROR,
                "MISSING_PARTITION_KEY",
                path,
                "Time-unit partitioning has no partition column; PARTITION BY is omitted",
            )

        if table.partitioning == BY_INTEGER_RANGE:
            options = table.range_options
            if not options or not options.partition_key:
                self._add(
                    ERROR,
                    "MISSING_PARTITION_KEY",
                    path,
                    "Integer-range partitioning has no partition column; PARTITION BY is omitted",
                )
            elif math.isnan(to_number(options.start)) or math.isnan(to_number(options.end)):
                self._add(
                    ERROR,
                    "INVALID_RANGE_BOUNDS",
                    path,
                    "Integer-range start/end are not numbers; PARTITION BY is omitted",
                )

    def validate_table(self, table: TableConfig):
        path = table.name or "<unnamed>"

        if not table.name:
            self._add(ERROR, "MISSING_TABLE_NAME", path, "Table has no name")

        if not table.columns:
            self._add(WARNING, "NO_COLUMNS", path, "Table has no columns")

        for name, descriptor in table.columns.items():
            if not name:
                self._add(ERROR, "MISSING_COLUMN_NAME", path, "Column has no name")
            self._validate_descriptor(descriptor, f"{path}.{name}")

        self._validate_partitioning(table, path)

        if len(table.clustering_key) > MAX_CLUSTERING_COLUMNS:
            self._add(
                ERROR,
                "TOO_MANY_CLUSTERING_COLUMNS",
                path,
                f"BigQuery allows at most {MAX_CLUSTERING_COLUMNS} clustering columns",
            )

        if table.temporary and table.external:
            self._add(WARNING, "TEMPORARY_EXTERNAL", path, "Table is both TEMPORARY and EXTERNAL")

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def validate(self) -> List[Dict]:
        self.issues = []

        if self.database is not None and not self.database.database_name:
            self._add(ERROR, "MISSING_DATASET_NAME", "<dataset>", "Dataset has no name")

        for table in self.tables:
            self.validate_table(table)

        return self.issues

    def raise_for_errors(self) -> List[Dict]:
        issues = self.validate()
        errors = [issue for issue in issues if issue["severity"] == ERROR]
        if errors:
            raise ModelValidationError(
                f"Model validation failed with {len(errors)} error(s)",
                issues=issues,
            )
        return issues
