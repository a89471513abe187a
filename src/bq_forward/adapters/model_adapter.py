from typing import Any, Dict, List, Optional, Tuple

from bq_forward.canonical.descriptor import (
    ArrayType,
    Mode,
    ScalarType,
    StructType,
    TypeDescriptor,
    TypeParameters,
)
from bq_forward.canonical.table import DatabaseConfig, Label, RangeOptions, TableConfig
from bq_forward.standards.bigquery_types import resolve_type
from bq_forward.utils.exceptions import ModelHydrationError


# ==================================================
# HELPERS
# ==================================================

def _int_or_none(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _require_object(value: Any, what: str) -> Dict:
    if not isinstance(value, dict):
        raise ModelHydrationError(f"{what} must be an object")
    return value


def _properties(json_schema: Dict, what: str) -> Dict:
    properties = json_schema.get("properties") or {}
    return _require_object(properties, f"{what} properties")


def _names(keys: Any) -> List[str]:
    """
    [{"name": "id"}, ...] -> ["id", ...]
    """
    if not isinstance(keys, list):
        return []
    return [key.get("name") for key in keys if isinstance(key, dict) and key.get("name")]


def hydrate_labels(raw_labels: Any) -> List[Label]:
    if not isinstance(raw_labels, list):
        return []

    labels: List[Label] = []
    for raw in raw_labels:
        if not isinstance(raw, dict):
            continue
        key = raw.get("labelKey", raw.get("key"))
        if not key:
            continue
        value = raw.get("labelValue", raw.get("value"))
        labels.append(Label(key=str(key), value="" if value is None else str(value)))
    return labels


# ==================================================
# COLUMNS
# ==================================================

def hydrate_column(name: Optional[str], json_schema: Dict) -> TypeDescriptor:
    """
    Map a design-tool property schema into a TypeDescriptor.

    Supports:
    - scalar types with precision / scale / length
    - array (items as a single object or a list)
    - struct (ordered `properties`)
    - dataTypeMode: Nullable / Required / Repeated
    """
    label = name or "<item>"
    json_schema = _require_object(json_schema or {}, f"Schema of '{label}'")
    type_name = resolve_type(json_schema.get("type"))
    mode = json_schema.get("dataTypeMode") or Mode.NULLABLE
    description = json_schema.get("description") or None

    if type_name == "array":
        items = json_schema.get("items") or []
        if not isinstance(items, list):
            items = [items]
        return ArrayType(
            items=[hydrate_column(None, item) for item in items],
            mode=mode,
            description=description,
        )

    if type_name == "struct":
        properties = _properties(json_schema, f"Struct '{label}'")
        return StructType(
            fields={
                field_name: hydrate_column(field_name, field_schema)
                for field_name, field_schema in properties.items()
            },
            mode=mode,
            description=description,
        )

    parameters = TypeParameters(
        precision=_int_or_none(json_schema.get("precision")),
        scale=_int_or_none(json_schema.get("scale")),
        length=_int_or_none(json_schema.get("length")),
    )
    return ScalarType(
        name=type_name,
        parameters=parameters if parameters != TypeParameters() else None,
        mode=mode,
        description=description,
    )


def hydrate_columns(json_schema: Dict) -> Dict[str, TypeDescriptor]:
    properties = _properties(_require_object(json_schema or {}, "jsonSchema"), "Table")
    return {
        name: hydrate_column(name, column_schema)
        for name, column_schema in properties.items()
    }


# ==================================================
# DATASET / TABLE
# ==================================================

def hydrate_database(container_data: Dict, model_data: Optional[List[Dict]] = None) -> DatabaseConfig:
    project_id = None
    if model_data:
        if not isinstance(model_data, list):
            raise ModelHydrationError("modelData must be a list")
        project_id = _require_object(model_data[0] or {}, "modelData entry").get("projectID")

    return DatabaseConfig(
        database_name=container_data.get("name"),
        project_id=project_id,
        friendly_name=container_data.get("businessBucketName") or None,
        description=container_data.get("description") or None,
        if_not_exist=bool(container_data.get("ifNotExist")),
        default_expiration=(
            container_data.get("defaultExpiration")
            if container_data.get("enableTableExpiration")
            else None
        ),
        customer_encryption_key=(
            container_data.get("customerEncryptionKey")
            if container_data.get("encryption") == "Customer-managed"
            else None
        ),
        labels=hydrate_labels(container_data.get("labels")),
    )


def _hydrate_range_options(raw: Any) -> Optional[RangeOptions]:
    if not isinstance(raw, list) or not raw or not isinstance(raw[0], dict):
        return None

    options = raw[0]
    return RangeOptions(
        partition_key=_names(options.get("rangePartitionKey")),
        start=options.get("rangeStart"),
        end=options.get("rangeEnd"),
        interval=options.get("rangeinterval"),
    )


def hydrate_table(
    entity_data: List[Dict],
    json_schema: Dict,
    database: Optional[DatabaseConfig] = None,
) -> TableConfig:
    if not isinstance(entity_data, list):
        raise ModelHydrationError("entityData must be a list")
    data = _require_object((entity_data or [{}])[0], "entityData entry")
    json_schema = _require_object(json_schema or {}, "jsonSchema")

    name = data.get("collectionName") or json_schema.get("title")
    title = json_schema.get("title")

    return TableConfig(
        name=name,
        database_name=database.database_name if database else None,
        project_id=database.project_id if database else None,
        columns=hydrate_columns(json_schema),
        friendly_name=title if title and title != name else None,
        description=data.get("description") or None,
        or_replace=bool(data.get("orReplace")),
        if_not_exist=bool(data.get("ifNotExist")),
        temporary=bool(data.get("temporary")),
        external=data.get("tableType") == "External",
        partitioning=data.get("partitioning"),
        partitioning_type=data.get("partitioningType"),
        time_unit_partition_key=_names(data.get("timeUnitpartitionKey")),
        partitioning_filter_required=bool(data.get("partitioningFilterRequired")),
        range_options=_hydrate_range_options(data.get("rangeOptions")),
        expiration=data.get("expiration") or None,
        clustering_key=_names(data.get("clusteringKey")),
        customer_encryption_key=(
            data.get("customerEncryptionKey") if data.get("encryption") else None
        ),
        labels=hydrate_labels(data.get("labels")),
    )


class ModelAdapter:
    """
    Reads a whole design-tool model document:

        {
          "modelData": [{"projectID": ...}],
          "container": {...dataset properties...},
          "entities": [{"entityData": [...], "jsonSchema": {...}}]
        }
    """

    def __init__(self, document: Dict):
        self.document = document

    def parse(self) -> Tuple[Optional[DatabaseConfig], List[TableConfig]]:
        if not isinstance(self.document, dict):
            raise ModelHydrationError("Model document must be a JSON object")

        container = self.document.get("container")
        if container is not None and not isinstance(container, dict):
            raise ModelHydrationError("'container' must be an object")

        entities = self.document.get("entities") or []
        if not isinstance(entities, list):
            raise ModelHydrationError("'entities' must be a list")

        if not container and not entities:
            raise ModelHydrationError("Model document has no container and no entities")

        database = None
        if container:
            database = hydrate_database(container, self.document.get("modelData"))

        tables: List[TableConfig] = []
        for index, entity in enumerate(entities):
            if not isinstance(entity, dict):
                raise ModelHydrationError(f"Entity #{index} must be an object")
            tables.append(
                hydrate_table(
                    entity.get("entityData") or [{}],
                    entity.get("jsonSchema") or {},
                    database,
                )
            )

        return database, tables
