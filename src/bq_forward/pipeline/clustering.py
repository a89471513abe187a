from bq_forward.canonical.table import TableConfig

# BigQuery allows at most four clustering columns
MAX_CLUSTERING_COLUMNS = 4


def get_table_clustering(config: TableConfig) -> str:
    columns = [name for name in (config.clustering_key or []) if name]
    if not columns:
        return ""

    return "CLUSTER BY " + ", ".join(columns)
