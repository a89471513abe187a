from typing import Dict, List, Optional

from bq_forward.canonical.descriptor import TypeDescriptor
from bq_forward.canonical.table import DatabaseConfig, TableConfig
from bq_forward.pipeline.clustering import get_table_clustering
from bq_forward.pipeline.partitioning import get_table_partitioning
from bq_forward.pipeline.table_options import get_database_options, get_table_options
from bq_forward.pipeline.type_renderer import render_column
from bq_forward.utils.formatting import indent_block
from bq_forward.utils.naming import get_full_name

CREATE_TABLE_TEMPLATE = (
    "CREATE {or_replace}{temporary}{external}TABLE {if_not_exist}{name} (\n"
    "{column_definitions}\n"
    "){partitions}{clustering}{options}"
)

CREATE_DATABASE_TEMPLATE = "CREATE SCHEMA {if_not_exist}{name}{options}"

# Placeholder for a missing dataset or table name
UNNAMED = "<unnamed>"


def _clause(text: str) -> str:
    return f"\n{text}" if text else ""


class BigQueryDDLGenerator:
    """
    Generates BigQuery DDL statements.

    Responsibilities:
    - CREATE SCHEMA (dataset)
    - CREATE TABLE with column definitions
    - Apply partitioning, clustering and OPTIONS only when configured

    Design principles:
    - Best-effort: rendering never raises
    - Deterministic output
    - Statements carry no terminator; `generate` builds the script
    """

    # --------------------------------------------------
    # COLUMNS
    # --------------------------------------------------

    def convert_column_definition(self, name: str, descriptor: TypeDescriptor) -> str:
        return render_column(descriptor, name=name)

    # --------------------------------------------------
    # DATASET DDL
    # --------------------------------------------------

    def create_database(self, database: DatabaseConfig) -> str:
        return CREATE_DATABASE_TEMPLATE.format(
            if_not_exist="IF NOT EXISTS " if database.if_not_exist else "",
            name=get_full_name(database.project_id, database.database_name or UNNAMED),
            options=_clause(get_database_options(database)),
        )

    # --------------------------------------------------
    # TABLE DDL
    # --------------------------------------------------

    def create_table(self, table: TableConfig, columns: Optional[List[str]] = None) -> str:
        """
        Assemble CREATE TABLE from already rendered column lines.
        When `columns` is omitted, the table's own descriptors are rendered.
        """
        if columns is None:
            columns = [
                self.convert_column_definition(name, descriptor)
                for name, descriptor in table.columns.items()
            ]

        return CREATE_TABLE_TEMPLATE.format(
            or_replace="OR REPLACE " if table.or_replace else "",
            temporary="TEMPORARY " if table.temporary else "",
            external="EXTERNAL " if table.external else "",
            if_not_exist="IF NOT EXISTS " if table.if_not_exist else "",
            name=get_full_name(table.project_id, table.database_name, table.name or UNNAMED),
            column_definitions=indent_block(",\n".join(columns)) if columns else "",
            partitions=_clause(get_table_partitioning(table)),
            clustering=_clause(get_table_clustering(table)),
            options=_clause(get_table_options(table)),
        )

    # --------------------------------------------------
    # COMBINED ENTRYPOINT (USED BY ROUTER)
    # --------------------------------------------------

    def generate(
        self,
        database: Optional[DatabaseConfig],
        tables: List[TableConfig],
    ) -> Dict:
        """
        Generate dataset and table DDLs plus a ready-to-run script.
        """
        database_ddl = self.create_database(database) if database else ""
        table_ddls = [self.create_table(table) for table in tables]

        statements = [s for s in [database_ddl, *table_ddls] if s]
        script = "\n\n".join(f"{statement};" for statement in statements)

        return {
            "database_ddl": database_ddl,
            "table_ddls": table_ddls,
            "script": script,
        }
