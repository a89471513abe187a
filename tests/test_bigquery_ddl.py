from bq_forward.canonical.descriptor import ArrayType, Mode, ScalarType, StructType
from bq_forward.canonical.table import DatabaseConfig, Label, TableConfig
from bq_forward.outputs.bigquery_ddl import BigQueryDDLGenerator
from bq_forward.pipeline.partitioning import BY_TIME_UNIT_COLUMN
from bq_forward.utils.naming import get_full_name


def test_minimal_table():
    table = TableConfig(name="t1", columns={"id": ScalarType("int64", mode=Mode.REQUIRED)})

    assert BigQueryDDLGenerator().create_table(table) == "CREATE TABLE t1 (\n  id INT64 NOT NULL\n)"


def test_create_table_with_prerendered_columns():
    table = TableConfig(name="t1")
    ddl = BigQueryDDLGenerator().create_table(table, ["a INT64", "b STRING"])

    assert ddl == "CREATE TABLE t1 (\n  a INT64,\n  b STRING\n)"


def test_all_flags_and_clauses():
    table = TableConfig(
        name="events",
        database_name="analytics",
        project_id="my_project",
        columns={"day": ScalarType("date")},
        or_replace=True,
        temporary=True,
        external=True,
        if_not_exist=True,
        partitioning=BY_TIME_UNIT_COLUMN,
        time_unit_partition_key=["day"],
        clustering_key=["day"],
        description="Events",
    )

    assert BigQueryDDLGenerator().create_table(table) == (
        "CREATE OR REPLACE TEMPORARY EXTERNAL TABLE IF NOT EXISTS my_project.analytics.events (\n"
        "  day DATE\n"
        ")\n"
        "PARTITION BY DATE(day)\n"
        "CLUSTER BY day\n"
        "OPTIONS(\n"
        '  description="Events"\n'
        ")"
    )


def test_nested_columns_are_indented_inside_table():
    table = TableConfig(
        name="t",
        columns={
            "id": ScalarType("int64"),
            "address": StructType(fields={
                "city": ScalarType("string"),
                "lines": ArrayType(items=[ScalarType("string")]),
            }),
        },
    )

    assert BigQueryDDLGenerator().create_table(table) == (
        "CREATE TABLE t (\n"
        "  id INT64,\n"
        "  address STRUCT<\n"
        "    city STRING,\n"
        "    lines ARRAY<\n"
        "      STRING\n"
        "    >\n"
        "  >\n"
        ")"
    )


def test_create_database_minimal():
    assert BigQueryDDLGenerator().create_database(DatabaseConfig(database_name="sales")) == (
        "CREATE SCHEMA sales"
    )


def test_create_database_with_options():
    database = DatabaseConfig(
        database_name="sales",
        project_id="acme-prod",
        if_not_exist=True,
        description="Sales",
        labels=[Label("env", "prod")],
    )

    assert BigQueryDDLGenerator().create_database(database) == (
        "CREATE SCHEMA IF NOT EXISTS `acme-prod.sales`\n"
        "OPTIONS(\n"
        '  description="Sales",\n'
        "  labels=[\n"
        '    ("env", "prod")\n'
        "  ]\n"
        ")"
    )


def test_convert_column_definition():
    generator = BigQueryDDLGenerator()

    assert generator.convert_column_definition("ids", ScalarType("int64", mode=Mode.REPEATED)) == (
        "ids ARRAY<\n  INT64\n>"
    )


def test_generate_script():
    database = DatabaseConfig(database_name="ds")
    tables = [
        TableConfig(name="a", database_name="ds", columns={"x": ScalarType("int64")}),
        TableConfig(name="b", database_name="ds", columns={"y": ScalarType("string")}),
    ]

    result = BigQueryDDLGenerator().generate(database, tables)

    assert result["database_ddl"] == "CREATE SCHEMA ds"
    assert result["table_ddls"] == [
        "CREATE TABLE ds.a (\n  x INT64\n)",
        "CREATE TABLE ds.b (\n  y STRING\n)",
    ]
    assert result["script"] == (
        "CREATE SCHEMA ds;\n\n"
        "CREATE TABLE ds.a (\n  x INT64\n);\n\n"
        "CREATE TABLE ds.b (\n  y STRING\n);"
    )


def test_generate_without_database():
    result = BigQueryDDLGenerator().generate(None, [TableConfig(name="t", columns={"x": ScalarType("bool")})])

    assert result["database_ddl"] == ""
    assert result["script"] == "CREATE TABLE t (\n  x BOOL\n);"


def test_full_name():
    assert get_full_name(None, None, "t1") == "t1"
    assert get_full_name("proj", "ds", "t") == "proj.ds.t"
    assert get_full_name("my-proj", "ds") == "`my-proj.ds`"


def test_missing_names_render_a_placeholder():
    generator = BigQueryDDLGenerator()
    table = TableConfig(name="", database_name="ds", project_id="proj", columns={"x": ScalarType("int64")})

    assert generator.create_table(table) == "CREATE TABLE `proj.ds.<unnamed>` (\n  x INT64\n)"
    assert generator.create_database(DatabaseConfig(database_name="", project_id="proj")) == (
        "CREATE SCHEMA `proj.<unnamed>`"
    )
