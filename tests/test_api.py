import pytest
from fastapi.testclient import TestClient

from bq_forward.main import app

client = TestClient(app)

ORDERS_DDL = (
    "CREATE TABLE `analytics-prod.sales.orders` (\n"
    "  order_id INT64 NOT NULL,\n"
    "  customer_id STRING,\n"
    "  amount NUMERIC(10, 2),\n"
    "  tags ARRAY<\n"
    "    STRING\n"
    "  >\n"
    ")\n"
    "PARTITION BY TIMESTAMP_TRUNC(_PARTITIONTIME, MONTH)\n"
    "CLUSTER BY customer_id\n"
    "OPTIONS(\n"
    '  description="Customer orders",\n'
    "  require_partition_filter=true\n"
    ")"
)


def test_generate_script(model_document):
    response = client.post("/generate-ddl", json={"model": model_document})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "SUCCESS"
    assert body["dataset"] == "sales"
    assert body["tables"] == ["orders"]
    assert body["issues"] == []
    assert body["script"].startswith("CREATE SCHEMA IF NOT EXISTS `analytics-prod.sales`\nOPTIONS(\n")
    assert body["script"].endswith(ORDERS_DDL + ";")
    assert "ddl" not in body


def test_generate_statements(model_document):
    response = client.post(
        "/generate-ddl",
        json={"model": model_document, "output": "statements"},
    )

    body = response.json()
    assert body["ddl"]["table_ddls"] == [ORDERS_DDL]
    assert body["ddl"]["database_ddl"] == (
        "CREATE SCHEMA IF NOT EXISTS `analytics-prod.sales`\n"
        "OPTIONS(\n"
        '  friendly_name="Sales data",\n'
        '  description="Curated sales tables",\n'
        '  default_kms_key_name="projects/p/locations/us/keyRings/r/cryptoKeys/k",\n'
        "  default_table_expiration_days=30,\n"
        "  labels=[\n"
        '    ("team", "finance")\n'
        "  ]\n"
        ")"
    )


def test_issues_are_reported_without_strict(model_document):
    model_document["entities"][0]["jsonSchema"]["properties"]["meta"] = {"type": "struct"}

    response = client.post("/generate-ddl", json={"model": model_document})

    body = response.json()
    assert response.status_code == 200
    assert [i["code"] for i in body["issues"]] == ["EMPTY_STRUCT"]
    assert "meta STRUCT<>" in body["script"]


def test_strict_validation_failure(model_document):
    model_document["entities"][0]["jsonSchema"]["properties"]["meta"] = {"type": "struct"}

    response = client.post("/generate-ddl", json={"model": model_document, "strict": True})

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["status"] == "ERROR"
    assert detail["issues"][0]["code"] == "EMPTY_STRUCT"


@pytest.mark.parametrize(
    "model",
    [
        {"entities": "orders"},
        {"entities": [{"jsonSchema": {"properties": {"a": "string"}}}]},
        {"entities": [{"jsonSchema": {"properties": ["a"]}}]},
        {"entities": [{"entityData": ["orders"]}]},
        {"entities": [{"jsonSchema": {"properties": {"a": {"type": "array", "items": ["int64"]}}}}]},
    ],
)
def test_malformed_model(model):
    response = client.post("/generate-ddl", json={"model": model})

    assert response.status_code == 400
    assert response.json()["detail"]["status"] == "ERROR"


def test_invalid_output():
    response = client.post("/generate-ddl", json={"model": {"container": {"name": "ds"}}, "output": "xml"})

    assert response.status_code == 400
    assert "Invalid output" in response.json()["detail"]["message"]
