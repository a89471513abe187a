import pytest


@pytest.fixture
def model_document():
    """A small design-tool model: one dataset, one partitioned table."""
    return {
        "modelData": [{"projectID": "analytics-prod"}],
        "container": {
            "name": "sales",
            "businessBucketName": "Sales data",
            "description": "Curated sales tables",
            "ifNotExist": True,
            "enableTableExpiration": True,
            "defaultExpiration": 30,
            "encryption": "Customer-managed",
            "customerEncryptionKey": "projects/p/locations/us/keyRings/r/cryptoKeys/k",
            "labels": [{"labelKey": "team", "labelValue": "finance"}],
        },
        "entities": [
            {
                "entityData": [
                    {
                        "collectionName": "orders",
                        "description": "Customer orders",
                        "partitioning": "By ingestion time",
                        "partitioningType": "By month",
                        "partitioningFilterRequired": True,
                        "clusteringKey": [{"name": "customer_id"}],
                        "tableType": "Native",
                    }
                ],
                "jsonSchema": {
                    "title": "orders",
                    "properties": {
                        "order_id": {"type": "int64", "dataTypeMode": "Required"},
                        "customer_id": {"type": "string"},
                        "amount": {"type": "numeric", "precision": 10, "scale": 2},
                        "tags": {"type": "string", "dataTypeMode": "Repeated"},
                    },
                },
            }
        ],
    }
