"""
BigQuery type vocabulary used by the design tool.

- TYPE_DESCRIPTORS: known BigQuery types and the parameters they accept
- DEFAULT_TYPES: generic (JSON-schema style) types -> BigQuery type
"""

from typing import Dict, Optional


TYPE_DESCRIPTORS: Dict[str, Dict] = {
    "string": {"parent": "string", "parameters": ["length"]},
    "bytes": {"parent": "binary", "parameters": ["length"]},
    "int64": {"parent": "numeric", "parameters": []},
    "numeric": {"parent": "numeric", "parameters": ["precision", "scale"]},
    "bignumeric": {"parent": "numeric", "parameters": ["precision", "scale"]},
    "float64": {"parent": "numeric", "parameters": []},
    "bool": {"parent": "boolean", "parameters": []},
    "timestamp": {"parent": "string", "parameters": []},
    "date": {"parent": "string", "parameters": []},
    "time": {"parent": "string", "parameters": []},
    "datetime": {"parent": "string", "parameters": []},
    "geography": {"parent": "string", "parameters": []},
    "interval": {"parent": "string", "parameters": []},
    "json": {"parent": "document", "parameters": []},
    "array": {"parent": "array", "parameters": []},
    "struct": {"parent": "document", "parameters": []},
}

DEFAULT_TYPES: Dict[str, str] = {
    "string": "string",
    "number": "numeric",
    "integer": "int64",
    "boolean": "bool",
    "object": "struct",
    "document": "struct",
    "record": "struct",
    "array": "array",
    "binary": "bytes",
    "null": "string",
}


def get_types_descriptors() -> Dict[str, Dict]:
    return TYPE_DESCRIPTORS


def has_type(type_name: Optional[str]) -> bool:
    if not type_name:
        return False
    return type_name.lower() in get_types_descriptors()


def get_default_type(type_name: Optional[str]) -> Optional[str]:
    if not type_name:
        return None
    return DEFAULT_TYPES.get(type_name.lower())


def resolve_type(type_name: Optional[str]) -> str:
    """
    Resolve a type name coming from a model record.

    - Known BigQuery type -> kept (lowercased)
    - Generic type with a default -> mapped
    - Anything else -> passed through untouched
    """
    if has_type(type_name):
        return type_name.lower()

    default = get_default_type(type_name)
    if default:
        return default

    return type_name or ""
