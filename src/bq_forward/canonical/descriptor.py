from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


class Mode:
    NULLABLE = "Nullable"
    REQUIRED = "Required"
    REPEATED = "Repeated"

    @classmethod
    def is_valid(cls, mode: str) -> bool:
        return mode in {cls.NULLABLE, cls.REQUIRED, cls.REPEATED}


@dataclass(frozen=True)
class TypeParameters:
    """
    Optional numeric parameters of a scalar type.
    e.g. NUMERIC(precision, scale), STRING(length)
    """
    precision: Optional[int] = None
    scale: Optional[int] = None
    length: Optional[int] = None


@dataclass(frozen=True)
class ScalarType:
    name: str
    parameters: Optional[TypeParameters] = None
    mode: str = Mode.NULLABLE
    description: Optional[str] = None


@dataclass(frozen=True)
class ArrayType:
    items: List["TypeDescriptor"] = field(default_factory=list)
    mode: str = Mode.NULLABLE
    description: Optional[str] = None


@dataclass(frozen=True)
class StructType:
    """
    Ordered mapping of field name -> descriptor.
    Field order in the DDL follows insertion order.
    """
    fields: Dict[str, "TypeDescriptor"] = field(default_factory=dict)
    mode: str = Mode.NULLABLE
    description: Optional[str] = None


TypeDescriptor = Union[ScalarType, ArrayType, StructType]
