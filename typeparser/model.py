from dataclasses import dataclass
from typing import Optional

from typeparser.types import Type, FunctionParameter


@dataclass(frozen=True)
class Function:
    name: str
    params: list[FunctionParameter]
    return_type: Optional[Type]
    abi: Optional[str]


@dataclass(frozen=True)
class Static:
    name: str
    type: Type
    mutable: bool


@dataclass(frozen=True)
class TypeAlias:
    name: str
    for_type: Type


@dataclass(frozen=True)
class OpaqueType:
    name: str


@dataclass(frozen=True)
class Module:
    functions: list[Function]
    statics: list[Static]
    type_aliases: list[TypeAlias]
    opaque_types: list[OpaqueType]
