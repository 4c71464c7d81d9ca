from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Type:
    pass


@dataclass(frozen=True)
class Unit(Type):
    pass


@dataclass(frozen=True)
class Pointer(Type):
    mutable: bool
    of: Type


@dataclass(frozen=True)
class FunctionParameter:
    name: Optional[str]
    type: Type


@dataclass(frozen=True)
class FunctionType(Type):
    params: list[FunctionParameter]
    return_type: Optional[Type]
    abi: Optional[str]


@dataclass(frozen=True)
class PathSegment:
    name: str
    arguments: list[Type]


@dataclass(frozen=True)
class Path(Type):
    segments: list[PathSegment]


@dataclass(frozen=True)
class Tuple(Type):
    elements: list[Type]


@dataclass(frozen=True)
class Slice(Type):
    of: Type


@dataclass(frozen=True)
class Array(Type):
    of: Type
    size: int


@dataclass(frozen=True)
class Reference(Type):
    mutable: bool
    of: Type


@dataclass(frozen=True)
class Never(Type):
    pass


@dataclass(frozen=True)
class Infer(Type):
    pass


def path(*names: str) -> Path:
    return Path(segments=[PathSegment(name=name, arguments=[]) for name in names])
