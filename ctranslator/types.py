from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CType:
    pass


@dataclass(frozen=True)
class Void(CType):
    pass


@dataclass(frozen=True)
class Native(CType):
    token: str


@dataclass(frozen=True)
class Pointer(CType):
    is_const: bool
    pointee: CType


@dataclass(frozen=True)
class Function(CType):
    return_type: CType
    parameters: list[tuple[Optional[str], CType]]


@dataclass(frozen=True)
class Named(CType):
    identifier: str


def is_function_pointer(ctype: CType) -> bool:
    """True if the declarator of the type needs a name inside parentheses."""
    if isinstance(ctype, Function):
        return True
    elif isinstance(ctype, Pointer):
        return is_function_pointer(ctype.pointee)
    return False


def get_base_types(ctype: CType) -> list[CType]:
    if isinstance(ctype, Void) or isinstance(ctype, Native) or isinstance(ctype, Named):
        return [ctype]
    elif isinstance(ctype, Pointer):
        return get_base_types(ctype.pointee)
    elif isinstance(ctype, Function):
        types = [typ for _, parameter_type in ctype.parameters for typ in get_base_types(parameter_type)]
        types += get_base_types(ctype.return_type)
        return types
    else:
        raise Exception(f"Unhandled case {ctype}")
