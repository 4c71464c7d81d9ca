from dataclasses import dataclass, field

from ctranslator.errors import TranslationError


@dataclass(frozen=True)
class Element:
    name: str


@dataclass(frozen=True)
class OpaqueStruct(Element):
    pass


@dataclass(frozen=True)
class TypeDefinition(Element):
    declaration: str


@dataclass(frozen=True)
class ExternVariable(Element):
    declaration: str


@dataclass(frozen=True)
class FunctionPrototype(Element):
    declaration: str


@dataclass(frozen=True)
class SkippedItem:
    name: str
    error: TranslationError


@dataclass(frozen=True)
class Header:
    name: str
    guard: str
    includes: list[str]
    elements: list[Element]
    external_type_names: list[str] = field(default_factory=list)
    skipped: list[SkippedItem] = field(default_factory=list)
