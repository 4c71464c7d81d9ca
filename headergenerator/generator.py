import sys
from enum import Enum

from ctranslator import sanitise_id, native_names_to_c, libc_names_to_c
from ctranslator.errors import TranslationError
from ctranslator.translator import TypeResolver, DeclarationRenderer
from ctranslator.types import CType, Native, Named, Function as CFunction, get_base_types
from headergenerator.model import Header, Element, OpaqueStruct, TypeDefinition, ExternVariable, \
    FunctionPrototype, SkippedItem
from typeparser.model import Module, Function
from typeparser.types import FunctionType


class ErrorPolicy(Enum):
    SKIP = "skip"
    WARN = "warn"
    ABORT = "abort"


class HeaderGenerator:
    __GUARD_PATTERN = "cdeclgen_generated_{0}_h"
    __DEFAULT_INCLUDES = ["stdint.h", "stdbool.h"]
    __TOKEN_INCLUDES = {
        "size_t": "stddef.h",
        "FILE": "stdio.h",
        "dirent": "dirent.h",
    }

    error_policy: ErrorPolicy = ErrorPolicy.WARN

    def __init__(self, resolver: TypeResolver = TypeResolver(), renderer: DeclarationRenderer = DeclarationRenderer()):
        self._resolver = resolver
        self._renderer = renderer

    def generate(self, module: Module, name: str) -> Header:
        elements: list[Element] = [OpaqueStruct(name=opaque_type.name) for opaque_type in module.opaque_types]
        declared_names = set(opaque_type.name for opaque_type in module.opaque_types)
        used_types: list[CType] = []
        skipped: list[SkippedItem] = []

        for type_alias in module.type_aliases:
            try:
                ctype = self._resolver.resolve(type_alias.for_type)
                elements.append(TypeDefinition(
                    name=type_alias.name,
                    declaration=self._renderer.render(ctype, type_alias.name)
                ))
            except TranslationError as error:
                self._handle_error(type_alias.name, error, skipped)
                continue
            declared_names.add(type_alias.name)
            used_types.append(ctype)

        for static in module.statics:
            try:
                ctype = self._resolver.resolve(static.type)
                elements.append(ExternVariable(
                    name=static.name,
                    declaration=self._renderer.render(ctype, static.name)
                ))
            except TranslationError as error:
                self._handle_error(static.name, error, skipped)
                continue
            used_types.append(ctype)

        for function in module.functions:
            try:
                ctype = self._resolve_function(function)
                elements.append(FunctionPrototype(
                    name=function.name,
                    declaration=self._renderer.render_prototype(function.name, ctype.parameters, ctype.return_type)
                ))
            except TranslationError as error:
                self._handle_error(function.name, error, skipped)
                continue
            used_types.append(ctype)

        base_types = [base_type for ctype in used_types for base_type in get_base_types(ctype)]
        return Header(
            name=name,
            guard=self.__GUARD_PATTERN.format(sanitise_id(name)),
            includes=self._get_includes(base_types),
            elements=elements,
            external_type_names=self._get_external_type_names(base_types, declared_names),
            skipped=skipped
        )

    def _resolve_function(self, function: Function) -> CFunction:
        return self._resolver.resolve(FunctionType(
            params=function.params,
            return_type=function.return_type,
            abi=function.abi
        ))

    def _handle_error(self, name: str, error: TranslationError, skipped: list[SkippedItem]):
        if self.error_policy == ErrorPolicy.ABORT:
            raise error
        if self.error_policy == ErrorPolicy.WARN:
            print(f"Skipping `{name}`: {error}", file=sys.stderr)
        skipped.append(SkippedItem(name=name, error=error))

    def _get_includes(self, base_types: list[CType]) -> list[str]:
        includes = list(self.__DEFAULT_INCLUDES)
        for base_type in base_types:
            if not isinstance(base_type, Native):
                continue
            include = self.__TOKEN_INCLUDES.get(base_type.token)
            if include is not None and include not in includes:
                includes.append(include)
        return includes

    @staticmethod
    def _get_external_type_names(base_types: list[CType], declared_names: set[str]) -> list[str]:
        """Names the header uses but neither declares nor gets from a standard include."""
        standard_tokens = set(native_names_to_c.values()) | set(libc_names_to_c.values())
        names: list[str] = []
        for base_type in base_types:
            if isinstance(base_type, Named):
                name = base_type.identifier
            elif isinstance(base_type, Native) and base_type.token not in standard_tokens:
                name = base_type.token
            else:
                continue
            if name not in declared_names and name not in names:
                names.append(name)
        return names
