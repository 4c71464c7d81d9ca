from typing import Optional

from ctranslator import ALIAS_MODULE, native_names_to_c, libc_names_to_c
from ctranslator.errors import UnsupportedType, InvalidPath, MissingName
from ctranslator.types import CType, Void, Native, Named, Function, Pointer as CPointer, is_function_pointer
from typeparser import is_function_type
from typeparser.types import Type, Unit, Pointer, FunctionType, Path

C_ABI = "C"


def compose(declarator: str, is_const: bool) -> str:
    """Wraps a rendered pointee declarator in one level of indirection.

    The qualifier is written after the pointee, so chains composed from the innermost level outwards
    read right to left the way C declarators do: ``uint8_t const**`` is a pointer to a pointer to
    a constant ``uint8_t``.
    """
    return declarator + (" const" if is_const else "") + "*"


class TypeResolver:
    def resolve(self, typ: Type) -> CType:
        if isinstance(typ, Unit):
            return Void()
        elif isinstance(typ, Pointer):
            return CPointer(is_const=not typ.mutable, pointee=self.resolve(typ.of))
        elif isinstance(typ, FunctionType):
            return self._resolve_function(typ)
        elif isinstance(typ, Path):
            return self._resolve_path(typ)
        else:
            raise UnsupportedType(typ, "Type has no C equivalent")

    def _resolve_function(self, function: FunctionType) -> Function:
        if function.abi != C_ABI:
            raise UnsupportedType(function, "Only functions using the C ABI can be called from C")
        return_type = Void() if function.return_type is None else self.resolve(function.return_type)
        return Function(
            return_type=return_type,
            parameters=[(param.name, self.resolve(param.type)) for param in function.params]
        )

    def _resolve_path(self, path: Path) -> CType:
        segment_count = len(path.segments)
        if segment_count == 0:
            raise InvalidPath(path, "Empty type path")
        if segment_count > 1 and (segment_count != 2 or path.segments[0].name != ALIAS_MODULE):
            raise InvalidPath(path, f"Types from modules other than `{ALIAS_MODULE}` can not be resolved")
        if any(len(segment.arguments) > 0 for segment in path.segments):
            raise UnsupportedType(path, "Generic types have no C equivalent")

        name = path.segments[-1].name
        if segment_count == 2:
            return self._resolve_alias(name)

        token = native_names_to_c.get(name)
        if token is not None:
            return Native(token)
        # Assumed to be declared somewhere else in the same header.
        return Named(name)

    @staticmethod
    def _resolve_alias(name: str) -> CType:
        if name not in libc_names_to_c:
            return Native(name)
        token = libc_names_to_c[name]
        if token is None:
            return Void()
        return Native(token)


class DeclarationRenderer:
    def render(self, ctype: CType, name: Optional[str] = None) -> str:
        if name is None:
            return self._render_anonymous(ctype)
        return self._render_named(ctype, name)

    def render_prototype(self, name: str, parameters: list[tuple[Optional[str], CType]], return_type: CType) -> str:
        return self._render_named(return_type, f"{name}({self.render_parameters(parameters)})")

    def render_parameters(self, parameters: list[tuple[Optional[str], CType]]) -> str:
        if len(parameters) == 0:
            return "void"
        return ", ".join(self.render(parameter_type, parameter_name)
                         for parameter_name, parameter_type in parameters)

    def _render_anonymous(self, ctype: CType) -> str:
        if isinstance(ctype, Void):
            return "void"
        elif isinstance(ctype, Native):
            return ctype.token
        elif isinstance(ctype, Named):
            return ctype.identifier
        elif isinstance(ctype, CPointer):
            return compose(self._render_anonymous(ctype.pointee), ctype.is_const)
        elif isinstance(ctype, Function):
            raise MissingName(ctype, "C function pointers can not be declared without a name")
        else:
            raise Exception(f"Unhandled case {ctype}")

    def _render_named(self, ctype: CType, declarator: str) -> str:
        if isinstance(ctype, Function):
            return self._render_named(
                ctype.return_type,
                f"(*{declarator})({self.render_parameters(ctype.parameters)})"
            )
        elif isinstance(ctype, CPointer) and is_function_pointer(ctype.pointee):
            # The pointee's own '*' ends up in front of this level's qualifier and '*'.
            return self._render_named(ctype.pointee, compose("", ctype.is_const) + declarator)
        else:
            return f"{self._render_anonymous(ctype)} {declarator}"


_resolver = TypeResolver()
_renderer = DeclarationRenderer()


def translate_anonymous(typ: Type) -> str:
    if is_function_type(typ):
        raise MissingName(typ, "C function pointers can not be declared without a name")
    return _renderer.render(_resolver.resolve(typ))


def translate_named(typ: Type, name: str) -> str:
    return _renderer.render(_resolver.resolve(typ), name)
