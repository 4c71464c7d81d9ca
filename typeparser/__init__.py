from typeparser.types import Type, Unit, Pointer, FunctionType, FunctionParameter, Path, PathSegment, Tuple, \
    Slice, Array, Reference, Never, Infer


def _format_params(params: list[FunctionParameter]) -> str:
    return ", ".join(format_type(param.type) if param.name is None else f"{param.name}: {format_type(param.type)}"
                     for param in params)


def _format_segment(segment: PathSegment) -> str:
    if len(segment.arguments) == 0:
        return segment.name
    return f"{segment.name}<{', '.join(format_type(argument) for argument in segment.arguments)}>"


def format_type(typ: Type) -> str:
    """Renders a type expression back to source syntax, mainly for error messages."""
    if isinstance(typ, Unit):
        return "()"
    elif isinstance(typ, Pointer):
        return f"*{'mut' if typ.mutable else 'const'} {format_type(typ.of)}"
    elif isinstance(typ, FunctionType):
        prefix = ""
        if typ.abi == "C":
            prefix = "extern "
        elif typ.abi is not None:
            prefix = f"extern \"{typ.abi}\" "
        suffix = "" if typ.return_type is None else f" -> {format_type(typ.return_type)}"
        return f"{prefix}fn({_format_params(typ.params)}){suffix}"
    elif isinstance(typ, Path):
        return "::".join(_format_segment(segment) for segment in typ.segments)
    elif isinstance(typ, Tuple):
        if len(typ.elements) == 1:
            return f"({format_type(typ.elements[0])},)"
        return f"({', '.join(format_type(element) for element in typ.elements)})"
    elif isinstance(typ, Slice):
        return f"[{format_type(typ.of)}]"
    elif isinstance(typ, Array):
        return f"[{format_type(typ.of)}; {typ.size}]"
    elif isinstance(typ, Reference):
        return f"&{'mut ' if typ.mutable else ''}{format_type(typ.of)}"
    elif isinstance(typ, Never):
        return "!"
    elif isinstance(typ, Infer):
        return "_"
    else:
        raise Exception(f"Unhandled case {typ}")


def is_function_type(typ: Type) -> bool:
    if isinstance(typ, FunctionType):
        return True
    elif isinstance(typ, Pointer):
        return is_function_type(typ.of)
    return False
