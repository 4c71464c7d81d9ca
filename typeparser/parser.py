import re
from dataclasses import dataclass
from typing import Optional

from typeparser.model import Module, Function, Static, TypeAlias, OpaqueType
from typeparser.types import *

SYMBOL_MATCHER = "[A-Za-z_][A-Za-z_0-9]*"
PUNCTUATION_MATCHER = r"::|->|[*&(){}\[\];:,<>=!]"
TOKEN_MATCHER = re.compile(
    rf"(?P<comment>//[^\n]*)|(?P<attribute>#!?\[[^\]]*\])|(?P<punctuation>{PUNCTUATION_MATCHER})"
    rf"|(?P<string>\"[^\"]*\")|(?P<symbol>{SYMBOL_MATCHER})|(?P<integer>[0-9]+)"
)
WHITESPACE_MATCHER = re.compile(r"\s*")

_EOF = "end of input"


class TypeSyntaxError(Exception):
    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at offset {position})")
        self.position = position


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    position: int


def tokenize(text: str) -> list[Token]:
    tokens: list[Token] = []
    position = 0
    while True:
        position = WHITESPACE_MATCHER.match(text, position).end()
        if position >= len(text):
            break
        match = TOKEN_MATCHER.match(text, position)
        if match is None:
            raise TypeSyntaxError(f"Unexpected character {text[position]!r}", position)
        if match.lastgroup not in ("comment", "attribute"):
            tokens.append(Token(kind=match.lastgroup, value=match.group(), position=position))
        position = match.end()
    return tokens


class _TokenStream:
    def __init__(self, tokens: list[Token], length: int):
        self._tokens = tokens
        self._index = 0
        self._length = length

    def at_end(self) -> bool:
        return self._index >= len(self._tokens)

    def peek(self, offset: int = 0) -> Optional[Token]:
        index = self._index + offset
        if index >= len(self._tokens):
            return None
        return self._tokens[index]

    def next(self) -> Token:
        token = self.peek()
        if token is None:
            raise TypeSyntaxError(f"Unexpected {_EOF}", self._length)
        self._index += 1
        return token

    def is_next(self, value: str, offset: int = 0) -> bool:
        token = self.peek(offset)
        return token is not None and token.kind in ("punctuation", "symbol") and token.value == value

    def accept(self, value: str) -> bool:
        if self.is_next(value):
            self._index += 1
            return True
        return False

    def expect(self, value: str) -> Token:
        token = self.peek()
        if not self.is_next(value):
            self.fail(f"'{value}'")
        self._index += 1
        return token

    def expect_kind(self, kind: str, description: str) -> Token:
        token = self.peek()
        if token is None or token.kind != kind:
            self.fail(description)
        self._index += 1
        return token

    def fail(self, expected: str):
        token = self.peek()
        if token is None:
            raise TypeSyntaxError(f"Expected {expected} but reached {_EOF}", self._length)
        raise TypeSyntaxError(f"Expected {expected} but got {token.value!r}", token.position)


class TypeParser:
    """Recursive descent parser for the source type syntax and for flat lists of exported items."""

    __FUNCTION_START_KEYWORDS = ("unsafe", "extern", "fn")

    def parse_type(self, text: str) -> Type:
        stream = _TokenStream(tokenize(text), len(text))
        typ = self._parse_type(stream)
        if not stream.at_end():
            stream.fail(_EOF)
        return typ

    def parse_module(self, text: str) -> Module:
        stream = _TokenStream(tokenize(text), len(text))
        functions: list[Function] = []
        statics: list[Static] = []
        type_aliases: list[TypeAlias] = []
        opaque_types: list[OpaqueType] = []

        while not stream.at_end():
            stream.accept("pub")
            if stream.accept("static"):
                statics.append(self._parse_static(stream))
            elif stream.accept("type"):
                type_aliases.append(self._parse_type_alias(stream))
            elif stream.accept("struct"):
                opaque_types.append(OpaqueType(name=self._parse_name(stream)))
                if stream.is_next("{"):
                    stream.fail("';' (only opaque struct declarations are supported)")
            elif any(stream.is_next(keyword) for keyword in self.__FUNCTION_START_KEYWORDS):
                functions.append(self._parse_function(stream))
            else:
                stream.fail("an item ('fn', 'static', 'type' or 'struct')")
            stream.expect(";")

        return Module(
            functions=functions,
            statics=statics,
            type_aliases=type_aliases,
            opaque_types=opaque_types
        )

    @staticmethod
    def _parse_name(stream: _TokenStream) -> str:
        return stream.expect_kind("symbol", "a name").value

    def _parse_static(self, stream: _TokenStream) -> Static:
        mutable = stream.accept("mut")
        name = self._parse_name(stream)
        stream.expect(":")
        return Static(name=name, type=self._parse_type(stream), mutable=mutable)

    def _parse_type_alias(self, stream: _TokenStream) -> TypeAlias:
        name = self._parse_name(stream)
        stream.expect("=")
        return TypeAlias(name=name, for_type=self._parse_type(stream))

    def _parse_function(self, stream: _TokenStream) -> Function:
        abi = self._parse_function_abi(stream)
        name = self._parse_name(stream)
        params = self._parse_params(stream)
        return Function(name=name, params=params, return_type=self._parse_return_type(stream), abi=abi)

    @staticmethod
    def _parse_function_abi(stream: _TokenStream) -> Optional[str]:
        abi = None
        stream.accept("unsafe")
        if stream.accept("extern"):
            abi = "C"
            token = stream.peek()
            if token is not None and token.kind == "string":
                stream.next()
                abi = token.value[1:-1]
        stream.expect("fn")
        return abi

    def _parse_params(self, stream: _TokenStream) -> list[FunctionParameter]:
        params: list[FunctionParameter] = []
        stream.expect("(")
        while not stream.accept(")"):
            name = None
            token = stream.peek()
            if token is not None and token.kind == "symbol" and stream.is_next(":", 1):
                stream.next()
                stream.next()
                if token.value != "_":
                    name = token.value
            params.append(FunctionParameter(name=name, type=self._parse_type(stream)))
            if not stream.accept(","):
                stream.expect(")")
                break
        return params

    def _parse_return_type(self, stream: _TokenStream) -> Optional[Type]:
        if stream.accept("->"):
            return self._parse_type(stream)
        return None

    def _parse_type(self, stream: _TokenStream) -> Type:
        if stream.accept("*"):
            if stream.accept("mut"):
                return Pointer(mutable=True, of=self._parse_type(stream))
            stream.expect("const")
            return Pointer(mutable=False, of=self._parse_type(stream))
        elif stream.accept("&"):
            mutable = stream.accept("mut")
            return Reference(mutable=mutable, of=self._parse_type(stream))
        elif stream.accept("("):
            return self._parse_parenthesized(stream)
        elif stream.accept("["):
            of = self._parse_type(stream)
            if stream.accept(";"):
                size = int(stream.expect_kind("integer", "an array length").value)
                stream.expect("]")
                return Array(of=of, size=size)
            stream.expect("]")
            return Slice(of=of)
        elif stream.accept("!"):
            return Never()
        elif stream.accept("_"):
            return Infer()
        elif any(stream.is_next(keyword) for keyword in self.__FUNCTION_START_KEYWORDS):
            abi = self._parse_function_abi(stream)
            params = self._parse_params(stream)
            return FunctionType(params=params, return_type=self._parse_return_type(stream), abi=abi)
        else:
            return self._parse_path(stream)

    def _parse_parenthesized(self, stream: _TokenStream) -> Type:
        if stream.accept(")"):
            return Unit()
        elements: list[Type] = []
        trailing_comma = False
        while True:
            elements.append(self._parse_type(stream))
            trailing_comma = stream.accept(",")
            if not trailing_comma or stream.is_next(")"):
                break
        stream.expect(")")
        if len(elements) == 1 and not trailing_comma:
            return elements[0]
        return Tuple(elements=elements)

    def _parse_path(self, stream: _TokenStream) -> Path:
        stream.accept("::")
        segments: list[PathSegment] = [self._parse_path_segment(stream)]
        while stream.accept("::"):
            segments.append(self._parse_path_segment(stream))
        return Path(segments=segments)

    def _parse_path_segment(self, stream: _TokenStream) -> PathSegment:
        name = stream.expect_kind("symbol", "a type").value
        arguments: list[Type] = []
        if stream.accept("<"):
            while not stream.accept(">"):
                arguments.append(self._parse_type(stream))
                if not stream.accept(","):
                    stream.expect(">")
                    break
        return PathSegment(name=name, arguments=arguments)


def parse_type(text: str) -> Type:
    return TypeParser().parse_type(text)


def parse_module(text: str) -> Module:
    return TypeParser().parse_module(text)
