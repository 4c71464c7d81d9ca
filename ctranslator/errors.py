from typing import Union

from ctranslator.types import CType
from typeparser import Type, format_type


def _describe(expression: Union[Type, CType]) -> str:
    if isinstance(expression, Type):
        return format_type(expression)
    return str(expression)


class TranslationError(Exception):
    """A type expression that has no C declarator. Carries the offending expression."""

    def __init__(self, expression: Union[Type, CType], reason: str):
        super().__init__(f"{reason}: `{_describe(expression)}`")
        self.expression = expression
        self.reason = reason


class UnsupportedType(TranslationError):
    pass


class InvalidPath(TranslationError):
    pass


class MissingName(TranslationError):
    pass
