from pycparser import c_ast, c_parser

from ctranslator import native_names_to_c, libc_names_to_c


class HeaderValidationError(Exception):
    pass


def _is_type_name(token: str) -> bool:
    return " " not in token and token not in HeaderValidator.C_KEYWORD_TYPES


class HeaderValidator:
    """Checks emitted headers by parsing them with pycparser.

    pycparser does not run a preprocessor here, so directives are blanked out (line numbers are kept),
    the C++ linkage block is dropped and every type name the includes would provide is declared in a
    preamble instead.
    """

    C_KEYWORD_TYPES = {"void", "char", "short", "int", "long", "float", "double", "signed", "unsigned"}

    __PREAMBLE_FILE = "<preamble>"
    __TYPEDEF_PATTERN = "typedef int {0};"
    __LINE_DIRECTIVE_PATTERN = "#line 1 \"{0}\""
    __CPLUSPLUS_START = "#ifdef __cplusplus"
    __CONDITIONAL_END = "#endif"

    def validate(self, text: str, known_type_names: list[str] = (), file_name: str = "header.h") -> list[str]:
        """Returns the names declared at the top level of the header, in order."""
        lines = [self.__TYPEDEF_PATTERN.format(name) for name in self._get_preamble_type_names(known_type_names)]
        lines.append(self.__LINE_DIRECTIVE_PATTERN.format(file_name))
        lines += self._blank_preprocessor_lines(text.splitlines())

        try:
            ast = c_parser.CParser().parse("\n".join(lines), filename=self.__PREAMBLE_FILE)
        except c_parser.ParseError as error:
            raise HeaderValidationError(f"Generated header is not valid C: {error}") from error

        return [node.name
                for node in self._filter_by_file(ast, file_name)
                if isinstance(node, (c_ast.Decl, c_ast.Typedef)) and node.name is not None]

    @staticmethod
    def _get_preamble_type_names(known_type_names: list[str]) -> list[str]:
        names: list[str] = []
        tokens = list(native_names_to_c.values()) + [token for token in libc_names_to_c.values() if token is not None]
        for name in tokens + list(known_type_names):
            if _is_type_name(name) and name not in names:
                names.append(name)
        return names

    def _blank_preprocessor_lines(self, lines: list[str]) -> list[str]:
        result: list[str] = []
        in_cplusplus_block = False
        for line in lines:
            stripped = line.strip()
            if stripped == self.__CPLUSPLUS_START:
                in_cplusplus_block = True
                result.append("")
            elif in_cplusplus_block:
                if stripped == self.__CONDITIONAL_END:
                    in_cplusplus_block = False
                result.append("")
            elif stripped.startswith("#"):
                result.append("")
            else:
                result.append(line)
        return result

    @staticmethod
    def _filter_by_file(ast: c_ast.FileAST, file_name: str) -> list[c_ast.Node]:
        return list(filter(lambda it: it.coord is not None and it.coord.file == file_name, ast.ext))
