from typing import IO

from headergenerator.model import Header, Element, OpaqueStruct, TypeDefinition, ExternVariable, FunctionPrototype


class Output:
    def write(self, text: str):
        pass

    def new_line(self):
        pass

    def close(self):
        pass


class FileOutput(Output):
    __file: IO = None

    def __init__(self, file: str):
        self.__file = open(file, "w")

    def write(self, text: str):
        self.__file.write(text)

    def new_line(self):
        self.write("\n")

    def close(self):
        self.__file.close()


class StringOutput(Output):
    def __init__(self):
        self.__parts: list[str] = []

    def write(self, text: str):
        self.__parts.append(text)

    def new_line(self):
        self.write("\n")

    def getvalue(self) -> str:
        return "".join(self.__parts)


class HeaderWriter:
    __GUARD_START_PATTERNS = ["#ifndef {0}", "#define {0}"]
    __GUARD_END_PATTERN = "#endif /* {0} */"
    __INCLUDE_PATTERN = "#include <{0}>"
    __CPLUSPLUS_START_LINES = ["#ifdef __cplusplus", "extern \"C\" {", "#endif"]
    __CPLUSPLUS_END_LINES = ["#ifdef __cplusplus", "}", "#endif"]
    __OPAQUE_STRUCT_PATTERN = "typedef struct {0} {0};"
    __TYPE_DEFINITION_PATTERN = "typedef {0};"
    __EXTERN_VARIABLE_PATTERN = "extern {0};"
    __FUNCTION_PROTOTYPE_PATTERN = "{0};"

    def write(self, header: Header, output: Output):
        self._write_lines([pattern.format(header.guard) for pattern in self.__GUARD_START_PATTERNS], output)
        output.new_line()

        if len(header.includes) > 0:
            self._write_lines([self.__INCLUDE_PATTERN.format(include) for include in header.includes], output)
            output.new_line()

        self._write_lines(self.__CPLUSPLUS_START_LINES, output)
        output.new_line()

        if len(header.elements) > 0:
            for element in header.elements:
                self._write(element, output)
                output.new_line()
            output.new_line()

        self._write_lines(self.__CPLUSPLUS_END_LINES, output)
        output.new_line()
        output.write(self.__GUARD_END_PATTERN.format(header.guard))
        output.new_line()

    def write_to_string(self, header: Header) -> str:
        output = StringOutput()
        self.write(header, output)
        return output.getvalue()

    def _write(self, element: Element, output: Output):
        if isinstance(element, OpaqueStruct):
            output.write(self.__OPAQUE_STRUCT_PATTERN.format(element.name))
        elif isinstance(element, TypeDefinition):
            output.write(self.__TYPE_DEFINITION_PATTERN.format(element.declaration))
        elif isinstance(element, ExternVariable):
            output.write(self.__EXTERN_VARIABLE_PATTERN.format(element.declaration))
        elif isinstance(element, FunctionPrototype):
            output.write(self.__FUNCTION_PROTOTYPE_PATTERN.format(element.declaration))
        else:
            raise Exception(f"Unhandled element {element}")

    @staticmethod
    def _write_lines(lines: list[str], output: Output):
        for line in lines:
            output.write(line)
            output.new_line()
