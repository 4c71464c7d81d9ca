import argparse
import os.path
import sys
from pathlib import Path
from typing import Optional

from headergenerator.generator import HeaderGenerator, ErrorPolicy
from headergenerator.validator import HeaderValidator
from headergenerator.writer import HeaderWriter, FileOutput
from typeparser.parser import parse_module


class PathAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, os.path.expanduser(values))


def dir_path(path):
    if os.path.isdir(os.path.expanduser(path)):
        return path
    else:
        raise argparse.ArgumentTypeError(f"{path} is not a valid path")


def declarations_file(file: str):
    if os.path.isfile(os.path.expanduser(file)):
        return file
    else:
        raise argparse.ArgumentTypeError(f"{file} is not a valid declarations file")


def generate_header(declarations: str, output_path: str, header_name: str, error_policy: ErrorPolicy,
                    validate: bool) -> str:
    with open(declarations) as file:
        module = parse_module(file.read())

    generator = HeaderGenerator()
    generator.error_policy = error_policy
    header = generator.generate(module, header_name)

    file_name = f"{header_name}.h"
    text = HeaderWriter().write_to_string(header)
    if validate:
        declared_names = HeaderValidator().validate(text, header.external_type_names, file_name)
        print(f"Validated {len(declared_names)} declarations")

    header_path = os.path.join(output_path, file_name)
    output = FileOutput(header_path)
    output.write(text)
    output.close()
    return header_path


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Generate a C header from the exported items of a native library.'
    )
    parser.add_argument(dest='declarations', type=declarations_file, action=PathAction)
    parser.add_argument(dest='output_path', action='store', type=dir_path)
    parser.add_argument('-n', '--name', dest='name', action='store', default=None)
    parser.add_argument('-e', '--on-error', dest='on_error', action='store',
                        choices=[policy.value for policy in ErrorPolicy], default=ErrorPolicy.WARN.value)
    parser.add_argument('--validate', dest='validate', action='store_true', default=False)

    arguments = parser.parse_args(argv)

    header_name = arguments.name
    if header_name is None:
        header_name = Path(arguments.declarations).stem

    print(f"Generating header {header_name}")
    header_path = generate_header(
        arguments.declarations,
        arguments.output_path,
        header_name,
        ErrorPolicy(arguments.on_error),
        arguments.validate
    )
    print(f"Done generating header {header_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
