import re

ALIAS_MODULE = "libc"

native_names_to_c = {
    "f32": "float",
    "f64": "double",
    "i8": "int8_t",
    "i16": "int16_t",
    "i32": "int32_t",
    "i64": "int64_t",
    "isize": "intptr_t",
    "u8": "uint8_t",
    "u16": "uint16_t",
    "u32": "uint32_t",
    "u64": "uint64_t",
    "usize": "uintptr_t",
    "bool": "bool",
}

# None stands for void
libc_names_to_c = {
    "c_void": None,
    "c_float": "float",
    "c_double": "double",
    "c_char": "char",
    "c_schar": "signed char",
    "c_uchar": "unsigned char",
    "c_short": "short",
    "c_ushort": "unsigned short",
    "c_int": "int",
    "c_uint": "unsigned int",
    "c_long": "long",
    "c_ulong": "unsigned long",
    "c_longlong": "long long",
    "c_ulonglong": "unsigned long long",
    "size_t": "size_t",
    "dirent": "dirent",
    "FILE": "FILE",
}

_NOT_IDENTIFIER_CHARACTER = re.compile("[^A-Za-z0-9_]")


def sanitise_id(name: str) -> str:
    """Drops every character that may not appear in a C identifier.

    The result may be empty, may start with a digit and may collide with a C keyword or with the
    result for another name. Callers that need any of that have to check for it themselves.
    """
    return _NOT_IDENTIFIER_CHARACTER.sub("", name)
