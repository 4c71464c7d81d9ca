import pytest

from ctranslator.errors import UnsupportedType, InvalidPath
from headergenerator.generator import HeaderGenerator, ErrorPolicy
from headergenerator.model import OpaqueStruct, TypeDefinition, ExternVariable, FunctionPrototype
from typeparser.parser import parse_module

MODULE_SOURCE = """
pub struct Context;
pub type Callback = extern fn(ctx: *mut Context, code: i32);
pub static mut ERROR_COUNT: u32;
pub extern "C" fn context_new() -> *mut Context;
pub extern fn context_free(ctx: *mut Context);
fn internal(a: i32);
pub extern fn lookup(key: *const my_mod::Key) -> bool;
"""


def generator_with(policy: ErrorPolicy) -> HeaderGenerator:
    generator = HeaderGenerator()
    generator.error_policy = policy
    return generator


class TestHeaderGenerator:
    def test_elements(self):
        header = generator_with(ErrorPolicy.SKIP).generate(parse_module(MODULE_SOURCE), "context")
        assert header.elements == [
            OpaqueStruct(name="Context"),
            TypeDefinition(name="Callback", declaration="void (*Callback)(Context* ctx, int32_t code)"),
            ExternVariable(name="ERROR_COUNT", declaration="uint32_t ERROR_COUNT"),
            FunctionPrototype(name="context_new", declaration="Context* context_new(void)"),
            FunctionPrototype(name="context_free", declaration="void context_free(Context* ctx)"),
        ]

    def test_skipped_items_keep_their_errors(self):
        header = generator_with(ErrorPolicy.SKIP).generate(parse_module(MODULE_SOURCE), "context")
        assert [item.name for item in header.skipped] == ["internal", "lookup"]
        assert isinstance(header.skipped[0].error, UnsupportedType)
        assert isinstance(header.skipped[1].error, InvalidPath)

    def test_skip_is_silent(self, capsys):
        generator_with(ErrorPolicy.SKIP).generate(parse_module(MODULE_SOURCE), "context")
        assert capsys.readouterr().err == ""

    def test_warn_reports_skipped_items(self, capsys):
        header = generator_with(ErrorPolicy.WARN).generate(parse_module(MODULE_SOURCE), "context")
        err = capsys.readouterr().err
        assert "Skipping `internal`" in err
        assert "Skipping `lookup`" in err
        assert len(header.skipped) == 2

    def test_abort_raises_first_error(self):
        with pytest.raises(UnsupportedType):
            generator_with(ErrorPolicy.ABORT).generate(parse_module(MODULE_SOURCE), "context")

    def test_default_policy_is_warn(self):
        assert HeaderGenerator().error_policy == ErrorPolicy.WARN

    def test_guard_uses_sanitised_name(self):
        header = HeaderGenerator().generate(parse_module(""), "my-lib.h")
        assert header.guard == "cdeclgen_generated_mylibh_h"
        assert header.name == "my-lib.h"

    def test_default_includes(self):
        header = HeaderGenerator().generate(parse_module("extern fn f(a: u8);"), "f")
        assert header.includes == ["stdint.h", "stdbool.h"]

    def test_includes_follow_used_types(self):
        module = parse_module("extern fn read(file: *mut libc::FILE, count: libc::size_t) -> libc::size_t;")
        header = HeaderGenerator().generate(module, "io")
        assert header.includes == ["stdint.h", "stdbool.h", "stdio.h", "stddef.h"]

    def test_skipped_items_do_not_add_includes(self):
        module = parse_module("fn read(file: *mut libc::FILE);")
        header = generator_with(ErrorPolicy.SKIP).generate(module, "io")
        assert header.includes == ["stdint.h", "stdbool.h"]

    def test_external_type_names(self):
        module = parse_module("""
            struct Declared;
            type Alias = *mut Declared;
            extern fn use_handle(h: *mut Handle, d: *const Declared, a: Alias, p: libc::pid_t, q: libc::c_int);
        """)
        header = HeaderGenerator().generate(module, "handles")
        assert header.external_type_names == ["Handle", "pid_t"]

    def test_function_pointer_static(self):
        header = HeaderGenerator().generate(parse_module("static HOOK: extern fn(i32) -> i32;"), "hooks")
        assert header.elements == [ExternVariable(name="HOOK", declaration="int32_t (*HOOK)(int32_t)")]

    def test_function_returning_function_pointer(self):
        header = HeaderGenerator().generate(parse_module("extern fn get_hook() -> extern fn(i32) -> i32;"), "hooks")
        assert header.elements == [
            FunctionPrototype(name="get_hook", declaration="int32_t (*get_hook(void))(int32_t)")
        ]

    def test_unnamed_parameters(self):
        header = HeaderGenerator().generate(parse_module("extern fn f(_: u8, b: u8);"), "unnamed")
        assert header.elements == [FunctionPrototype(name="f", declaration="void f(uint8_t, uint8_t b)")]
