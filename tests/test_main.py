import pytest

import main
from ctranslator.errors import UnsupportedType
from headergenerator.generator import ErrorPolicy

DECLARATIONS = """
pub struct Context;
pub extern fn context_new() -> *mut Context;
pub extern fn context_free(ctx: *mut Context);
fn internal(a: i32);
"""


@pytest.fixture
def declarations(tmp_path):
    declarations_path = tmp_path / "context.rs"
    declarations_path.write_text(DECLARATIONS)
    return declarations_path


class TestMain:
    def test_generates_header(self, declarations, tmp_path, capsys):
        assert main.main([str(declarations), str(tmp_path), "--on-error", "skip", "--validate"]) == 0

        text = (tmp_path / "context.h").read_text()
        assert text.startswith("#ifndef cdeclgen_generated_context_h\n")
        assert "Context* context_new(void);\n" in text
        assert "void context_free(Context* ctx);\n" in text
        assert "internal" not in text

        out = capsys.readouterr().out
        assert "Generating header context" in out
        assert "Validated 3 declarations" in out
        assert "Done generating header" in out

    def test_header_name_option(self, declarations, tmp_path):
        main.main([str(declarations), str(tmp_path), "-n", "renamed", "-e", "skip"])
        assert (tmp_path / "renamed.h").is_file()
        assert "#define cdeclgen_generated_renamed_h" in (tmp_path / "renamed.h").read_text()

    def test_warns_by_default(self, declarations, tmp_path, capsys):
        main.main([str(declarations), str(tmp_path)])
        assert "Skipping `internal`" in capsys.readouterr().err

    def test_abort(self, declarations, tmp_path):
        with pytest.raises(UnsupportedType):
            main.generate_header(str(declarations), str(tmp_path), "context", ErrorPolicy.ABORT, False)
        assert not (tmp_path / "context.h").exists()

    def test_rejects_missing_output_directory(self, declarations, tmp_path):
        with pytest.raises(SystemExit):
            main.main([str(declarations), str(tmp_path / "missing")])

    def test_rejects_missing_declarations(self, tmp_path):
        with pytest.raises(SystemExit):
            main.main([str(tmp_path / "missing.rs"), str(tmp_path)])
