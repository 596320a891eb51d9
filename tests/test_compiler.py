# =============================================================================
# test_compiler.py - Translator Orchestration Tests
# =============================================================================
# Tests for the Translator front end and its configuration.
#
# Test coverage includes:
#   - Mode dispatch and the convenience functions
#   - Independence of successive translations
#   - Partial output attached to errors
#   - TranslatorOptions validation and environment configuration
#   - File translation
# =============================================================================

import pytest
from wasm_cradle import CradleError
from wasm_cradle.translator import (
    Op,
    Translator,
    TranslatorOptions,
    strip_line_break,
    translate_control,
)
from wasm_cradle.translator.errors import (
    InvalidCharacterError,
    SyntaxMismatchError,
    TranslationError,
    UndeclaredIdentifierError,
    UnterminatedConstructError,
)


ENV_VARS = ("CRADLE_REDECLARATION", "CRADLE_OVERFLOW", "CRADLE_MAX_DEPTH", "CRADLE_INDENT")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any translator configuration from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================================
# Translator Tests
# =============================================================================

class TestTranslator:
    """Test mode dispatch and results."""

    def test_dispatch_control(self):
        result = Translator().translate("ae", "control")
        assert result.mode == "control"
        assert result.locals == {"a": None}

    def test_dispatch_expression(self):
        result = Translator().translate("6*7", "expression")
        assert result.mode == "expression"
        assert result.value == 42

    def test_dispatch_assign(self):
        result = Translator().translate("x=6;y=x*7", "assign")
        assert result.mode == "assign"
        assert result.value == 42

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="unknown mode"):
            Translator().translate("ae", "basic")

    def test_filename_recorded(self):
        result = Translator().translate("ae", filename="demo.cr")
        assert result.filename == "demo.cr"

    def test_translations_are_independent(self):
        """Locals from one translation are not visible in the next."""
        translator = Translator()
        translator.translate_assignments("x=1")
        with pytest.raises(UndeclaredIdentifierError):
            translator.translate_expression("x")

    def test_strict_redeclaration_does_not_leak(self):
        translator = Translator(TranslatorOptions(redeclaration="error"))
        translator.translate_control("ae")
        translator.translate_control("ae")

    def test_deterministic(self):
        translator = Translator()
        first = translator.translate_control("iawbrcudelpxeee")
        second = translator.translate_control("iawbrcudelpxeee")
        assert first.text == second.text
        assert first.instructions == second.instructions

    def test_errors_share_base_class(self):
        with pytest.raises(CradleError):
            translate_control("i")


class TestPartialOutput:
    """Test the instructions attached to a failed translation."""

    def test_partial_output_on_failure(self):
        """Everything emitted before the error is kept on the exception."""
        with pytest.raises(UnterminatedConstructError) as exc_info:
            translate_control("wab")
        assert [i.op for i in exc_info.value.partial_output] == [
            Op.MODULE_OPEN,
            Op.FUNC_OPEN,
            Op.WHILE_OPEN,
            Op.LOCAL,
        ]

    def test_partial_output_of_expression(self):
        with pytest.raises(TranslationError) as exc_info:
            Translator().translate_expression("1+2/0")
        rendered = [i.render() for i in exc_info.value.partial_output]
        assert rendered[-4:] == [
            "(i32.const 1)", "(i32.const 2)", "(i32.const 0)", "(i32.div_s)",
        ]

    def test_error_before_any_output(self):
        with pytest.raises(TranslationError) as exc_info:
            Translator().translate_assignments("1")
        assert [i.op for i in exc_info.value.partial_output] == [Op.MODULE_OPEN, Op.FUNC_OPEN]


# =============================================================================
# Options Tests
# =============================================================================

class TestOptions:
    """Test TranslatorOptions validation and rendering options."""

    def test_defaults(self):
        options = TranslatorOptions()
        assert options.redeclaration == "allow"
        assert options.overflow == "reject"
        assert options.max_depth == 200
        assert options.indent == 2

    @pytest.mark.parametrize("kwargs", [
        {"redeclaration": "never"},
        {"overflow": "saturate"},
        {"max_depth": 0},
        {"indent": -1},
    ])
    def test_invalid_options(self, kwargs):
        with pytest.raises(ValueError):
            TranslatorOptions(**kwargs)

    def test_zero_indent(self):
        result = translate_control("ae", options=TranslatorOptions(indent=0))
        assert result.text == (
            "(module\n"
            "(func $main\n"
            "(local $a i32)\n"
            ")\n"
            '(export "main" (func $main))\n'
            ")\n"
        )

    def test_wide_indent(self):
        result = translate_control("ae", options=TranslatorOptions(indent=4))
        assert result.text.splitlines()[2] == "        (local $a i32)"


class TestFromEnv:
    """Test configuration from environment variables."""

    def test_defaults_when_unset(self, clean_env):
        assert TranslatorOptions.from_env() == TranslatorOptions()

    def test_reads_all_variables(self, clean_env):
        clean_env.setenv("CRADLE_REDECLARATION", "error")
        clean_env.setenv("CRADLE_OVERFLOW", "WRAP")
        clean_env.setenv("CRADLE_MAX_DEPTH", "16")
        clean_env.setenv("CRADLE_INDENT", "4")
        options = TranslatorOptions.from_env()
        assert options == TranslatorOptions(
            redeclaration="error", overflow="wrap", max_depth=16, indent=4
        )

    def test_malformed_integer_ignored(self, clean_env):
        clean_env.setenv("CRADLE_MAX_DEPTH", "deep")
        assert TranslatorOptions.from_env().max_depth == 200

    def test_unknown_policy_rejected(self, clean_env):
        clean_env.setenv("CRADLE_OVERFLOW", "saturate")
        with pytest.raises(ValueError):
            TranslatorOptions.from_env()


# =============================================================================
# File Translation Tests
# =============================================================================

class TestTranslateFile:
    """Test translating source files."""

    def test_translate_file(self, tmp_path):
        path = tmp_path / "prog.cr"
        path.write_text("iablcee\n")
        result = Translator().translate_file(str(path))
        assert result.filename == str(path)
        assert result.text == translate_control("iablcee").text

    def test_translate_file_in_mode(self, tmp_path):
        path = tmp_path / "script.cr"
        path.write_text("x=2\ny=x*x\n")
        assert Translator().translate_file(str(path), "assign").value == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Translator().translate_file(str(tmp_path / "missing.cr"))

    def test_non_ascii_byte(self, tmp_path):
        path = tmp_path / "bad.cr"
        path.write_bytes(b"a\xe9e")
        with pytest.raises(InvalidCharacterError) as exc_info:
            Translator().translate_file(str(path))
        assert str(exc_info.value).startswith(f"{path}:1:2: error:")

    def test_only_one_trailing_line_break_dropped(self, tmp_path):
        """Extra blank lines after the program are source text."""
        path = tmp_path / "prog.cr"
        path.write_text("ae\n\n\n")
        with pytest.raises(SyntaxMismatchError, match="expected end of input, found newline"):
            Translator().translate_file(str(path))

    def test_crlf_terminator_dropped(self, tmp_path):
        path = tmp_path / "prog.cr"
        path.write_bytes(b"ae\r\n")
        assert Translator().translate_file(str(path)).locals == {"a": None}


class TestStripLineBreak:
    """Test removal of the final line terminator."""

    @pytest.mark.parametrize("source, expected", [
        ("ae", "ae"),
        ("ae\n", "ae"),
        ("ae\r\n", "ae"),
        ("ae\n\n", "ae\n"),
        ("", ""),
    ])
    def test_strip(self, source, expected):
        assert strip_line_break(source) == expected
