"""
Tests for assembly info generation: model assembly, the fixed emission
sequence, omission rules, determinism, and end-to-end file content.
"""

import pytest

from asminfo.core.models.version_info import KeyInfo, VersionFacts
from asminfo.core.services.assembly_info import (
    CONSTANT_FIELDS,
    FILE_HEADER_COMMENT,
    UnsupportedLanguage,
    assembly_attributes,
    build_code,
    build_version_metadata,
    generate,
    parse_ticks,
)
from asminfo.core.services.emitters import (
    AttributeKind,
    CSharpEmitter,
    FSharpEmitter,
    VisualBasicEmitter,
)

KEY = KeyInfo(public_key="0024000004800000", public_key_token="b77a5c561934e089")

LANGUAGES = ["c#", "vb", "f#"]


def _model(facts: VersionFacts, key_info: KeyInfo | None = None):
    return build_version_metadata(facts, key_info, generator_name="gen", generator_version="9.9.9")


# ═══════════════════════════════════════════════════════════════════
#  parse_ticks
# ═══════════════════════════════════════════════════════════════════


class TestParseTicks:
    def test_valid(self):
        assert parse_ticks("637134336000000000") == 637134336000000000

    def test_signed_and_padded(self):
        assert parse_ticks(" -42 ") == -42
        assert parse_ticks("+7") == 7

    @pytest.mark.parametrize(
        "raw", [None, "", "abc", "1.5", "1_000", "12abc", "0x10", "9223372036854775808"]
    )
    def test_invalid(self, raw):
        assert parse_ticks(raw) is None

    def test_int64_bounds(self):
        assert parse_ticks("9223372036854775807") == 2**63 - 1
        assert parse_ticks("-9223372036854775808") == -(2**63)


# ═══════════════════════════════════════════════════════════════════
#  build_version_metadata
# ═══════════════════════════════════════════════════════════════════


class TestBuildVersionMetadata:
    def test_empty_constants_dropped(self, basic_facts):
        model = _model(basic_facts)
        assert model.constant_names() == ["AssemblyVersion", "GitCommitId"]

    def test_fixed_order(self, full_facts):
        model = _model(full_facts, KEY)
        expected = [name for name, _ in CONSTANT_FIELDS] + ["PublicKey", "PublicKeyToken"]
        assert model.constant_names() == expected

    def test_key_info_appended_together(self, basic_facts):
        model = _model(basic_facts, KEY)
        assert model.constant("PublicKey") == KEY.public_key
        assert model.constant("PublicKeyToken") == KEY.public_key_token

    def test_no_key_info(self, basic_facts):
        names = _model(basic_facts).constant_names()
        assert "PublicKey" not in names
        assert "PublicKeyToken" not in names

    def test_root_namespace_defaults_empty(self):
        assert _model(VersionFacts()).root_namespace == ""

    def test_ticks_parsed(self, full_facts):
        assert _model(full_facts).commit_date_ticks == 637134336000000000

    def test_bad_ticks_silently_absent(self):
        model = _model(VersionFacts(git_commit_date_ticks="yesterday"))
        assert model.commit_date_ticks is None

    def test_generator_identity(self, basic_facts):
        model = _model(basic_facts)
        assert (model.generator_name, model.generator_version) == ("gen", "9.9.9")

    def test_default_generator_identity(self, basic_facts):
        from asminfo import GENERATOR_NAME, __version__

        model = build_version_metadata(basic_facts)
        assert model.generator_name == GENERATOR_NAME
        assert model.generator_version == __version__

    def test_model_is_frozen(self, basic_facts):
        model = _model(basic_facts)
        with pytest.raises(Exception):
            model.root_namespace = "x"


class TestAssemblyAttributes:
    def test_version_attributes_always_declared(self, basic_facts):
        kinds = [kind for kind, _ in assembly_attributes(_model(basic_facts))]
        assert kinds == [
            AttributeKind.VERSION,
            AttributeKind.FILE_VERSION,
            AttributeKind.INFORMATIONAL_VERSION,
        ]

    def test_descriptive_when_enabled(self, full_facts):
        kinds = [kind for kind, _ in assembly_attributes(_model(full_facts))]
        assert kinds[3:] == [
            AttributeKind.TITLE,
            AttributeKind.PRODUCT,
            AttributeKind.COMPANY,
            AttributeKind.COPYRIGHT,
        ]

    def test_descriptive_disabled(self, full_facts):
        facts = full_facts.model_copy(update={"emit_non_version_custom_attributes": False})
        assert len(assembly_attributes(_model(facts))) == 3

    def test_empty_descriptive_skipped(self):
        facts = VersionFacts(assembly_title="App", emit_non_version_custom_attributes=True)
        kinds = [kind for kind, _ in assembly_attributes(_model(facts))]
        assert kinds[3:] == [AttributeKind.TITLE]


# ═══════════════════════════════════════════════════════════════════
#  generate: end-to-end content
# ═══════════════════════════════════════════════════════════════════


class TestGenerateCSharp:
    def test_exact_output(self, basic_facts):
        code = generate(_model(basic_facts), CSharpEmitter())
        assert code == (
            "//------------------------------------------------------------------------------\n"
            "// <auto-generated>\n"
            "//     This code was generated by a tool.\n"
            "//     Runtime Version:4.0.30319.42000\n"
            "//\n"
            "//     Changes to this file may cause incorrect behavior and will be lost if\n"
            "//     the code is regenerated.\n"
            "// </auto-generated>\n"
            "//------------------------------------------------------------------------------\n"
            "\n"
            '[assembly: System.Reflection.AssemblyVersionAttribute("1.2.3.0")]\n'
            '[assembly: System.Reflection.AssemblyFileVersionAttribute("")]\n'
            '[assembly: System.Reflection.AssemblyInformationalVersionAttribute("")]\n'
            '[System.CodeDom.Compiler.GeneratedCode("gen","9.9.9")]\n'
            "internal sealed partial class ThisAssembly {\n"
            "    private ThisAssembly() {\n"
            "    }\n"
            '    internal const string AssemblyVersion = "1.2.3.0";\n'
            '    internal const string GitCommitId = "abc123";\n'
            '    internal const string RootNamespace = "";\n'
            "}\n"
        )

    def test_no_descriptive_output(self, basic_facts):
        code = generate(_model(basic_facts), CSharpEmitter())
        for name in ("AssemblyTitle", "AssemblyProduct", "AssemblyCompany", "AssemblyCopyright"):
            assert name not in code

    def test_commit_date_before_root_namespace(self, full_facts):
        lines = generate(_model(full_facts, KEY), CSharpEmitter()).splitlines()
        date_idx = next(i for i, l in enumerate(lines) if "GitCommitDate" in l)
        token_idx = next(i for i, l in enumerate(lines) if "PublicKeyToken" in l)
        root_idx = next(i for i, l in enumerate(lines) if "RootNamespace" in l)
        assert token_idx < date_idx < root_idx
        assert "637134336000000000, System.TimeSpan.Zero" in lines[date_idx]

    def test_no_commit_date(self, basic_facts):
        assert "GitCommitDate" not in generate(_model(basic_facts), CSharpEmitter())

    def test_descriptive_attributes_declared(self, full_facts):
        code = generate(_model(full_facts), CSharpEmitter())
        assert '[assembly: System.Reflection.AssemblyTitleAttribute("Contoso Widgets")]' in code
        assert '[assembly: System.Reflection.AssemblyCopyrightAttribute("(c) Contoso")]' in code

    def test_custom_header_and_newline(self, basic_facts):
        code = generate(_model(basic_facts), CSharpEmitter(), header="hello\n", newline="\r\n")
        assert code.startswith("//hello\r\n\r\n")
        assert code.endswith("}\r\n")


class TestGenerateFSharp:
    def test_structure(self, basic_facts):
        lines = generate(_model(basic_facts), FSharpEmitter()).splitlines()
        body = lines[len(FILE_HEADER_COMMENT.splitlines()) + 1:]
        assert body == [
            "namespace AssemblyInfo",
            '[<assembly: System.Reflection.AssemblyVersionAttribute("1.2.3.0")>]',
            '[<assembly: System.Reflection.AssemblyFileVersionAttribute("")>]',
            '[<assembly: System.Reflection.AssemblyInformationalVersionAttribute("")>]',
            "do()",
            '[<System.CodeDom.Compiler.GeneratedCode("gen","9.9.9")>]',
            "type internal ThisAssembly() =",
            '  static member internal AssemblyVersion = "1.2.3.0"',
            '  static member internal GitCommitId = "abc123"',
            '  static member internal RootNamespace = ""',
            "do()",
        ]

    def test_namespace_from_model(self, full_facts):
        code = generate(_model(full_facts), FSharpEmitter())
        assert "namespace Contoso.Widgets\n" in code

    def test_explicit_namespace_hint(self, basic_facts):
        code = generate(_model(basic_facts), FSharpEmitter(), namespace="My.Ns")
        assert "namespace My.Ns\n" in code
        assert 'RootNamespace = ""' in code


class TestGenerateVisualBasic:
    def test_structure(self, basic_facts):
        code = generate(_model(basic_facts), VisualBasicEmitter())
        assert code.startswith("'------")
        assert "Partial Friend NotInheritable Class ThisAssembly\n" in code
        assert '    Friend Const GitCommitId As String = "abc123"\n' in code
        assert '    Friend Const RootNamespace As String = ""\n' in code
        assert code.endswith("End Class\n")
        assert not any(l.lower().startswith("namespace") for l in code.splitlines())


class TestGenerateInvariants:
    @pytest.mark.parametrize("language", LANGUAGES)
    def test_deterministic(self, full_facts, language):
        first = build_code(_model(full_facts, KEY), language)
        second = build_code(_model(full_facts, KEY), language)
        assert isinstance(first, str)
        assert first == second

    @pytest.mark.parametrize("language", LANGUAGES)
    def test_root_namespace_always_present(self, language):
        code = build_code(_model(VersionFacts()), language)
        assert isinstance(code, str)
        assert "RootNamespace" in code

    @pytest.mark.parametrize("language", LANGUAGES)
    def test_empty_constants_absent(self, basic_facts, language):
        code = build_code(_model(basic_facts), language)
        for name in ("AssemblyName", "AssemblyConfiguration", "PublicKey"):
            assert name not in code

    @pytest.mark.parametrize("language", LANGUAGES)
    def test_key_constants_together(self, basic_facts, language):
        code = build_code(_model(basic_facts, KEY), language)
        assert "PublicKey = " in code or "PublicKey As String" in code
        assert KEY.public_key_token in code
        assert KEY.public_key in code

    def test_each_constant_once(self, full_facts):
        code = generate(_model(full_facts, KEY), CSharpEmitter())
        for name, _ in CONSTANT_FIELDS:
            assert code.count(f"internal const string {name} =") == 1

    def test_values_are_escaped(self):
        facts = VersionFacts(assembly_company='Contoso "Ltd"')
        code = generate(_model(facts), CSharpEmitter())
        assert 'AssemblyCompany = "Contoso \\"Ltd\\"";' in code


class TestBuildCode:
    def test_unsupported_language(self, basic_facts):
        result = build_code(_model(basic_facts), "pascal")
        assert result == UnsupportedLanguage("pascal")
        assert "pascal" in result.message

    def test_vb_synonyms_same_output(self, basic_facts):
        model = _model(basic_facts)
        assert build_code(model, "VB") == build_code(model, "visual basic") == build_code(
            model, "visualbasic"
        )
