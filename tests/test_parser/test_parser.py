"""Tests for PPD document parsing."""

import pytest

from ppdcaps.exceptions import PPDParseError
from ppdcaps.parser import Directive, UIType, decode_translation, parse_ppd
from ppdcaps.schemas import Severity

HEADER = '*PPD-Adobe: "4.3"\n'


def _messages(parsed, severity=None):
    return [d.message for d in parsed.diagnostics if severity is None or d.severity == severity]


class TestDirectives:
    """Tests for statement decomposition."""

    def test_option_statement(self):
        """Key, option, translation and quoted value are split apart."""
        parsed = parse_ppd(
            HEADER + '*PageSize Letter/US Letter: "<</PageSize[612 792]>>setpagedevice"'
        )
        directive = parsed.directives[1]
        assert directive == Directive(
            key="PageSize",
            option="Letter",
            translation="US Letter",
            value="<</PageSize[612 792]>>setpagedevice",
            line=2,
        )

    def test_unquoted_value(self):
        """Unquoted values are kept as written."""
        parsed = parse_ppd(HEADER + "*DefaultPageSize: Letter")
        assert parsed.directives[1].key == "DefaultPageSize"
        assert parsed.directives[1].option is None
        assert parsed.directives[1].value == "Letter"

    def test_option_without_translation(self):
        """The label falls back to the option name."""
        parsed = parse_ppd(HEADER + '*InputSlot Tray1: ""')
        directive = parsed.directives[1]
        assert directive.translation is None
        assert directive.label == "Tray1"

    def test_statement_without_value(self):
        """Statements such as *End have only a key."""
        parsed = parse_ppd(HEADER + "*End")
        assert parsed.directives[1].key == "End"
        assert parsed.directives[1].value == ""

    def test_directives_are_immutable(self):
        """Parsed directives cannot be changed."""
        parsed = parse_ppd(HEADER)
        with pytest.raises(Exception):
            parsed.directives[0].value = "5.0"

    def test_comments_and_plain_lines_ignored(self):
        """*% comments and lines not starting with * are skipped."""
        parsed = parse_ppd(HEADER + "*% a comment\n\nnot a statement\n*Throughput: \"8\"")
        assert [d.key for d in parsed.directives] == ["PPD-Adobe", "Throughput"]

    def test_translation_hex_substrings_decoded(self):
        """<28> and <29> in translations become parentheses."""
        parsed = parse_ppd(HEADER + '*PageSize B5/B5 <28>JIS<29>: ""')
        assert parsed.directives[1].translation == "B5 (JIS)"

    def test_quoted_value_not_interpreted(self):
        """Quoted payloads keep their hex-looking content."""
        parsed = parse_ppd(HEADER + '*Foo Bar/Bar: "<1B>E"')
        assert parsed.directives[1].value == "<1B>E"

    def test_multiline_value(self):
        """A quoted value continues until its closing quote."""
        text = HEADER + '*PageSize A4/A4: "<</PageSize[595 842]>>\nsetpagedevice"\n*End'
        parsed = parse_ppd(text)
        assert parsed.directives[1].value == "<</PageSize[595 842]>>\nsetpagedevice"
        assert parsed.directives[1].line == 2
        assert parsed.directives[2].key == "End"
        assert parsed.directives[2].line == 4
        assert parsed.diagnostics == []

    def test_quote_in_translation_does_not_start_multiline(self):
        """Inch marks in a translation are not value quotes."""
        text = HEADER + '*PageSize w288h432/4"x6": "<</PageSize[288 432]>>setpagedevice"\n*End'
        parsed = parse_ppd(text)
        assert parsed.directives[1].translation == '4"x6"'
        assert parsed.directives[2].key == "End"

    def test_unterminated_value_at_end(self):
        """An unclosed quote is reported and the text so far kept."""
        parsed = parse_ppd(HEADER + '*Foo Bar/Bar: "abc\ndef')
        assert parsed.directives[1].value == "abc\ndef"
        assert any("Unterminated" in m for m in _messages(parsed, Severity.ERROR))

    def test_unparsable_statement_reported(self):
        """A '*' not followed by a keyword is an error, parsing goes on."""
        parsed = parse_ppd(HEADER + '* broken\n*Throughput: "8"')
        assert parsed.attributes["Throughput"] == "8"
        assert any("Unparsable" in m for m in _messages(parsed, Severity.ERROR))


class TestDecodeTranslation:
    """Tests for hex substring decoding."""

    def test_decodes_multiple_bytes(self):
        """Several bytes in one substring."""
        assert decode_translation("A<2829>B") == "A()B"

    def test_leaves_odd_digits(self):
        """Malformed substrings are kept."""
        assert decode_translation("<123>") == "<123>"

    def test_plain_text(self):
        """Text without substrings is unchanged."""
        assert decode_translation("Letter") == "Letter"


class TestOptionGroups:
    """Tests for OpenUI/CloseUI grouping."""

    def test_group_with_default(self):
        """Options are collected in order with the declared default."""
        parsed = parse_ppd(
            HEADER
            + "*OpenUI *PageSize/Media Size: PickOne\n"
            + "*OrderDependency: 10 AnySetup *PageSize\n"
            + "*DefaultPageSize: Letter\n"
            + '*PageSize A3/A3: ""\n'
            + '*PageSize Letter/Letter: ""\n'
            + "*CloseUI: *PageSize"
        )
        group = parsed.group("PageSize")
        assert group.label == "Media Size"
        assert group.ui_type == UIType.PICK_ONE
        assert [o.option for o in group.options] == ["A3", "Letter"]
        assert group.default == "Letter"
        assert group.default_option.option == "Letter"
        assert [group.is_default(o) for o in group.options] == [False, True]
        assert parsed.diagnostics == []

    def test_default_outside_group(self):
        """*Default<Key> may appear before the group."""
        parsed = parse_ppd(
            HEADER
            + "*DefaultDuplex: None\n"
            + "*OpenUI *Duplex: PickOne\n"
            + '*Duplex None/Off: ""\n'
            + "*CloseUI: *Duplex"
        )
        assert parsed.group("Duplex").default == "None"

    def test_missing_default(self):
        """No default: reported, no option is default."""
        parsed = parse_ppd(
            HEADER + "*OpenUI *Duplex: PickOne\n" + '*Duplex None/Off: ""\n' + "*CloseUI: *Duplex"
        )
        group = parsed.group("Duplex")
        assert group.default is None
        assert group.default_option is None
        assert any("No *DefaultDuplex" in m for m in _messages(parsed, Severity.WARNING))

    def test_unresolved_default(self):
        """A default naming no option marks nothing."""
        parsed = parse_ppd(
            HEADER
            + "*OpenUI *OutputBin: PickOne\n"
            + "*DefaultOutputBin: FinProof\n"
            + '*OutputBin Standard/Internal Tray 1: ""\n'
            + "*CloseUI: *OutputBin"
        )
        group = parsed.group("OutputBin")
        assert group.default == "FinProof"
        assert group.default_option is None
        assert not any(group.is_default(o) for o in group.options)
        assert any("FinProof" in m for m in _messages(parsed, Severity.WARNING))

    def test_duplicate_option_last_wins(self):
        """The last declaration wins at the position of the first."""
        parsed = parse_ppd(
            HEADER
            + "*OpenUI *InputSlot: PickOne\n"
            + "*DefaultInputSlot: Upper\n"
            + '*InputSlot Upper/Old Label: ""\n'
            + '*InputSlot Lower/Lower: ""\n'
            + '*InputSlot Upper/New Label: ""\n'
            + "*CloseUI: *InputSlot"
        )
        group = parsed.group("InputSlot")
        assert [o.option for o in group.options] == ["Upper", "Lower"]
        assert group.options[0].translation == "New Label"
        assert any("Duplicate" in m for m in _messages(parsed, Severity.WARNING))

    def test_options_outside_group_ignored(self):
        """Option statements after CloseUI are not group options."""
        parsed = parse_ppd(
            HEADER
            + "*OpenUI *PageSize: PickOne\n"
            + "*DefaultPageSize: A4\n"
            + '*PageSize A4/A4: ""\n'
            + "*CloseUI: *PageSize\n"
            + '*PageSize Legal/Legal: ""'
        )
        assert [o.option for o in parsed.group("PageSize").options] == ["A4"]

    def test_jcl_groups(self):
        """JCLOpenUI/JCLCloseUI bound groups like OpenUI/CloseUI."""
        parsed = parse_ppd(
            HEADER
            + "*JCLOpenUI *JCLEconomode/Economode: PickOne\n"
            + "*DefaultJCLEconomode: Off\n"
            + '*JCLEconomode Off/Off: ""\n'
            + '*JCLEconomode On/On: ""\n'
            + "*JCLCloseUI: *JCLEconomode"
        )
        group = parsed.group("JCLEconomode")
        assert group.label == "Economode"
        assert len(group.options) == 2

    def test_boolean_group_type(self):
        """The UI type comes from the OpenUI value."""
        parsed = parse_ppd(
            HEADER
            + "*OpenUI *Collate: Boolean\n"
            + "*DefaultCollate: True\n"
            + '*Collate True/On: ""\n'
            + '*Collate False/Off: ""\n'
            + "*CloseUI: *Collate"
        )
        assert parsed.group("Collate").ui_type == UIType.BOOLEAN

    def test_at_most_one_default_per_group(self, full_ppd):
        """Every group has at most one default option matching *Default<Key>."""
        parsed = parse_ppd(full_ppd)
        assert len(parsed.groups) == 7
        for group in parsed.groups:
            defaults = [o for o in group.options if group.is_default(o)]
            assert len(defaults) <= 1
            if defaults:
                assert defaults[0].option == group.default

    def test_full_document_has_no_diagnostics(self, full_ppd):
        """A clean PPD parses without diagnostics."""
        parsed = parse_ppd(full_ppd)
        assert parsed.diagnostics == []
        assert [g.key for g in parsed.groups] == [
            "PageSize",
            "Duplex",
            "ColorModel",
            "Resolution",
            "OutputBin",
            "Collate",
            "InputSlot",
        ]


class TestMalformedGroups:
    """Structural errors are reported and parsing continues."""

    def test_unterminated_group_at_end(self):
        """An open group at end of input is kept."""
        parsed = parse_ppd(
            HEADER + "*OpenUI *Duplex: PickOne\n*DefaultDuplex: None\n" + '*Duplex None/Off: ""'
        )
        group = parsed.group("Duplex")
        assert group is not None
        assert len(group.options) == 1
        assert any("not closed" in m for m in _messages(parsed, Severity.ERROR))

    def test_open_while_open(self):
        """A second OpenUI closes the first group."""
        parsed = parse_ppd(
            HEADER
            + "*OpenUI *Duplex: PickOne\n"
            + "*DefaultDuplex: None\n"
            + '*Duplex None/Off: ""\n'
            + "*OpenUI *InputSlot: PickOne\n"
            + "*DefaultInputSlot: Auto\n"
            + '*InputSlot Auto/Auto: ""\n'
            + "*CloseUI: *InputSlot"
        )
        assert [g.key for g in parsed.groups] == ["Duplex", "InputSlot"]
        assert len(parsed.group("InputSlot").options) == 1
        assert any("still open" in m for m in _messages(parsed, Severity.ERROR))

    def test_close_without_open(self):
        """A stray CloseUI is reported."""
        parsed = parse_ppd(HEADER + "*CloseUI: *Duplex")
        assert parsed.groups == []
        assert any("without a matching" in m for m in _messages(parsed, Severity.ERROR))

    def test_mismatched_close(self):
        """CloseUI for another key closes the open group with an error."""
        parsed = parse_ppd(
            HEADER
            + "*OpenUI *Duplex: PickOne\n"
            + "*DefaultDuplex: None\n"
            + '*Duplex None/Off: ""\n'
            + "*CloseUI: *PageSize\n"
            + '*Duplex DuplexTumble/Short Edge: ""'
        )
        assert len(parsed.group("Duplex").options) == 1
        assert any("does not match" in m for m in _messages(parsed, Severity.ERROR))


class TestAttributes:
    """Tests for scalar attribute collection."""

    def test_known_attributes(self, full_ppd):
        """Known top-level attributes are collected without quotes."""
        parsed = parse_ppd(full_ppd)
        assert parsed.attributes["Throughput"] == "45"
        assert parsed.attributes["Manufacturer"] == "HP"
        assert parsed.attributes["NickName"] == "HP LaserJet 4250 PS v3010.107 cups-team"
        assert parsed.attributes["LanguageVersion"] == "English"

    def test_unknown_attributes_ignored(self, full_ppd):
        """Keys outside the known set are not collected."""
        parsed = parse_ppd(full_ppd)
        assert "FormatVersion" not in parsed.attributes
        assert "OpenGroup" not in parsed.attributes

    def test_last_attribute_wins(self):
        """Repeated attributes keep the last value."""
        parsed = parse_ppd(HEADER + '*Throughput: "8"\n*Throughput: "12"')
        assert parsed.attributes["Throughput"] == "12"


class TestDocumentShape:
    """Tests for rejecting non-PPD input."""

    @pytest.mark.parametrize("text", ["", "hello world\nthis is not a PPD\n", "%!PS-Adobe-3.0\n"])
    def test_not_ppd_raises(self, text):
        """Text without any statement is fatal."""
        with pytest.raises(PPDParseError):
            parse_ppd(text)

    def test_missing_header_warns(self):
        """A PPD fragment without *PPD-Adobe still parses."""
        parsed = parse_ppd('*Throughput: "8"')
        assert parsed.attributes["Throughput"] == "8"
        assert any("PPD-Adobe" in m for m in _messages(parsed, Severity.WARNING))

    def test_crlf_line_endings(self):
        """Windows line endings are handled."""
        parsed = parse_ppd('*PPD-Adobe: "4.3"\r\n*Throughput: "8"\r\n')
        assert parsed.attributes["Throughput"] == "8"
        assert parsed.diagnostics == []
