"""PPD document parsing.

Scans raw PPD text into directives, groups the options found between
*OpenUI and *CloseUI into OptionGroups, and collects the scalar attributes
the translators need (e.g. *Throughput). Problems are recorded as
diagnostics and parsing goes on; only text that contains no PPD statement at
all is rejected.

A statement looks like:

    *<Key>[ <Option>][/<Translation>][: <Value>]

and a quoted value may continue over several lines.
"""

import logging
import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ppdcaps.exceptions import PPDParseError
from ppdcaps.schemas import Diagnostic, Severity

logger = logging.getLogger(__name__)

_STATEMENT = re.compile(
    r"^\*(?P<key>[^\s:/]+)"  # Main keyword
    r"(?:\s+(?P<option>[^/:]+?))?"  # Option keyword
    r"(?:/(?P<translation>[^:]*))?"  # Translation string
    r"(?::\s*(?P<value>.*?))?\s*$",  # Value
    re.DOTALL,
)
_HEX_SUBSTRING = re.compile(r"<([0-9A-Fa-f\s]*)>")

OPEN_UI_KEYS = frozenset({"OpenUI", "JCLOpenUI"})
CLOSE_UI_KEYS = frozenset({"CloseUI", "JCLCloseUI"})
DEFAULT_PREFIX = "Default"

# Top-level keywords kept as scalar attributes
SCALAR_ATTRIBUTES = frozenset(
    {
        "ColorDevice",
        "FileVersion",
        "LanguageEncoding",
        "LanguageVersion",
        "Manufacturer",
        "ModelName",
        "NickName",
        "PCFileName",
        "PPD-Adobe",
        "Product",
        "ShortNickName",
        "Throughput",
    }
)


class UIType(str, Enum):
    """*OpenUI group kinds."""

    PICK_ONE = "PickOne"
    PICK_MANY = "PickMany"
    BOOLEAN = "Boolean"


class Directive(BaseModel):
    """One PPD statement.

    Attributes:
        key: Main keyword without the leading '*'.
        option: Option keyword, if any.
        translation: Human-readable label for the option, if any.
        value: Value with surrounding quotes removed; quoted content is
            kept verbatim.
        line: 1-based line the statement starts on.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    option: str | None = None
    translation: str | None = None
    value: str = ""
    line: int | None = None

    @property
    def label(self) -> str:
        """Translation, falling back to the option name."""
        return self.translation or self.option or ""


class OptionGroup(BaseModel):
    """Options declared between *OpenUI *<Key> and *CloseUI: *<Key>.

    Attributes:
        key: Group keyword, e.g. 'PageSize'.
        label: Translation from the *OpenUI line, if any.
        ui_type: PickOne, PickMany or Boolean (raw text if something else).
        options: Option directives in declaration order, names unique.
        default: Value of *Default<Key>, if declared.
        line: Line of the *OpenUI statement.
    """

    key: str
    label: str | None = None
    ui_type: str = UIType.PICK_ONE.value
    options: list[Directive] = Field(default_factory=list)
    default: str | None = None
    line: int | None = None

    def is_default(self, option: Directive) -> bool:
        """Check whether an option is the group default."""
        return self.default is not None and option.option == self.default

    @property
    def default_option(self) -> Directive | None:
        """The option named by *Default<Key>, or None."""
        for option in self.options:
            if self.is_default(option):
                return option
        return None


class ParsedPPD(BaseModel):
    """Structure extracted from a PPD document."""

    directives: list[Directive] = Field(default_factory=list)
    groups: list[OptionGroup] = Field(default_factory=list)
    attributes: dict[str, str] = Field(default_factory=dict)
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    def group(self, key: str) -> OptionGroup | None:
        """Get the first group with the given keyword."""
        for group in self.groups:
            if group.key == key:
                return group
        return None


def decode_translation(text: str) -> str:
    """Decode PPD hex substrings in a translation string.

    Examples:
        "B5 <28>JIS<29>" -> "B5 (JIS)"

    Args:
        text: Raw translation string.

    Returns:
        str: Decoded text; malformed hex substrings are left as they are.
    """

    def _replace(match: re.Match) -> str:
        digits = re.sub(r"\s", "", match.group(1))
        if not digits or len(digits) % 2:
            return match.group(0)
        return bytes.fromhex(digits).decode("latin-1")

    return _HEX_SUBSTRING.sub(_replace, text)


def _unquote(value: str) -> str:
    """Strip the quotes from a value; anything after the closing quote is dropped."""
    if not value.startswith('"'):
        return value
    closing = value.rfind('"')
    if closing == 0:
        return value[1:]
    return value[1:closing]


def _opens_multiline_value(line: str) -> bool:
    match = _STATEMENT.match(line)
    if not match or match.group("value") is None:
        return False
    value = match.group("value")
    return value.startswith('"') and value.count('"') == 1


class _PPDParser:
    """Single-use parser state for one document."""

    def __init__(self, text: str):
        self.lines = text.splitlines()
        self.result = ParsedPPD()
        self._current: OptionGroup | None = None
        self._positions: dict[str, int] = {}
        # *Default<Key> statements found outside their group
        self._defaults: dict[str, str] = {}

    def diagnose(
        self, severity: Severity, message: str, key: str | None = None, line: int | None = None
    ) -> None:
        diagnostic = Diagnostic(severity=severity, message=message, key=key, line=line)
        logger.debug(f"PPD diagnostic: {diagnostic}")
        self.result.diagnostics.append(diagnostic)

    def statements(self):
        """Yield (line number, statement text), joining multi-line values."""
        index = 0
        while index < len(self.lines):
            line = self.lines[index]
            start = index + 1
            index += 1
            # Comments and anything not starting a statement
            if not line.startswith("*") or line.startswith("*%"):
                continue

            if _opens_multiline_value(line):
                parts = [line]
                closed = False
                while index < len(self.lines):
                    parts.append(self.lines[index])
                    index += 1
                    if '"' in parts[-1]:
                        closed = True
                        break
                if not closed:
                    self.diagnose(
                        Severity.ERROR,
                        "Unterminated quoted value",
                        key=line[1:].split(maxsplit=1)[0].rstrip(":"),
                        line=start,
                    )
                line = "\n".join(parts)

            yield start, line

    def to_directive(self, line_no: int, text: str) -> Directive | None:
        match = _STATEMENT.match(text)
        if not match:
            self.diagnose(Severity.ERROR, f"Unparsable statement {text[:40]!r}", line=line_no)
            return None

        option = (match.group("option") or "").strip() or None
        translation = match.group("translation")
        if translation is not None:
            translation = decode_translation(translation.strip()) or None
        value = _unquote(match.group("value") or "")

        return Directive(
            key=match.group("key"),
            option=option,
            translation=translation,
            value=value,
            line=line_no,
        )

    def open_group(self, directive: Directive) -> None:
        key = (directive.option or "").lstrip("*").strip()
        if not key:
            self.diagnose(
                Severity.ERROR, "*OpenUI without a group keyword", directive.key, directive.line
            )
            return

        if self._current is not None:
            self.diagnose(
                Severity.ERROR,
                f"*OpenUI *{key} while *{self._current.key} is still open",
                key,
                directive.line,
            )
            self.close_group()

        self._current = OptionGroup(
            key=key,
            label=directive.translation,
            ui_type=directive.value.strip() or UIType.PICK_ONE.value,
            line=directive.line,
        )
        self._positions = {}

    def close_group(self) -> None:
        if self._current is not None:
            self.result.groups.append(self._current)
        self._current = None

    def handle_close(self, directive: Directive) -> None:
        key = directive.value.lstrip("*").strip()
        if self._current is None:
            self.diagnose(
                Severity.ERROR, f"*CloseUI *{key} without a matching *OpenUI", key, directive.line
            )
            return
        if key != self._current.key:
            self.diagnose(
                Severity.ERROR,
                f"*CloseUI *{key} does not match open group *{self._current.key}",
                key,
                directive.line,
            )
        self.close_group()

    def add_option(self, directive: Directive) -> None:
        group = self._current
        name = directive.option
        if name in self._positions:
            # Last declaration wins, at the position of the first one
            self.diagnose(
                Severity.WARNING,
                f"Duplicate option {name!r} in *{group.key}, using the last declaration",
                group.key,
                directive.line,
            )
            group.options[self._positions[name]] = directive
            return
        self._positions[name] = len(group.options)
        group.options.append(directive)

    def handle(self, directive: Directive) -> None:
        key = directive.key

        if key in OPEN_UI_KEYS:
            self.open_group(directive)
            return
        if key in CLOSE_UI_KEYS:
            self.handle_close(directive)
            return

        if key.startswith(DEFAULT_PREFIX) and len(key) > len(DEFAULT_PREFIX):
            target = key[len(DEFAULT_PREFIX) :]
            value = directive.value.strip()
            if self._current is not None and target == self._current.key:
                self._current.default = value
            else:
                self._defaults[target] = value
            return

        if self._current is not None:
            if key == self._current.key and directive.option:
                self.add_option(directive)
            return

        if directive.option is None and key in SCALAR_ATTRIBUTES:
            self.result.attributes[key] = directive.value.strip()

    def resolve_defaults(self) -> None:
        for group in self.result.groups:
            if group.default is None:
                group.default = self._defaults.get(group.key)
            if not group.options:
                continue
            if group.default is None:
                self.diagnose(
                    Severity.WARNING, f"No *Default{group.key} declared", group.key, group.line
                )
            elif group.default_option is None:
                self.diagnose(
                    Severity.WARNING,
                    f"*Default{group.key} {group.default!r} is not one of its options",
                    group.key,
                    group.line,
                )

    def parse(self) -> ParsedPPD:
        for line_no, text in self.statements():
            directive = self.to_directive(line_no, text)
            if directive is None:
                continue
            self.result.directives.append(directive)
            self.handle(directive)

        if not self.result.directives:
            raise PPDParseError("No PPD statements found; input is not a PPD document")

        if self._current is not None:
            self.diagnose(
                Severity.ERROR,
                f"Group *{self._current.key} is not closed",
                self._current.key,
                self._current.line,
            )
            self.close_group()

        if self.result.directives[0].key != "PPD-Adobe":
            self.diagnose(Severity.WARNING, "Document does not start with *PPD-Adobe")

        self.resolve_defaults()
        return self.result


def parse_ppd(text: str) -> ParsedPPD:
    """Parse PPD text into directives, option groups and attributes.

    Args:
        text: Raw PPD document.

    Returns:
        ParsedPPD: Parsed structure with any diagnostics.

    Raises:
        PPDParseError: If the text contains no PPD statement at all.
    """
    return _PPDParser(text).parse()
