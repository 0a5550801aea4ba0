"""Pydantic schemas for the printer capability descriptor (CDD)."""

from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_LOCALE = "EN"


class Severity(str, Enum):
    """Diagnostic severity."""

    WARNING = "warning"  # Well-formed but unrecognized, mapped to a fallback or dropped
    ERROR = "error"  # Structural problem in the document


class Diagnostic(BaseModel):
    """A problem found while parsing or translating a PPD.

    Attributes:
        severity: How bad the problem is.
        message: Human-readable description.
        key: PPD main keyword involved, if any.
        line: 1-based source line, if known.
    """

    severity: Severity
    message: str
    key: str | None = None
    line: int | None = None

    def __str__(self) -> str:
        where = f"line {self.line}: " if self.line is not None else ""
        return f"{self.severity.value}: {where}{self.message}"


class ColorType(str, Enum):
    """Color option classes."""

    STANDARD_COLOR = "STANDARD_COLOR"
    STANDARD_MONOCHROME = "STANDARD_MONOCHROME"


class DuplexType(str, Enum):
    """Duplex modes."""

    NO_DUPLEX = "NO_DUPLEX"
    LONG_EDGE = "LONG_EDGE"
    SHORT_EDGE = "SHORT_EDGE"


class VendorCapabilityType(str, Enum):
    """Kinds of generic vendor capability."""

    SELECT = "SELECT"
    TYPED_VALUE = "TYPED_VALUE"


class TypedValueType(str, Enum):
    """Value types of a typed vendor capability."""

    BOOLEAN = "BOOLEAN"


class LocalizedText(BaseModel):
    """A display string in one locale."""

    locale: str = DEFAULT_LOCALE
    value: str


def localized(value: str, locale: str = DEFAULT_LOCALE) -> list[LocalizedText]:
    """Build a single-locale localized string.

    Args:
        value: Display text.
        locale: Locale code.

    Returns:
        list[LocalizedText]: Localized string with one entry.
    """
    return [LocalizedText(locale=locale, value=value)]


# ============================================================================
# Well-known capabilities
# ============================================================================


class PrintingSpeedOption(BaseModel):
    speed_ppm: float


class PrintingSpeed(BaseModel):
    option: list[PrintingSpeedOption]


class MediaSizeOption(BaseModel):
    """A media size; dimensions in microns."""

    name: str
    width_microns: int
    height_microns: int
    is_continuous_feed: bool = False
    is_default: bool = False
    custom_display_name: str = ""
    vendor_id: str = ""
    custom_display_name_localized: list[LocalizedText] = Field(default_factory=list)


class MediaSize(BaseModel):
    option: list[MediaSizeOption]


class ColorOption(BaseModel):
    vendor_id: str
    type: ColorType
    custom_display_name: str = ""
    is_default: bool = False
    custom_display_name_localized: list[LocalizedText] = Field(default_factory=list)


class Color(BaseModel):
    option: list[ColorOption]


class DuplexOption(BaseModel):
    type: DuplexType
    is_default: bool = False


class Duplex(BaseModel):
    option: list[DuplexOption]


class DPIOption(BaseModel):
    horizontal_dpi: int
    vertical_dpi: int
    is_default: bool = False
    custom_display_name: str = ""
    vendor_id: str = ""
    custom_display_name_localized: list[LocalizedText] = Field(default_factory=list)


class DPI(BaseModel):
    option: list[DPIOption]


# ============================================================================
# Vendor capabilities (fallback for unrecognized option groups)
# ============================================================================


class SelectOption(BaseModel):
    value: str
    display_name: str = ""
    is_default: bool = False
    display_name_localized: list[LocalizedText] = Field(default_factory=list)


class SelectCapability(BaseModel):
    option: list[SelectOption]


class TypedValueCapability(BaseModel):
    value_type: TypedValueType
    default: str | None = None


class VendorCapability(BaseModel):
    """A vendor-specific option group.

    Exactly one of select_cap and typed_value_cap is set, matching type.
    """

    id: str
    type: VendorCapabilityType
    display_name_localized: list[LocalizedText] = Field(default_factory=list)
    select_cap: SelectCapability | None = None
    typed_value_cap: TypedValueCapability | None = None


# ============================================================================
# Descriptor
# ============================================================================


class CapabilityDescriptor(BaseModel):
    """Printer capabilities translated from a PPD.

    A field is set only when the PPD declares the capability and at least
    one of its options could be translated.
    """

    printing_speed: PrintingSpeed | None = None
    media_size: MediaSize | None = None
    color: Color | None = None
    duplex: Duplex | None = None
    dpi: DPI | None = None
    vendor_capability: list[VendorCapability] | None = None

    def to_cdd(self) -> dict:
        """Serialize to a JSON-ready CDD dict, leaving out absent fields."""
        return self.model_dump(mode="json", exclude_none=True)


class TranslationResult(BaseModel):
    """Outcome of translating one PPD document.

    Attributes:
        descriptor: Best-effort capability descriptor.
        diagnostics: Problems found, in document order.
        manufacturer: *Manufacturer value, if declared.
        model: Normalized model name from *NickName / *ModelName.
    """

    descriptor: CapabilityDescriptor
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    manufacturer: str | None = None
    model: str | None = None

    @property
    def has_errors(self) -> bool:
        """True if any diagnostic is an error."""
        return any(d.severity == Severity.ERROR for d in self.diagnostics)
