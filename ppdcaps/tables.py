"""Read-only lookup tables for PPD keyword translation."""

import re
from types import MappingProxyType
from typing import Literal, NamedTuple

from ppdcaps.schemas import ColorType, DuplexType

MEDIA_SIZE_CUSTOM = "CUSTOM"


class MediaSizeSpec(NamedTuple):
    """A standard media size as declared by PPD *PageSize option names."""

    name: str  # Descriptor media size name
    width: float
    height: float
    unit: Literal["mm", "in"]
    label: str


def _iso(name: str, width: float, height: float, label: str) -> MediaSizeSpec:
    return MediaSizeSpec(name, width, height, "mm", label)


def _na(name: str, width: float, height: float, label: str) -> MediaSizeSpec:
    return MediaSizeSpec(name, width, height, "in", label)


# PPD *PageSize option name -> media size.
# Plain "B<n>" names are JIS B sizes, ISO B sizes are spelled "ISOB<n>".
MEDIA_SIZES = MappingProxyType(
    {
        # ISO A
        "A0": _iso("ISO_A0", 841, 1189, "A0"),
        "A1": _iso("ISO_A1", 594, 841, "A1"),
        "A2": _iso("ISO_A2", 420, 594, "A2"),
        "A3": _iso("ISO_A3", 297, 420, "A3"),
        "A4": _iso("ISO_A4", 210, 297, "A4"),
        "A5": _iso("ISO_A5", 148, 210, "A5"),
        "A6": _iso("ISO_A6", 105, 148, "A6"),
        "A7": _iso("ISO_A7", 74, 105, "A7"),
        "A8": _iso("ISO_A8", 52, 74, "A8"),
        "A9": _iso("ISO_A9", 37, 52, "A9"),
        "A10": _iso("ISO_A10", 26, 37, "A10"),
        # ISO B
        "ISOB0": _iso("ISO_B0", 1000, 1414, "B0 (ISO)"),
        "ISOB1": _iso("ISO_B1", 707, 1000, "B1 (ISO)"),
        "ISOB2": _iso("ISO_B2", 500, 707, "B2 (ISO)"),
        "ISOB3": _iso("ISO_B3", 353, 500, "B3 (ISO)"),
        "ISOB4": _iso("ISO_B4", 250, 353, "B4 (ISO)"),
        "ISOB5": _iso("ISO_B5", 176, 250, "B5 (ISO)"),
        "ISOB6": _iso("ISO_B6", 125, 176, "B6 (ISO)"),
        "ISOB7": _iso("ISO_B7", 88, 125, "B7 (ISO)"),
        "ISOB8": _iso("ISO_B8", 62, 88, "B8 (ISO)"),
        "ISOB9": _iso("ISO_B9", 44, 62, "B9 (ISO)"),
        "ISOB10": _iso("ISO_B10", 31, 44, "B10 (ISO)"),
        # JIS B
        "B0": _iso("JIS_B0", 1030, 1456, "B0 (JIS)"),
        "B1": _iso("JIS_B1", 728, 1030, "B1 (JIS)"),
        "B2": _iso("JIS_B2", 515, 728, "B2 (JIS)"),
        "B3": _iso("JIS_B3", 364, 515, "B3 (JIS)"),
        "B4": _iso("JIS_B4", 257, 364, "B4 (JIS)"),
        "B5": _iso("JIS_B5", 182, 257, "B5 (JIS)"),
        "B6": _iso("JIS_B6", 128, 182, "B6 (JIS)"),
        "B7": _iso("JIS_B7", 91, 128, "B7 (JIS)"),
        "B8": _iso("JIS_B8", 64, 91, "B8 (JIS)"),
        "B9": _iso("JIS_B9", 45, 64, "B9 (JIS)"),
        "B10": _iso("JIS_B10", 32, 45, "B10 (JIS)"),
        # ISO envelopes
        "EnvC0": _iso("ISO_C0", 917, 1297, "Envelope C0"),
        "EnvC1": _iso("ISO_C1", 648, 917, "Envelope C1"),
        "EnvC2": _iso("ISO_C2", 458, 648, "Envelope C2"),
        "EnvC3": _iso("ISO_C3", 324, 458, "Envelope C3"),
        "EnvC4": _iso("ISO_C4", 229, 324, "Envelope C4"),
        "EnvC5": _iso("ISO_C5", 162, 229, "Envelope C5"),
        "EnvC6": _iso("ISO_C6", 114, 162, "Envelope C6"),
        "EnvC7": _iso("ISO_C7", 81, 114, "Envelope C7"),
        "EnvDL": _iso("ISO_DL", 110, 220, "Envelope DL"),
        # North American
        "Letter": _na("NA_LETTER", 8.5, 11, "Letter"),
        "Legal": _na("NA_LEGAL", 8.5, 14, "Legal"),
        "Executive": _na("NA_EXECUTIVE", 7.25, 10.5, "Executive"),
        "Statement": _na("NA_INVOICE", 5.5, 8.5, "Statement"),
        "Tabloid": _na("NA_LEDGER", 11, 17, "Tabloid"),
        "11x17": _na("NA_LEDGER", 11, 17, "11x17"),
        "Ledger": _na("NA_LEDGER", 17, 11, "Ledger"),
        "Folio": _na("NA_FOOLSCAP", 8.5, 13, "Folio"),
        "10x14": _na("NA_10X14", 10, 14, "10x14"),
        "ARCHA": _na("NA_ARCH_A", 9, 12, "Arch A"),
        "3x5": _na("NA_INDEX_3X5", 3, 5, "Index 3x5"),
        "4x6": _na("NA_INDEX_4X6", 4, 6, "Index 4x6"),
        "5x7": _na("NA_5X7", 5, 7, "5x7"),
        "5x8": _na("NA_INDEX_5X8", 5, 8, "Index 5x8"),
        "Env9": _na("NA_NUMBER_9", 3.875, 8.875, "Envelope #9"),
        "Env10": _na("NA_NUMBER_10", 4.125, 9.5, "Envelope #10"),
        "Env11": _na("NA_NUMBER_11", 4.5, 10.375, "Envelope #11"),
        "Env12": _na("NA_NUMBER_12", 4.75, 11, "Envelope #12"),
        "Env14": _na("NA_NUMBER_14", 5, 11.5, "Envelope #14"),
        "EnvMonarch": _na("NA_MONARCH", 3.875, 7.5, "Envelope Monarch"),
        "EnvPersonal": _na("NA_PERSONAL", 3.625, 6.5, "Envelope Personal"),
        # Japanese
        "Postcard": _iso("JPN_HAGAKI", 100, 148, "Postcard"),
        "DoublePostcard": _iso("JPN_OUFUKU", 148, 200, "Double Postcard"),
        "EnvChou3": _iso("JPN_CHOU3", 120, 235, "Envelope Chou 3"),
        "EnvChou4": _iso("JPN_CHOU4", 90, 205, "Envelope Chou 4"),
    }
)

# PPD *Duplex option name -> duplex type
DUPLEX_TYPES = MappingProxyType(
    {
        "None": DuplexType.NO_DUPLEX,
        "DuplexNoTumble": DuplexType.LONG_EDGE,
        "DuplexTumble": DuplexType.SHORT_EDGE,
    }
)

# Searched for anywhere in the option name, then its translation; first hit wins.
# Monochrome comes first so "CMYGray" or "RGBGray" are grayscale modes.
COLOR_KEYWORDS: tuple[tuple[re.Pattern, ColorType], ...] = (
    (re.compile(r"gr[ae]y|mono|black", re.I), ColorType.STANDARD_MONOCHROME),
    (re.compile(r"cmyk|rgb|colou?r", re.I), ColorType.STANDARD_COLOR),
)
