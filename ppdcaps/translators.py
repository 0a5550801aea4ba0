"""Translation of parsed PPD option groups into descriptor capabilities.

One translator per well-known group keyword, plus the vendor capability
fallback used for every other group. A translator never fails on a single
bad option: the option is skipped with a diagnostic and the rest of the
group is translated. A translator returns None when nothing survives.
"""

import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from types import MappingProxyType

from ppdcaps.parser import Directive, OptionGroup, UIType
from ppdcaps.schemas import (
    DEFAULT_LOCALE,
    DPI,
    Color,
    ColorOption,
    ColorType,
    Diagnostic,
    DPIOption,
    Duplex,
    DuplexOption,
    MediaSize,
    MediaSizeOption,
    PrintingSpeed,
    PrintingSpeedOption,
    SelectCapability,
    SelectOption,
    Severity,
    TypedValueCapability,
    TypedValueType,
    VendorCapability,
    VendorCapabilityType,
    localized,
)
from ppdcaps.tables import COLOR_KEYWORDS, DUPLEX_TYPES, MEDIA_SIZE_CUSTOM, MEDIA_SIZES
from ppdcaps.units import inches_to_microns, mm_to_microns, points_to_microns

logger = logging.getLogger(__name__)

# "5.5x8.5", "210 x 297 mm", "10x15cm", '4"x6"'; inches unless a unit says otherwise
_CUSTOM_SIZE = re.compile(
    r"(\d+(?:\.\d+)?)\s*(mm|cm|in|\")?\s*x\s*(\d+(?:\.\d+)?)\s*(mm|cm|in|\")?", re.I
)
# CUPS size names in points, e.g. "w72h154"
_CUPS_SIZE = re.compile(r"^w(\d+(?:\.\d+)?)h(\d+(?:\.\d+)?)$")
_RESOLUTION = re.compile(r"^(\d+)(?:x(\d+))?dpi$", re.I)


@dataclass
class TranslationContext:
    """Per-document translation settings and diagnostic accumulator."""

    locale: str = DEFAULT_LOCALE
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(
        self, severity: Severity, message: str, key: str | None = None, line: int | None = None
    ) -> None:
        """Record a diagnostic."""
        diagnostic = Diagnostic(severity=severity, message=message, key=key, line=line)
        logger.debug(f"Translation diagnostic: {diagnostic}")
        self.diagnostics.append(diagnostic)

    def skip(self, group: OptionGroup, option: Directive, reason: str) -> None:
        """Record that an option of a group was left out."""
        self.report(
            Severity.WARNING,
            f"Skipping *{group.key} option {option.option!r}: {reason}",
            group.key,
            option.line,
        )


# ============================================================================
# Printing speed
# ============================================================================


def translate_printing_speed(value: str, ctx: TranslationContext) -> PrintingSpeed | None:
    """Translate the *Throughput attribute (pages per minute).

    Args:
        value: Attribute value, e.g. "30".
        ctx: Translation context.

    Returns:
        PrintingSpeed | None: Speed capability, or None if unparsable.
    """
    try:
        speed = float(value)
    except ValueError:
        ctx.report(Severity.ERROR, f"Invalid *Throughput value {value!r}", "Throughput")
        return None

    if not math.isfinite(speed) or speed <= 0:
        ctx.report(Severity.ERROR, f"Invalid *Throughput value {value!r}", "Throughput")
        return None

    return PrintingSpeed(option=[PrintingSpeedOption(speed_ppm=speed)])


# ============================================================================
# Media size
# ============================================================================


def _to_microns(length: float, unit: str | None) -> int:
    unit = (unit or "").lower()
    if unit == "mm":
        return mm_to_microns(length)
    if unit == "cm":
        return mm_to_microns(length * 10)
    return inches_to_microns(length)


def _media_size_option(
    group: OptionGroup, option: Directive, ctx: TranslationContext
) -> MediaSizeOption | None:
    name = option.option
    known = MEDIA_SIZES.get(name)
    label = known.label if known else option.label

    # Variants of a standard size, e.g. "A4.Borderless"
    if known is None and "." in name:
        known = MEDIA_SIZES.get(name.split(".", 1)[0])

    if known is not None:
        size_name = known.name
        width = _to_microns(known.width, known.unit)
        height = _to_microns(known.height, known.unit)
    elif match := _CUSTOM_SIZE.search(option.translation or ""):
        size_name = MEDIA_SIZE_CUSTOM
        unit = match.group(4) or match.group(2)
        width = _to_microns(float(match.group(1)), unit)
        height = _to_microns(float(match.group(3)), unit)
    elif match := _CUPS_SIZE.match(name):
        size_name = MEDIA_SIZE_CUSTOM
        width = points_to_microns(float(match.group(1)))
        height = points_to_microns(float(match.group(2)))
    else:
        ctx.skip(group, option, "unknown media size without dimensions")
        return None

    if width <= 0 or height <= 0:
        ctx.skip(group, option, "media size has zero dimensions")
        return None

    return MediaSizeOption(
        name=size_name,
        width_microns=width,
        height_microns=height,
        is_default=group.is_default(option),
        vendor_id=name,
        custom_display_name_localized=localized(label, ctx.locale),
    )


def translate_media_size(group: OptionGroup, ctx: TranslationContext) -> MediaSize | None:
    """Translate a *PageSize group.

    Standard names come from MEDIA_SIZES; other names become custom sizes
    when the translation (e.g. "5.5x8.5") or a CUPS "w<W>h<H>" name gives
    their dimensions.

    Args:
        group: The PageSize option group.
        ctx: Translation context.

    Returns:
        MediaSize | None: Media sizes in declaration order.
    """
    options = [
        translated
        for option in group.options
        if (translated := _media_size_option(group, option, ctx)) is not None
    ]
    return MediaSize(option=options) if options else None


# ============================================================================
# Color
# ============================================================================


def classify_color(text: str) -> ColorType | None:
    """Classify a color option name or label by the keywords it contains."""
    for pattern, color_type in COLOR_KEYWORDS:
        if pattern.search(text):
            return color_type
    return None


def translate_color(group: OptionGroup, ctx: TranslationContext) -> Color | None:
    """Translate a *ColorModel group into color / monochrome options."""
    options = []
    for option in group.options:
        color_type = classify_color(option.option)
        if color_type is None and option.translation:
            color_type = classify_color(option.translation)
        if color_type is None:
            ctx.skip(group, option, "cannot tell color from monochrome")
            continue

        options.append(
            ColorOption(
                vendor_id=f"{group.key}{option.option}",
                type=color_type,
                is_default=group.is_default(option),
                custom_display_name_localized=localized(option.label, ctx.locale),
            )
        )

    return Color(option=options) if options else None


# ============================================================================
# Duplex
# ============================================================================


def translate_duplex(group: OptionGroup, ctx: TranslationContext) -> Duplex | None:
    """Translate a *Duplex group; unknown option names are dropped."""
    options = []
    for option in group.options:
        duplex_type = DUPLEX_TYPES.get(option.option)
        if duplex_type is None:
            ctx.skip(group, option, "unknown duplex mode")
            continue
        options.append(DuplexOption(type=duplex_type, is_default=group.is_default(option)))

    return Duplex(option=options) if options else None


# ============================================================================
# Resolution
# ============================================================================


def translate_dpi(group: OptionGroup, ctx: TranslationContext) -> DPI | None:
    """Translate a *Resolution group.

    Option names must look like "600dpi" (square) or "1200x600dpi"
    (horizontal x vertical).

    Args:
        group: The Resolution option group.
        ctx: Translation context.

    Returns:
        DPI | None: Resolutions in declaration order.
    """
    options = []
    for option in group.options:
        match = _RESOLUTION.match(option.option)
        if match is None:
            ctx.skip(group, option, "not a <N>dpi or <N>x<M>dpi resolution")
            continue

        horizontal = int(match.group(1))
        vertical = int(match.group(2)) if match.group(2) else horizontal
        options.append(
            DPIOption(
                horizontal_dpi=horizontal,
                vertical_dpi=vertical,
                is_default=group.is_default(option),
                vendor_id=option.option,
                custom_display_name_localized=localized(option.label, ctx.locale),
            )
        )

    return DPI(option=options) if options else None


# ============================================================================
# Vendor capability fallback
# ============================================================================


def _boolean_default(group: OptionGroup, ctx: TranslationContext) -> str | None:
    if group.default is None:
        return None
    value = group.default.lower()
    if value not in ("true", "false"):
        ctx.report(
            Severity.WARNING,
            f"*Default{group.key} {group.default!r} is not True or False",
            group.key,
            group.line,
        )
        return None
    return value


def translate_vendor_capability(
    group: OptionGroup, ctx: TranslationContext
) -> VendorCapability | None:
    """Translate an unrecognized option group into a generic capability.

    PickOne groups become SELECT capabilities keeping the declared option
    order; if *Default<Key> names no option, the first option is the
    default. Boolean groups become BOOLEAN typed values. PickMany groups
    cannot be expressed and are reported and left out.

    Args:
        group: Any option group without a dedicated translator.
        ctx: Translation context.

    Returns:
        VendorCapability | None: Capability, or None if nothing to offer.
    """
    if not group.options:
        return None

    display_name = localized(group.label or group.key, ctx.locale)

    if group.ui_type == UIType.BOOLEAN:
        return VendorCapability(
            id=group.key,
            type=VendorCapabilityType.TYPED_VALUE,
            display_name_localized=display_name,
            typed_value_cap=TypedValueCapability(
                value_type=TypedValueType.BOOLEAN,
                default=_boolean_default(group, ctx),
            ),
        )

    if group.ui_type != UIType.PICK_ONE:
        ctx.report(
            Severity.WARNING,
            f"Group *{group.key} of type {group.ui_type!r} is not supported",
            group.key,
            group.line,
        )
        return None

    # A select always has a default: the first option when none is declared
    first_is_default = group.default_option is None
    options = [
        SelectOption(
            value=option.option,
            is_default=group.is_default(option) or (first_is_default and index == 0),
            display_name_localized=localized(option.label, ctx.locale),
        )
        for index, option in enumerate(group.options)
    ]
    return VendorCapability(
        id=group.key,
        type=VendorCapabilityType.SELECT,
        display_name_localized=display_name,
        select_cap=SelectCapability(option=options),
    )


# Group keyword -> (descriptor field, translator)
GROUP_TRANSLATORS: MappingProxyType[
    str, tuple[str, Callable[[OptionGroup, TranslationContext], object]]
] = MappingProxyType(
    {
        "PageSize": ("media_size", translate_media_size),
        "ColorModel": ("color", translate_color),
        "Duplex": ("duplex", translate_duplex),
        "Resolution": ("dpi", translate_dpi),
    }
)
