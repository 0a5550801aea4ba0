"""Assemble a capability descriptor from a PPD document."""

import logging

from ppdcaps.model_name import normalize_model
from ppdcaps.parser import parse_ppd
from ppdcaps.schemas import (
    DEFAULT_LOCALE,
    CapabilityDescriptor,
    Severity,
    TranslationResult,
)
from ppdcaps.translators import (
    GROUP_TRANSLATORS,
    TranslationContext,
    translate_printing_speed,
    translate_vendor_capability,
)

logger = logging.getLogger(__name__)

# Attributes holding the model, best first
MODEL_ATTRIBUTES = ("NickName", "ModelName", "ShortNickName")


def _strip_manufacturer(label: str, manufacturer: str | None) -> str:
    """Drop a leading manufacturer name ("HP LaserJet 4250" -> "LaserJet 4250")."""
    if not manufacturer:
        return label

    prefixes = [manufacturer]
    make = manufacturer.lower().replace("-", " ")
    if make.startswith("hewlett") and make.endswith("packard"):
        prefixes.append("HP")

    for prefix in prefixes:
        if label.lower().startswith(prefix.lower() + " "):
            return label[len(prefix) + 1 :].lstrip()
    return label


def make_and_model(attributes: dict[str, str]) -> tuple[str | None, str | None]:
    """Extract manufacturer and normalized model from PPD attributes.

    Args:
        attributes: Scalar attributes of a parsed PPD.

    Returns:
        tuple: (manufacturer, model), each None when not declared.
    """
    manufacturer = attributes.get("Manufacturer", "").strip() or None

    label = next(
        (attributes[key].strip() for key in MODEL_ATTRIBUTES if attributes.get(key, "").strip()),
        None,
    )
    if label is None:
        return manufacturer, None

    model = normalize_model(_strip_manufacturer(label, manufacturer))
    return manufacturer, model or None


def translate_ppd(
    text: str,
    locale: str = DEFAULT_LOCALE,
    vendor_capabilities: bool = True,
) -> TranslationResult:
    """Translate a PPD document into a capability descriptor.

    Well-known groups (PageSize, ColorModel, Duplex, Resolution) and the
    *Throughput attribute map to their descriptor fields; every other
    option group becomes a vendor capability, in document order.

    Args:
        text: Raw PPD document.
        locale: Locale of the display strings in the descriptor.
        vendor_capabilities: Whether to include the vendor capability fallback.

    Returns:
        TranslationResult: Best-effort descriptor with all diagnostics.

    Raises:
        PPDParseError: If the text is not a PPD document at all.
    """
    parsed = parse_ppd(text)
    ctx = TranslationContext(locale=locale, diagnostics=list(parsed.diagnostics))

    fields: dict[str, object] = {}
    throughput = parsed.attributes.get("Throughput")
    if throughput is not None:
        fields["printing_speed"] = translate_printing_speed(throughput, ctx)

    vendor = []
    for group in parsed.groups:
        if group.key in GROUP_TRANSLATORS:
            field_name, translator = GROUP_TRANSLATORS[group.key]
            if fields.get(field_name) is not None:
                ctx.report(
                    Severity.WARNING,
                    f"Ignoring repeated *{group.key} group",
                    group.key,
                    group.line,
                )
                continue
            fields[field_name] = translator(group, ctx)
        elif vendor_capabilities:
            capability = translate_vendor_capability(group, ctx)
            if capability is not None:
                vendor.append(capability)

    descriptor = CapabilityDescriptor(
        **{name: value for name, value in fields.items() if value is not None},
        vendor_capability=vendor or None,
    )
    manufacturer, model = make_and_model(parsed.attributes)

    logger.debug(
        f"Translated PPD for {manufacturer or '?'} {model or '?'}: "
        f"{len(parsed.groups)} groups, {len(vendor)} vendor capabilities, "
        f"{len(ctx.diagnostics)} diagnostics"
    )

    return TranslationResult(
        descriptor=descriptor,
        diagnostics=ctx.diagnostics,
        manufacturer=manufacturer,
        model=model,
    )
