"""Model name cleanup for PPD NickName / make-and-model strings.

Driver PPDs decorate the model with the page description language, the
driver name and version, and notes such as "(recommended)":

    "LaserJet 4250 PS v3010.107 cups-team Letter+Duplex" -> "LaserJet 4250"
    "OfficeJet 7400 Foomatic/hpijs (recommended)"       -> "OfficeJet 7400"

Each rule below finds where such an annotation starts. The earliest start
found by any rule wins and everything from there on is dropped.
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Characters left dangling at the end after a cut
_TRAILING_SEPARATORS = " \t,-/"


@dataclass(frozen=True)
class ModelRule:
    """A truncation rule: the label is cut where the pattern first matches."""

    name: str
    pattern: re.Pattern

    def find(self, label: str) -> int | None:
        """Return the index where the annotation starts, or None.

        A match at index 0 would cut away the whole label, so the first
        match after the start is used instead: "(HP) LaserJet (PS)" is cut
        at " (PS)".
        """
        for match in self.pattern.finditer(label):
            if match.start() > 0:
                return match.start()
        return None


MODEL_RULES: tuple[ModelRule, ...] = (
    # "FS-600 (KPDL-2)", "C5700(PS)", "M24 Foomatic/epson (recommended)"
    ModelRule("parenthetical", re.compile(r"\s*\(")),
    # "LaserJet p4015n, hpcups 3.13.9"
    ModelRule("comma", re.compile(r"\s*,")),
    # "LaserJet 2 w/PS"
    ModelRule("with", re.compile(r"\s+w/", re.I)),
    # "PIXMA Pro9000 - CUPS+Gutenprint"
    ModelRule("dash", re.compile(r"\s+-(?=\s|$)")),
    ModelRule(
        "pdl",
        re.compile(r"\s+(?:PS[23]?|PXL|PDF|PCL\d?|PostScript|KPDL(?:-\d)?)(?=[\s,(]|$)", re.I),
    ),
    ModelRule("br-script", re.compile(r"\s+BR-Script[23][A-Z]?(?=[\s,(]|$)", re.I)),
    ModelRule("foomatic", re.compile(r"\s+Foomatic/", re.I)),
    ModelRule("cups-plus", re.compile(r"\s+CUPS\+", re.I)),
    ModelRule("hp-driver", re.compile(r"\s+(?:hpijs|hpcups)(?=[\s,]|$)", re.I)),
    ModelRule("cups-team", re.compile(r"\s+cups-team(?=\s|$)", re.I)),
    ModelRule("recommended", re.compile(r"\s+recommended(?=\s|$)", re.I)),
    # Lowercase "v" only: "Epson PX V500" is a model, "v3010.107" a version
    ModelRule("driver-version", re.compile(r"\s+v\d(?:\d*\.\d+)*(?:-\S+)?(?=\s|$)")),
    ModelRule("version-number", re.compile(r"\s+\d+(?:\.\d+)+(?:-\S+)?(?=\s|$)")),
)


def _cut(label: str) -> str:
    positions = [pos for rule in MODEL_RULES if (pos := rule.find(label)) is not None]
    if not positions:
        return label
    return label[: min(positions)].rstrip(_TRAILING_SEPARATORS)


def normalize_model(label: str) -> str:
    """Strip driver and PDL annotations from a printer model label.

    Rules are applied until the label stops changing, so normalizing an
    already normalized name returns it unchanged. A cut that would leave
    nothing is not applied.

    Args:
        label: Raw model label, e.g. a PPD *NickName.

    Returns:
        str: Canonical model name (the input itself if no rule matches).
    """
    current = label
    while True:
        cleaned = _cut(current)
        if cleaned == current or not cleaned:
            break
        current = cleaned

    if current != label:
        logger.debug(f"Normalized model {label!r} -> {current!r}")
    return current
