"""ppdcaps - PPD to cloud print capability translator.

ppdcaps reads a printer's PostScript Printer Description (PPD) and turns it
into a capability descriptor (CDD) that a cloud print service understands:
media sizes, color modes, duplex, resolutions, printing speed, and every
vendor-specific option group as a generic select capability.

Usage:
    ppdcaps translate /etc/cups/ppd/office.ppd
    ppdcaps translate --printer office
    ppdcaps model "LaserJet 4250 PS v3010.107 cups-team"
    ppdcaps printers
"""

from ppdcaps.model_name import normalize_model
from ppdcaps.parser import parse_ppd
from ppdcaps.translate import translate_ppd

__version__ = "0.1.0"

__all__ = [
    "normalize_model",
    "parse_ppd",
    "translate_ppd",
]
