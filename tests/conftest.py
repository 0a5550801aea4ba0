"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest

from ppdcaps.config import get_settings

# A complete, well-formed PPD: every group closed and with a valid default
FULL_PPD = """*PPD-Adobe: "4.3"
*% Test PPD for an office laser printer
*FormatVersion: "4.3"
*LanguageVersion: English
*Manufacturer: "HP"
*ModelName: "HP LaserJet 4250"
*NickName: "HP LaserJet 4250 PS v3010.107 cups-team"
*Throughput: "45"

*OpenGroup: General/General
*OpenUI *PageSize/Media Size: PickOne
*OrderDependency: 10 AnySetup *PageSize
*DefaultPageSize: Letter
*PageSize Letter/US Letter: "<</PageSize[612 792]/ImagingBBox null>>setpagedevice"
*PageSize A4/A4: "<</PageSize[595 842]/ImagingBBox null>>
setpagedevice"
*End
*CloseUI: *PageSize

*OpenUI *Duplex/2-Sided Printing: PickOne
*OrderDependency: 20 AnySetup *Duplex
*DefaultDuplex: DuplexNoTumble
*Duplex None/Off: "<</Duplex false>>setpagedevice"
*Duplex DuplexNoTumble/Long Edge: "<</Duplex true/Tumble false>>setpagedevice"
*Duplex DuplexTumble/Short Edge: "<</Duplex true/Tumble true>>setpagedevice"
*CloseUI: *Duplex

*OpenUI *ColorModel/Color Mode: PickOne
*DefaultColorModel: CMYK
*ColorModel CMYK/Color: "(cmyk) RCsetdevicecolor"
*ColorModel Gray/Grayscale: "(gray) RCsetdevicecolor"
*CloseUI: *ColorModel

*OpenUI *Resolution/Resolution: PickOne
*DefaultResolution: 600dpi
*Resolution 600dpi/600 dpi: ""
*Resolution 1200dpi/1200 dpi: ""
*CloseUI: *Resolution

*OpenUI *OutputBin/Destination: PickOne
*DefaultOutputBin: Upper
*OutputBin Upper/Upper Tray: ""
*OutputBin Rear/Rear Tray: ""
*CloseUI: *OutputBin

*OpenUI *Collate/Collate: Boolean
*DefaultCollate: True
*Collate True/On: ""
*Collate False/Off: ""
*CloseUI: *Collate

*OpenUI *InputSlot/Paper Source: PickOne
*DefaultInputSlot: Auto
*InputSlot Auto/Automatic: ""
*InputSlot Tray1/Tray 1: ""
*CloseUI: *InputSlot
*CloseGroup: General
"""


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Make every test read settings from a clean environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def full_ppd() -> str:
    """A realistic PPD document without defects."""
    return FULL_PPD


@pytest.fixture
def ppd_file(tmp_path, full_ppd):
    """FULL_PPD written to a file."""
    path = tmp_path / "office.ppd"
    path.write_text(full_ppd, encoding="utf-8")
    return path
