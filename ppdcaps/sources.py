"""Reading PPD text from files and from CUPS."""

import gzip
import logging
from pathlib import Path

from ppdcaps.exceptions import PPDSourceError
from ppdcaps.model_name import normalize_model

logger = logging.getLogger(__name__)

# pycups is optional; it is only needed to read PPDs from a CUPS server
try:
    import cups

    CUPS_AVAILABLE = True
except ImportError:
    CUPS_AVAILABLE = False


def decode_ppd(data: bytes) -> str:
    """Decode PPD bytes: UTF-8 when valid, otherwise Latin-1 (the PPD default)."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def read_ppd_file(path: Path | str) -> str:
    """Read a PPD file, gzip-compressed or not.

    Args:
        path: Path to a .ppd or .ppd.gz file.

    Returns:
        str: PPD text.

    Raises:
        PPDSourceError: If the file cannot be read.
    """
    path = Path(path)
    try:
        if path.suffix == ".gz":
            with gzip.open(path, "rb") as f:
                data = f.read()
        else:
            data = path.read_bytes()
    except (OSError, EOFError) as err:
        raise PPDSourceError(f"Cannot read PPD file {path}: {err}") from err

    logger.debug(f"Read {len(data)} bytes from {path}")
    return decode_ppd(data)


class CupsPPDSource:
    """Reads printer PPDs from a CUPS server."""

    def __init__(self, server: str | None = None):
        """Connect to CUPS.

        Args:
            server: CUPS server host (None = local default).

        Raises:
            PPDSourceError: If pycups is missing or CUPS is unreachable.
        """
        if not CUPS_AVAILABLE:
            raise PPDSourceError("pycups not available - install ppdcaps[cups]")

        if server:
            cups.setServer(server)
        try:
            self._connection = cups.Connection()
        except RuntimeError as err:
            raise PPDSourceError(f"Could not connect to CUPS: {err}") from err

    def get_printers(self) -> list[dict]:
        """Get the printers known to CUPS.

        Returns:
            list[dict]: Printer info dicts with 'name', 'make_and_model',
                        'model' (normalized) and 'is_default'.
        """
        try:
            printers = self._connection.getPrinters()
            default = self._connection.getDefault()
        except cups.IPPError as err:
            raise PPDSourceError(f"Error getting printers: {err}") from err

        result = []
        for name, info in printers.items():
            make_and_model = info.get("printer-make-and-model", "")
            result.append(
                {
                    "name": name,
                    "make_and_model": make_and_model,
                    "model": normalize_model(make_and_model) if make_and_model else "",
                    "is_default": name == default,
                }
            )
        return result

    def get_ppd_text(self, printer_name: str) -> str:
        """Download the PPD of a printer.

        Args:
            printer_name: CUPS queue name.

        Returns:
            str: PPD text.

        Raises:
            PPDSourceError: If CUPS has no PPD for the printer.
        """
        try:
            ppd_path = self._connection.getPPD(printer_name)
        except cups.IPPError as err:
            raise PPDSourceError(f"No PPD for printer {printer_name!r}: {err}") from err

        # getPPD leaves a temporary copy behind
        try:
            logger.info(f"Fetched PPD for {printer_name} from CUPS")
            return read_ppd_file(ppd_path)
        finally:
            Path(ppd_path).unlink(missing_ok=True)
