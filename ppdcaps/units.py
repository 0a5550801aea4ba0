"""Length conversions to microns, the descriptor's unit for dimensions."""

import math

MICRONS_PER_MM = 1000
MICRONS_PER_INCH = 25400
POINTS_PER_INCH = 72


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def mm_to_microns(mm: float) -> int:
    """Convert millimeters to whole microns.

    Args:
        mm: Length in millimeters.

    Returns:
        int: Length in microns, rounded to the nearest integer.
    """
    return _round_half_up(mm * MICRONS_PER_MM)


def inches_to_microns(inches: float) -> int:
    """Convert inches to whole microns.

    Args:
        inches: Length in inches.

    Returns:
        int: Length in microns, rounded to the nearest integer.
    """
    return _round_half_up(inches * MICRONS_PER_INCH)


def points_to_microns(points: float) -> int:
    """Convert PostScript points (1/72 inch) to whole microns."""
    return _round_half_up(points * MICRONS_PER_INCH / POINTS_PER_INCH)
