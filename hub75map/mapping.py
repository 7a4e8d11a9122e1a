"""Coordinate mapping from a virtual display onto a chain of HUB75 panels.

A virtual display is a grid of physical panels.  The panels are wired as a
single chain, so every virtual pixel has to be moved to the position the DMA
engine sees along that chain.  Some panels also scan four rows in parallel
instead of two and need a further remapping step.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    "Coords",
    "ScanType",
    "LegacyScanRate",
    "ChainType",
    "PanelLayout",
    "rotate",
    "map_chain",
    "apply_scan_type",
    "apply_legacy_scan_rate",
]


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _mod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * _div(a, b)


@dataclass(frozen=True)
class Coords:
    """A pixel position; (-1, -1) marks a position outside the display."""

    x: int
    y: int
    virt_row: int = 0
    virt_col: int = 0


class ScanType(IntEnum):
    """How a physical panel scans its rows."""

    STANDARD_TWO_SCAN = 0
    FOUR_SCAN_16PX_HIGH = 1
    FOUR_SCAN_32PX_HIGH = 2
    FOUR_SCAN_40PX_HIGH = 3
    FOUR_SCAN_40_80PX_HFARCAN = 4
    FOUR_SCAN_64PX_HIGH = 5


class LegacyScanRate(IntEnum):
    """Scan rates understood by the older virtual panel."""

    NORMAL_TWO_SCAN = 0
    NORMAL_ONE_SIXTEEN = 1
    FOUR_SCAN_32PX_HIGH = 2
    FOUR_SCAN_16PX_HIGH = 3
    FOUR_SCAN_64PX_HIGH = 4
    FOUR_SCAN_40PX_HIGH = 5


class ChainType(IntEnum):
    """How the panels of a grid are chained, seen from the LED side."""

    CHAIN_NONE = 0
    CHAIN_TOP_LEFT_DOWN = 1
    CHAIN_TOP_RIGHT_DOWN = 2
    CHAIN_BOTTOM_LEFT_UP = 3
    CHAIN_BOTTOM_RIGHT_UP = 4
    CHAIN_TOP_LEFT_DOWN_ZZ = 5
    CHAIN_TOP_RIGHT_DOWN_ZZ = 6
    CHAIN_BOTTOM_RIGHT_UP_ZZ = 7
    CHAIN_BOTTOM_LEFT_UP_ZZ = 8


@dataclass(frozen=True)
class PanelLayout:
    """A grid of ``rows`` x ``cols`` panels, each ``panel_res_x`` x ``panel_res_y``."""

    rows: int
    cols: int
    panel_res_x: int
    panel_res_y: int

    @property
    def virtual_width(self) -> int:
        """Width of the whole virtual display in pixels."""
        return self.cols * self.panel_res_x

    @property
    def virtual_height(self) -> int:
        """Height of the whole virtual display in pixels."""
        return self.rows * self.panel_res_y

    @property
    def dma_width(self) -> int:
        """Index of the last pixel column of the chain as the DMA engine sees it."""
        return self.panel_res_x * self.rows * self.cols - 1


def rotate(x: int, y: int, rotation: int, width: int, height: int) -> tuple[int, int]:
    """Undo a display rotation of ``rotation`` quarter turns.

    ``width`` and ``height`` are the unrotated virtual resolution.  Any
    rotation other than 1, 2 or 3 leaves the point unchanged.
    """
    if rotation == 1:
        return y, height - 1 - x
    if rotation == 2:
        return width - 1 - x, height - 1 - y
    if rotation == 3:
        return width - 1 - y, x
    return x, y


def map_chain(x: int, y: int, chain: ChainType, layout: PanelLayout) -> Coords:
    """Map a virtual pixel onto its position along the chain of panels."""
    rows = layout.rows
    res_y = layout.panel_res_y
    vres_x = layout.virtual_width
    dma_x = layout.dma_width
    row = _div(y, res_y)
    local_y = _mod(y, res_y)

    def upright(r: int) -> Coords:
        return Coords((rows - (r + 1)) * vres_x + x, local_y)

    def inverted(r: int) -> Coords:
        return Coords(dma_x - x - r * vres_x, res_y - 1 - local_y)

    if chain is ChainType.CHAIN_TOP_RIGHT_DOWN:
        return inverted(row) if row & 1 else upright(row)
    if chain is ChainType.CHAIN_TOP_LEFT_DOWN:
        return upright(row) if row & 1 else inverted(row)
    if chain in (ChainType.CHAIN_TOP_RIGHT_DOWN_ZZ, ChainType.CHAIN_TOP_LEFT_DOWN_ZZ):
        return upright(row)

    flipped = rows - row - 1
    if chain is ChainType.CHAIN_BOTTOM_LEFT_UP:
        return upright(flipped) if flipped & 1 else inverted(flipped)
    if chain is ChainType.CHAIN_BOTTOM_RIGHT_UP:
        return inverted(flipped) if flipped & 1 else upright(flipped)
    if chain in (ChainType.CHAIN_BOTTOM_LEFT_UP_ZZ, ChainType.CHAIN_BOTTOM_RIGHT_UP_ZZ):
        return upright(flipped)

    return Coords(x, y)


def _shift_block(x: int, first_half: bool, pixel_base: int) -> int:
    block = _div(x, pixel_base)
    if first_half:
        return x + (block + 1) * pixel_base
    return x + block * pixel_base


def apply_scan_type(coords: Coords, scan_type: ScanType, pixel_base: int) -> Coords:
    """Remap chain coordinates for a panel that scans four rows in parallel."""
    x, y = coords.x, coords.y

    if scan_type is ScanType.FOUR_SCAN_16PX_HIGH:
        x = _shift_block(x, (y & 4) == 0, pixel_base)
        y = (y >> 3) * 4 + (y & 0b11)
    elif scan_type is ScanType.FOUR_SCAN_40PX_HIGH:
        x = _shift_block(x, _mod(_div(y, 10), 2) == 0, pixel_base)
        y = _div(y, 20) * 10 + _mod(y, 10)
    elif scan_type is ScanType.FOUR_SCAN_40_80PX_HFARCAN:
        base = 16
        local_x = _mod(x, 80)
        odd_band = _mod(_div(y, 10), 2)
        odd_block = _mod(_div(local_x, base), 2)
        x = _shift_block(x, not (odd_band ^ odd_block), base)
        y = _mod(y, 10) + 10 * _mod(_div(y, 20), 2)
    elif scan_type in (ScanType.FOUR_SCAN_32PX_HIGH, ScanType.FOUR_SCAN_64PX_HIGH):
        if scan_type is ScanType.FOUR_SCAN_64PX_HIGH and (y & 8) != ((y & 16) >> 1):
            y = ((y & 0b11000) ^ 0b11000) + (y & 0b11100111)
        x = _shift_block(x, (y & 8) == 0, pixel_base)
        y = (y >> 4) * 8 + (y & 0b111)
    else:
        return coords

    return dataclasses.replace(coords, x=x, y=y)


def apply_legacy_scan_rate(coords: Coords, rate: LegacyScanRate, pixel_base: int) -> Coords:
    """Remap chain coordinates the way the older virtual panel does.

    The 64-pixel-high rate behaves exactly like the 32-pixel-high one here:
    its extra row adjustment never reaches the chain coordinates.
    """
    x, y = coords.x, coords.y

    if rate in (LegacyScanRate.FOUR_SCAN_64PX_HIGH, LegacyScanRate.FOUR_SCAN_32PX_HIGH):
        x = _shift_block(x, (y & 8) == 0, pixel_base)
        y = (y >> 4) * 8 + (y & 0b111)
    elif rate is LegacyScanRate.FOUR_SCAN_16PX_HIGH:
        x = _shift_block(x, (y & 4) == 0, pixel_base)
        y = (y >> 3) * 4 + (y & 0b11)
    elif rate is LegacyScanRate.FOUR_SCAN_40PX_HIGH:
        x = _shift_block(x, _mod(_div(y, 10), 2) == 0, pixel_base)
        y = _div(y, 20) * 10 + _mod(y, 10)
    else:
        return coords

    return dataclasses.replace(coords, x=x, y=y)