"""Virtual displays built from a chain of HUB75 panels.

A virtual panel accepts drawing calls in real-world coordinates, maps each
pixel onto the chain of physical panels and hands it to the underlying
display.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from hub75map.mapping import (
    ChainType,
    Coords,
    LegacyScanRate,
    PanelLayout,
    ScanType,
    apply_legacy_scan_rate,
    apply_scan_type,
    map_chain,
    rotate,
)

__all__ = ["MatrixDisplay", "VirtualMatrixPanel", "LegacyVirtualMatrixPanel"]

_OFF_DISPLAY = Coords(-1, -1)


class MatrixDisplay(Protocol):
    """The physical chain of panels that a virtual panel draws onto."""

    def draw_pixel(self, x: int, y: int, color: Any) -> None:
        """Set one pixel of the chain; (-1, -1) is to be ignored."""

    def draw_pixel_rgb888(self, x: int, y: int, r: int, g: int, b: int) -> None:
        """Set one pixel of the chain from 8-bit channels."""

    def fill_screen(self, color: Any) -> None:
        """Fill the whole chain with one colour."""

    def fill_screen_rgb888(self, r: int, g: int, b: int) -> None:
        """Fill the whole chain from 8-bit channels."""

    def clear_screen(self) -> None:
        """Blank the whole chain."""

    def color444(self, r: int, g: int, b: int) -> int:
        """Pack a colour into the display's 12-bit form."""

    def color565(self, r: int, g: int, b: int) -> int:
        """Pack a colour into the display's 16-bit form."""

    def flip_dma_buffer(self) -> None:
        """Swap the front and back buffers."""


class _PanelBase:
    """Rotation and chain mapping shared by both panel kinds."""

    def __init__(
        self,
        display: MatrixDisplay,
        rows: int,
        cols: int,
        panel_res_x: int,
        panel_res_y: int,
        chain: ChainType,
    ) -> None:
        self.display = display
        self.layout = PanelLayout(rows, cols, panel_res_x, panel_res_y)
        self.chain = ChainType(chain)
        self.pixel_base = panel_res_x
        self._rotation = 0
        self._width = self.layout.virtual_width
        self._height = self.layout.virtual_height

    @property
    def rotation(self) -> int:
        """The current rotation in quarter turns."""
        return self._rotation

    def _rotate_to(self, rotation: int) -> None:
        if 0 <= rotation < 4:
            self._rotation = rotation
        if rotation & 1:
            self._width = self.layout.virtual_height
            self._height = self.layout.virtual_width
        else:
            self._width = self.layout.virtual_width
            self._height = self.layout.virtual_height

    def _chain_coords(self, x: int, y: int) -> Optional[Coords]:
        if not (0 <= x < self._width and 0 <= y < self._height):
            return None
        x, y = rotate(
            x, y, self._rotation, self.layout.virtual_width, self.layout.virtual_height
        )
        return map_chain(x, y, self.chain, self.layout)

    def _mapped(self, x: int, y: int) -> Coords:
        raise NotImplementedError  # pragma: no cover - overridden by subclasses

    def _draw(self, x: int, y: int, scale: int, color: Any) -> None:
        if scale > 1:
            for dx in range(scale):
                for dy in range(scale):
                    mapped = self._mapped(x * scale + dx, y * scale + dy)
                    self.display.draw_pixel(mapped.x, mapped.y, color)
        else:
            mapped = self._mapped(x, y)
            self.display.draw_pixel(mapped.x, mapped.y, color)


class VirtualMatrixPanel(_PanelBase):
    """A virtual display with a fixed chain type, scan type and scale factor.

    Each virtual pixel is drawn as a ``scale_factor`` x ``scale_factor``
    block of physical pixels.
    """

    def __init__(
        self,
        display: MatrixDisplay,
        rows: int,
        cols: int,
        panel_res_x: int,
        panel_res_y: int,
        chain: ChainType = ChainType.CHAIN_NONE,
        scan_type: ScanType = ScanType.STANDARD_TWO_SCAN,
        scale_factor: int = 1,
    ) -> None:
        if scale_factor < 1:
            raise ValueError(f"scale factor must be at least 1, got {scale_factor}")
        super().__init__(display, rows, cols, panel_res_x, panel_res_y, chain)
        self.scan_type = ScanType(scan_type)
        self.scale_factor = scale_factor

    def _mapped(self, x: int, y: int) -> Coords:
        return self.map_coords(x, y)

    def map_coords(self, x: int, y: int) -> Coords:
        """Map a virtual pixel to the position the DMA engine sees."""
        mapped = self._chain_coords(x, y)
        if mapped is None:
            return _OFF_DISPLAY
        return apply_scan_type(mapped, self.scan_type, self.pixel_base)

    def draw_pixel(self, x: int, y: int, color: Any) -> None:
        """Draw one virtual pixel, scaled to a block when configured."""
        self._draw(x, y, self.scale_factor, color)

    def draw_pixel_rgb888(self, x: int, y: int, r: int, g: int, b: int) -> None:
        """Draw one virtual pixel from 8-bit channels."""
        mapped = self.map_coords(x, y)
        self.display.draw_pixel_rgb888(mapped.x, mapped.y, r, g, b)

    def fill_screen(self, color: Any) -> None:
        """Fill the whole display with one colour."""
        self.display.fill_screen(color)

    def fill_screen_rgb888(self, r: int, g: int, b: int) -> None:
        """Fill the whole display from 8-bit channels."""
        self.display.fill_screen_rgb888(r, g, b)

    def clear_screen(self) -> None:
        """Blank the whole display."""
        self.display.clear_screen()

    def color444(self, r: int, g: int, b: int) -> int:
        """Pack a colour the way the underlying display does (12-bit)."""
        return self.display.color444(r, g, b)

    def color565(self, r: int, g: int, b: int) -> int:
        """Pack a colour the way the underlying display does (16-bit)."""
        return self.display.color565(r, g, b)

    def flip_dma_buffer(self) -> None:
        """Swap the underlying display's buffers."""
        self.display.flip_dma_buffer()

    def set_rotation(self, rotation: int) -> None:
        """Rotate the virtual display by ``rotation`` quarter turns."""
        self._rotate_to(rotation)

    def set_pixel_base(self, pixel_base: int) -> None:
        """Set the pixel width of the blocks used by four-scan remapping."""
        self.pixel_base = pixel_base

    def width(self) -> int:
        """Width of the virtual display as currently rotated."""
        return self._width

    def height(self) -> int:
        """Height of the virtual display as currently rotated."""
        return self._height


class LegacyVirtualMatrixPanel(_PanelBase):
    """The older virtual display, configured at runtime."""

    def __init__(
        self,
        display: MatrixDisplay,
        rows: int,
        cols: int,
        panel_res_x: int,
        panel_res_y: int,
        chain: ChainType = ChainType.CHAIN_NONE,
    ) -> None:
        super().__init__(display, rows, cols, panel_res_x, panel_res_y, chain)
        self.scan_rate = LegacyScanRate.NORMAL_TWO_SCAN
        self.scale_factor = 0

    def _mapped(self, x: int, y: int) -> Coords:
        return self.map_coords(x, y)

    def map_coords(self, x: int, y: int) -> Coords:
        """Map a virtual pixel to the position the DMA engine sees."""
        mapped = self._chain_coords(x, y)
        if mapped is None:
            return _OFF_DISPLAY
        return apply_legacy_scan_rate(mapped, self.scan_rate, self.pixel_base)

    def draw_pixel(self, x: int, y: int, color: Any) -> None:
        """Draw one virtual pixel, zoomed to a block when configured."""
        self._draw(x, y, self.scale_factor, color)

    def draw_pixel_rgb888(self, x: int, y: int, r: int, g: int, b: int) -> None:
        """Draw one virtual pixel from 8-bit channels."""
        mapped = self.map_coords(x, y)
        self.display.draw_pixel_rgb888(mapped.x, mapped.y, r, g, b)

    def fill_screen(self, color: Any) -> None:
        """Fill the whole display with one colour."""
        self.display.fill_screen(color)

    def fill_screen_rgb888(self, r: int, g: int, b: int) -> None:
        """Fill the whole display from 8-bit channels."""
        self.display.fill_screen_rgb888(r, g, b)

    def clear_screen(self) -> None:
        """Blank the whole display."""
        self.display.clear_screen()

    def color444(self, r: int, g: int, b: int) -> int:
        """Pack a colour the way the underlying display does (12-bit)."""
        return self.display.color444(r, g, b)

    def color565(self, r: int, g: int, b: int) -> int:
        """Pack a colour the way the underlying display does (16-bit)."""
        return self.display.color565(r, g, b)

    def flip_dma_buffer(self) -> None:
        """Swap the underlying display's buffers."""
        self.display.flip_dma_buffer()

    def set_rotation(self, rotation: int) -> None:
        """Rotate the virtual display by ``rotation`` quarter turns."""
        self._rotate_to(rotation)

    def set_physical_panel_scan_rate(
        self, rate: LegacyScanRate, pixel_base: Optional[int] = None
    ) -> None:
        """Set the panel scan rate and, optionally, the remapping pixel base."""
        self.scan_rate = LegacyScanRate(rate)
        if pixel_base is not None:
            self.pixel_base = pixel_base

    def set_zoom_factor(self, scale: int) -> None:
        """Set the zoom factor; values outside 1..4 are ignored."""
        if 0 < scale < 5:
            self.scale_factor = scale

    def width(self) -> int:
        """Width of the virtual display as currently rotated."""
        return self._width

    def height(self) -> int:
        """Height of the virtual display as currently rotated."""
        return self._height