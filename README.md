# hub75map

Coordinate mapping for HUB75 RGB LED matrix panels.

HUB75 panels are usually driven as one long chain, but physically they are
arranged in grids, sometimes upside down, and some outdoor panels use
four-scan wiring whose electrical pixel order differs from what you see.
`hub75map` turns the pixel you want to light into the pixel the chain
expects.

## Modules

### `hub75map.mapping`

Pure functions and types, no state.

- `Coords(x, y, virt_row=0, virt_col=0)`: a frozen pixel position.
  `(-1, -1)` marks a position outside the display.
- `ChainType`: how panels are chained, seen from the LED side:
  `CHAIN_NONE`, `CHAIN_TOP_LEFT_DOWN`, `CHAIN_TOP_RIGHT_DOWN`,
  `CHAIN_BOTTOM_LEFT_UP`, `CHAIN_BOTTOM_RIGHT_UP`, and the zig-zag variants
  `CHAIN_TOP_LEFT_DOWN_ZZ`, `CHAIN_TOP_RIGHT_DOWN_ZZ`,
  `CHAIN_BOTTOM_RIGHT_UP_ZZ`, `CHAIN_BOTTOM_LEFT_UP_ZZ`.
- `ScanType`: panel scan wiring: `STANDARD_TWO_SCAN`, `FOUR_SCAN_16PX_HIGH`,
  `FOUR_SCAN_32PX_HIGH`, `FOUR_SCAN_40PX_HIGH`, `FOUR_SCAN_40_80PX_HFARCAN`,
  `FOUR_SCAN_64PX_HIGH`.
- `LegacyScanRate`: the older enumeration: `NORMAL_TWO_SCAN`,
  `NORMAL_ONE_SIXTEEN`, `FOUR_SCAN_32PX_HIGH`, `FOUR_SCAN_16PX_HIGH`,
  `FOUR_SCAN_64PX_HIGH`, `FOUR_SCAN_40PX_HIGH`.
- `PanelLayout(rows, cols, panel_res_x, panel_res_y)`: a grid of panels, with
  the properties `virtual_width`, `virtual_height` and `dma_width` (the index
  of the last pixel column of the chain).
- `rotate(x, y, rotation, width, height)`: undoes a rotation of 1, 2 or 3
  quarter turns; any other value leaves the point unchanged.
- `map_chain(x, y, chain, layout)`: maps a virtual pixel onto the chain.
- `apply_scan_type(coords, scan_type, pixel_base)`: four-scan remapping.
  `FOUR_SCAN_40_80PX_HFARCAN` always uses a pixel base of 16.
- `apply_legacy_scan_rate(coords, rate, pixel_base)`: the older remapping, in
  which `FOUR_SCAN_64PX_HIGH` behaves the same as `FOUR_SCAN_32PX_HIGH`.

### `hub75map.virtual_panel`

- `MatrixDisplay`: the protocol a display object must follow:
  `draw_pixel`, `draw_pixel_rgb888`, `fill_screen`, `fill_screen_rgb888`,
  `clear_screen`, `color444`, `color565`, `flip_dma_buffer`.
- `VirtualMatrixPanel(display, rows, cols, panel_res_x, panel_res_y,
  chain=ChainType.CHAIN_NONE, scan_type=ScanType.STANDARD_TWO_SCAN,
  scale_factor=1)`: draws each virtual pixel as a `scale_factor` x
  `scale_factor` block. A scale factor below 1 raises `ValueError`.
  `set_pixel_base()` changes the block width used by four-scan remapping.
- `LegacyVirtualMatrixPanel(display, rows, cols, panel_res_x, panel_res_y,
  chain=ChainType.CHAIN_NONE)`: configured at runtime with
  `set_physical_panel_scan_rate(rate, pixel_base=None)` and
  `set_zoom_factor(scale)` (values outside 1 to 4 are ignored).

Both panels offer `map_coords(x, y)`, `set_rotation(rotation)`, `width()`,
`height()`, and drawing calls that are passed to the display at the mapped
coordinates. A coordinate outside the (rotated) virtual display maps to
`(-1, -1)`; the display is expected to ignore it. `fill_screen`,
`clear_screen`, the colour packers and `flip_dma_buffer` go straight to the
display.

### `hub75map.leddrivers`

Start-up register sequences for driver chips, written against a small
`Gpio` protocol (`reset_pin`, `set_output`, `set_level`).

- `DriverChip`: `SHIFTREG`, `FM6124`, `FM6126A`, `ICN2038S`, `MBI5124`,
  `DP3246_SM5368`.
- `PinConfig(r1, g1, b1, r2, g2, b2, lat, oe, clk)`.
- `fm6124_init(gpio, pins, pixels_per_row)` and
  `dp3246_init(gpio, pins, pixels_per_row)`.
- `shift_driver(gpio, driver, pins, pixels_per_row)`: runs the sequence the
  chip needs and returns `True` when the chip must be clocked on the positive
  clock edge (`MBI5124`, `DP3246_SM5368`).

## Example

```python
from hub75map.mapping import ChainType, PanelLayout, map_chain

layout = PanelLayout(rows=3, cols=1, panel_res_x=64, panel_res_y=64)
print(map_chain(0, 0, ChainType.CHAIN_TOP_RIGHT_DOWN_ZZ, layout))
# Coords(x=128, y=0, virt_row=0, virt_col=0)
```

Put a `VirtualMatrixPanel` in front of a display object:

```python
from hub75map.mapping import ChainType
from hub75map.virtual_panel import VirtualMatrixPanel

panel = VirtualMatrixPanel(display, 2, 2, 64, 32, chain=ChainType.CHAIN_TOP_LEFT_DOWN)
panel.set_rotation(1)
panel.draw_pixel(10, 20, panel.color565(255, 0, 0))
```

## What it does not do

The package does not drive a panel itself. There is no frame buffer, DMA
output or text and shape drawing: a `VirtualMatrixPanel` only forwards calls
to the `MatrixDisplay` you give it, and the driver sequences only call the
`Gpio` object you give them.

## Tests

```
pip install -e .[test]
pytest
```