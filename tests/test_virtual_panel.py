import itertools

import pytest

from hub75map.mapping import ChainType, Coords, LegacyScanRate, ScanType
from hub75map.virtual_panel import LegacyVirtualMatrixPanel, VirtualMatrixPanel


class RecordingDisplay:
    def __init__(self):
        self.calls = []

    def draw_pixel(self, x, y, color):
        self.calls.append(("pixel", x, y, color))

    def draw_pixel_rgb888(self, x, y, r, g, b):
        self.calls.append(("pixel888", x, y, r, g, b))

    def fill_screen(self, color):
        self.calls.append(("fill", color))

    def fill_screen_rgb888(self, r, g, b):
        self.calls.append(("fill888", r, g, b))

    def clear_screen(self):
        self.calls.append(("clear",))

    def color444(self, r, g, b):
        return ("444", r, g, b)

    def color565(self, r, g, b):
        return ("565", r, g, b)

    def flip_dma_buffer(self):
        self.calls.append(("flip",))


def make_panel(cls=VirtualMatrixPanel, rows=3, cols=1, res_x=64, res_y=64, **kw):
    display = RecordingDisplay()
    return cls(display, rows, cols, res_x, res_y, **kw), display


@pytest.mark.parametrize(
    "x, y, expected",
    [(0, 0, (128, 0)), (10, 64 * 3 - 1, (10, 63)), (16, 64 * 2 - 1, (80, 63))],
)
@pytest.mark.parametrize("cls", [VirtualMatrixPanel, LegacyVirtualMatrixPanel])
def test_top_right_down_zigzag_cases(cls, x, y, expected):
    panel, _ = make_panel(cls, chain=ChainType.CHAIN_TOP_RIGHT_DOWN_ZZ)
    mapped = panel.map_coords(x, y)
    assert (mapped.x, mapped.y) == expected


@pytest.mark.parametrize("chain", list(ChainType))
@pytest.mark.parametrize("cls", [VirtualMatrixPanel, LegacyVirtualMatrixPanel])
def test_chain_mapping_is_injective_and_in_range(cls, chain):
    panel, _ = make_panel(cls, rows=2, cols=2, res_x=8, res_y=8, chain=chain)
    seen = set()
    for x, y in itertools.product(range(panel.width()), range(panel.height())):
        c = panel.map_coords(x, y)
        if chain is ChainType.CHAIN_NONE:
            assert (c.x, c.y) == (x, y)
        else:
            assert 0 <= c.x <= panel.layout.dma_width
            assert 0 <= c.y < 8
        seen.add((c.x, c.y))
    assert len(seen) == panel.width() * panel.height()


@pytest.mark.parametrize("cls", [VirtualMatrixPanel, LegacyVirtualMatrixPanel])
@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (64, 0), (0, 192)])
def test_out_of_range_maps_off_display(cls, x, y):
    panel, display = make_panel(cls)
    assert panel.map_coords(x, y) == Coords(-1, -1)
    panel.draw_pixel(x, y, 7)
    assert display.calls == [("pixel", -1, -1, 7)]


def test_rotation_swaps_dimensions():
    panel = VirtualMatrixPanel(RecordingDisplay(), 1, 2, 64, 32)
    assert (panel.width(), panel.height()) == (128, 32)
    panel.set_rotation(1)
    assert (panel.width(), panel.height()) == (32, 128)
    assert panel.rotation == 1
    panel.set_rotation(2)
    assert (panel.width(), panel.height()) == (128, 32)


def test_rotation_out_of_range_keeps_rotation_but_updates_size():
    panel = VirtualMatrixPanel(RecordingDisplay(), 1, 2, 64, 32)
    panel.set_rotation(5)
    assert panel.rotation == 0
    assert (panel.width(), panel.height()) == (32, 128)


def test_half_turn_maps_corner_to_opposite_corner():
    panel = VirtualMatrixPanel(RecordingDisplay(), 2, 2, 16, 16)
    expected = panel.map_coords(panel.width() - 1, panel.height() - 1)
    panel.set_rotation(2)
    assert panel.map_coords(0, 0) == expected


def test_quarter_turns_compose_to_half_turn():
    panel = VirtualMatrixPanel(RecordingDisplay(), 1, 1, 16, 16)
    panel.set_rotation(2)
    half = [panel.map_coords(x, y) for x in range(16) for y in range(16)]
    panel.set_rotation(0)
    straight = [panel.map_coords(15 - x, 15 - y) for x in range(16) for y in range(16)]
    assert half == straight


def test_scale_factor_draws_block():
    display = RecordingDisplay()
    panel = VirtualMatrixPanel(display, 1, 1, 16, 16, scale_factor=2)
    panel.draw_pixel(1, 1, 9)
    expected = [
        ("pixel", panel.map_coords(2 + dx, 2 + dy).x, panel.map_coords(2 + dx, 2 + dy).y, 9)
        for dx in range(2)
        for dy in range(2)
    ]
    assert display.calls == expected
    assert len({call[1:3] for call in display.calls}) == 4


def test_scale_factor_must_be_positive():
    with pytest.raises(ValueError):
        VirtualMatrixPanel(RecordingDisplay(), 3, 1, 64, 64, scale_factor=0)


def test_four_scan_32px_is_injective_and_in_range():
    panel = VirtualMatrixPanel(
        RecordingDisplay(), 1, 1, 32, 32, scan_type=ScanType.FOUR_SCAN_32PX_HIGH
    )
    seen = set()
    for x, y in itertools.product(range(32), range(32)):
        c = panel.map_coords(x, y)
        assert 0 <= c.x < 64
        assert 0 <= c.y < 16
        seen.add((c.x, c.y))
    assert len(seen) == 32 * 32


def test_rgb888_draw_uses_mapped_coords():
    display = RecordingDisplay()
    panel = VirtualMatrixPanel(display, 3, 1, 64, 64, chain=ChainType.CHAIN_TOP_RIGHT_DOWN_ZZ)
    panel.draw_pixel_rgb888(0, 0, 1, 2, 3)
    assert display.calls == [("pixel888", 128, 0, 1, 2, 3)]


@pytest.mark.parametrize("cls", [VirtualMatrixPanel, LegacyVirtualMatrixPanel])
def test_delegation(cls):
    panel, display = make_panel(cls)
    panel.fill_screen(5)
    panel.fill_screen_rgb888(1, 2, 3)
    panel.clear_screen()
    panel.flip_dma_buffer()
    assert display.calls == [("fill", 5), ("fill888", 1, 2, 3), ("clear",), ("flip",)]
    assert panel.color565(1, 2, 3) == ("565", 1, 2, 3)
    assert panel.color444(4, 5, 6) == ("444", 4, 5, 6)


def test_legacy_rotation_swaps_dimensions():
    panel = LegacyVirtualMatrixPanel(RecordingDisplay(), 1, 2, 64, 32)
    panel.set_rotation(3)
    assert panel.rotation == 3
    assert (panel.width(), panel.height()) == (32, 128)


def test_legacy_rgb888_draw_uses_mapped_coords():
    display = RecordingDisplay()
    panel = LegacyVirtualMatrixPanel(
        display, 3, 1, 64, 64, chain=ChainType.CHAIN_TOP_RIGHT_DOWN_ZZ
    )
    panel.draw_pixel_rgb888(10, 64 * 3 - 1, 4, 5, 6)
    assert display.calls == [("pixel888", 10, 63, 4, 5, 6)]


def test_legacy_zoom_factor_limits():
    panel, display = make_panel(LegacyVirtualMatrixPanel, rows=1, cols=1, res_x=16, res_y=16)
    panel.set_zoom_factor(5)
    assert panel.scale_factor == 0
    panel.draw_pixel(1, 1, 3)
    assert len(display.calls) == 1
    panel.set_zoom_factor(3)
    assert panel.scale_factor == 3
    display.calls.clear()
    panel.draw_pixel(1, 1, 3)
    assert len(display.calls) == 9
    assert {c[1:3] for c in display.calls} == {
        (panel.map_coords(3 + dx, 3 + dy).x, panel.map_coords(3 + dx, 3 + dy).y)
        for dx in range(3)
        for dy in range(3)
    }


def test_legacy_scan_rate_and_pixel_base():
    panel, _ = make_panel(LegacyVirtualMatrixPanel, rows=1, cols=1, res_x=32, res_y=32)
    panel.set_physical_panel_scan_rate(LegacyScanRate.FOUR_SCAN_16PX_HIGH)
    assert panel.scan_rate is LegacyScanRate.FOUR_SCAN_16PX_HIGH
    assert panel.pixel_base == 32
    panel.set_physical_panel_scan_rate(LegacyScanRate.FOUR_SCAN_32PX_HIGH, 16)
    assert panel.pixel_base == 16


def test_legacy_64px_matches_32px():
    a, _ = make_panel(LegacyVirtualMatrixPanel, rows=1, cols=1, res_x=32, res_y=64)
    b, _ = make_panel(LegacyVirtualMatrixPanel, rows=1, cols=1, res_x=32, res_y=64)
    a.set_physical_panel_scan_rate(LegacyScanRate.FOUR_SCAN_64PX_HIGH)
    b.set_physical_panel_scan_rate(LegacyScanRate.FOUR_SCAN_32PX_HIGH)
    for x, y in itertools.product(range(0, 32, 3), range(64)):
        assert a.map_coords(x, y) == b.map_coords(x, y)


def test_legacy_normal_rates_leave_chain_coords():
    panel, _ = make_panel(LegacyVirtualMatrixPanel, chain=ChainType.CHAIN_TOP_RIGHT_DOWN_ZZ)
    panel.set_physical_panel_scan_rate(LegacyScanRate.NORMAL_ONE_SIXTEEN)
    assert panel.map_coords(16, 64 * 2 - 1) == Coords(80, 63)