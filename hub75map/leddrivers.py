"""Start-up sequences for the LED driver chips found on HUB75 panels.

Some driver chips keep configuration registers that have to be written by
bit-banging the panel's data, clock and latch lines before the DMA engine
takes them over.  The sequences here do that through a small GPIO interface.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence

__all__ = [
    "DriverChip",
    "PinConfig",
    "Gpio",
    "fm6124_init",
    "dp3246_init",
    "shift_driver",
]

_log = logging.getLogger(__name__)

LOW = 0
HIGH = 1

# FM6124: global brightness in REG1, output enable bit in REG2.
_FM6124_REG1 = (0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0)
_FM6124_REG2 = (0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0)

# DP3246, MSB first.  REG1: OE widening 0, current gain 0xFF.
# REG2: blanking potential 11111, inflection point 111, all features off.
_DP3246_REG1 = (0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 1, 1)
_DP3246_REG2 = (1, 1, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0)


class DriverChip(Enum):
    """LED driver chips that may need special handling at start-up."""

    SHIFTREG = "shiftreg"
    FM6124 = "fm6124"
    FM6126A = "fm6126a"
    ICN2038S = "icn2038s"
    MBI5124 = "mbi5124"
    DP3246_SM5368 = "dp3246_sm5368"


@dataclass(frozen=True)
class PinConfig:
    """GPIO numbers of the HUB75 connector lines used by the start-up sequences."""

    r1: int
    g1: int
    b1: int
    r2: int
    g2: int
    b2: int
    lat: int
    oe: int
    clk: int

    @property
    def data_pins(self) -> tuple[int, ...]:
        """The six colour data lines."""
        return (self.r1, self.r2, self.g1, self.g2, self.b1, self.b2)

    @property
    def all_pins(self) -> tuple[int, ...]:
        """The data lines followed by clock, latch and output enable."""
        return self.data_pins + (self.clk, self.lat, self.oe)


class Gpio(Protocol):
    """Minimal GPIO access needed to bit-bang a panel."""

    def reset_pin(self, pin: int) -> None:
        """Return a pin to its plain GPIO state."""

    def set_output(self, pin: int) -> None:
        """Make a pin an output."""

    def set_level(self, pin: int, level: int) -> None:
        """Drive a pin low (0) or high (1)."""


def _prepare_pins(gpio: Gpio, pins: PinConfig) -> None:
    for pin in pins.all_pins:
        gpio.reset_pin(pin)
        gpio.set_output(pin)
        gpio.set_level(pin, LOW)


def _clock_pulse(gpio: Gpio, pins: PinConfig) -> None:
    gpio.set_level(pins.clk, HIGH)
    gpio.set_level(pins.clk, LOW)


def _set_data(gpio: Gpio, pins: PinConfig, level: int) -> None:
    for pin in pins.data_pins:
        gpio.set_level(pin, level)


def _shift_register(
    gpio: Gpio,
    pins: PinConfig,
    pixels_per_row: int,
    bits: Sequence[int],
    latch_from: int,
    latch_only_at: bool = False,
) -> None:
    """Shift ``bits`` repeatedly across the row, raising the latch near the end."""
    for column in range(pixels_per_row):
        _set_data(gpio, pins, bits[column % len(bits)])
        raise_latch = column == latch_from if latch_only_at else column >= latch_from
        if raise_latch:
            gpio.set_level(pins.lat, HIGH)
        _clock_pulse(gpio, pins)


def _clear_with_latch(gpio: Gpio, pins: PinConfig, pixels_per_row: int) -> None:
    """Clock a whole row, raising the latch for the last three clocks."""
    for column in range(pixels_per_row):
        if column == pixels_per_row - 3:
            gpio.set_level(pins.lat, HIGH)
        _clock_pulse(gpio, pins)


def fm6124_init(gpio: Gpio, pins: PinConfig, pixels_per_row: int) -> None:
    """Write the FM6124/FM6126A control registers and enable the output."""
    _log.info("initializing FM6124 driver")
    _prepare_pins(gpio, pins)
    gpio.set_level(pins.oe, HIGH)

    # REG1 is latched by holding the latch high for the last 11 clocks.
    _shift_register(gpio, pins, pixels_per_row, _FM6124_REG1, pixels_per_row - 11)
    gpio.set_level(pins.lat, LOW)

    # REG2 is latched by holding the latch high for the last 12 clocks.
    _shift_register(gpio, pins, pixels_per_row, _FM6124_REG2, pixels_per_row - 12)
    gpio.set_level(pins.lat, LOW)

    _set_data(gpio, pins, LOW)
    for _ in range(pixels_per_row):
        _clock_pulse(gpio, pins)

    gpio.set_level(pins.lat, HIGH)
    _clock_pulse(gpio, pins)
    gpio.set_level(pins.lat, LOW)
    gpio.set_level(pins.oe, LOW)
    _clock_pulse(gpio, pins)


def dp3246_init(gpio: Gpio, pins: PinConfig, pixels_per_row: int) -> None:
    """Write the DP3246 control registers and enable the output."""
    _log.info("initializing DP3246 driver")
    _prepare_pins(gpio, pins)
    gpio.set_level(pins.oe, HIGH)

    _clear_with_latch(gpio, pins, pixels_per_row)
    gpio.set_level(pins.lat, LOW)

    _shift_register(
        gpio, pins, pixels_per_row, _DP3246_REG1, pixels_per_row - 11, latch_only_at=True
    )
    gpio.set_level(pins.lat, LOW)

    _shift_register(
        gpio, pins, pixels_per_row, _DP3246_REG2, pixels_per_row - 12, latch_only_at=True
    )
    gpio.set_level(pins.lat, LOW)
    _clock_pulse(gpio, pins)

    _set_data(gpio, pins, LOW)
    _clear_with_latch(gpio, pins, pixels_per_row)

    gpio.set_level(pins.lat, LOW)
    gpio.set_level(pins.oe, LOW)
    _clock_pulse(gpio, pins)


def shift_driver(
    gpio: Gpio, driver: DriverChip, pins: PinConfig, pixels_per_row: int
) -> bool:
    """Run the start-up sequence ``driver`` needs before DMA output begins.

    Returns True when the chip must be clocked on the positive clock edge.
    """
    driver = DriverChip(driver)
    if driver in (DriverChip.ICN2038S, DriverChip.FM6124, DriverChip.FM6126A):
        fm6124_init(gpio, pins, pixels_per_row)
        return False
    if driver is DriverChip.DP3246_SM5368:
        dp3246_init(gpio, pins, pixels_per_row)
        return True
    if driver is DriverChip.MBI5124:
        # The MBI5124 latch resets on the rising clock edge while high.
        return True
    return False