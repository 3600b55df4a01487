"""APA102-style colour rasterising in front of a network LED device."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

log = logging.getLogger(__name__)

# Maximum intensity of one channel using both the 8 bit colour PWM and the
# 5 bit global PWM: 255 * 31.
MAX_OUT = 0x1EE1

_STEP = 200
_RED_START = 6400
_GREEN_START = 1000
_BLUE_START = 1000

_RED = bytes.fromhex(
    "FF FF F9 F5 F0 ED E9 E6 E3 E0"
    " DD DA D8 D6 D3 D1 CF CE CC CA"
    " C9 C7 C6 C4 C3 C2 C1 C0 BF BE"
    " BD BC BB BA B9 B8 B7 B7 B6 B5"
    " B5 B4 B3 B3 B2 B2 B1 B1 B0 AF"
    " AF AF AE AE AD AD AC AC AC AB"
    " AB AA AA AA A9 A9 A9 A9 A8 A8"
    " A8 A7 A7 A7 A7 A6 A6 A6 A6 A5"
    " A5 A5 A5 A4 A4 A4 A4 A4 A3 A3"
    " A3 A3 A3 A3 A2 A2 A2 A2 A2 A2"
    " A1 A1 A1 A1 A1 A1 A1 A0 A0 A0"
    " A0 A0 A0 A0 A0 9F 9F 9F 9F"
)

_GREEN = bytes.fromhex(
    "38 53 65 73 7E 89 93 9D A5 AD"
    " B4 BB C1 C7 CC D1 D5 D9 DD E1"
    " E4 E8 EB EE F0 F3 F5 FF FF F6"
    " F3 F1 EF ED EB E9 E7 E6 E4 E3"
    " E1 E0 DF DD DC DB DA D9 D8 D8"
    " D7 D6 D5 D4 D4 D3 D2 D2 D1 D1"
    " D0 D0 CF CF CE CE CD CD CC CC"
    " CC CB CB CA CA CA C9 C9 C9 C9"
    " C8 C8 C8 C7 C7 C7 C7 C6 C6 C6"
    " C6 C6 C5 C5 C5 C5 C5 C4 C4 C4"
    " C4 C4 C3 C3 C3 C3 C3 C3 C3 C2"
    " C2 C2 C2 C2 C2 C2 C1 C1 C1 C1"
    " C1 C1 C1 C1 C1 C0 C0 C0 C0 C0"
    " C0 C0 C0 C0 C0 BF BF BF BF BF"
    " BF BF BF BF BF BF"
)

_BLUE = bytes.fromhex(
    "00 00 00 00 00 12 2C 3F 4F 5E"
    " 6B 78 84 8F 99 A3 AD B6 BE C6"
    " CE D5 DC E3 E9 EF F5 FF FF"
)

_U32 = 0xFFFFFFFF
_U16 = 0xFFFF


class _Writable(Protocol):
    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...


def to_rgb_fast(kelvin: int) -> tuple[int, int, int]:
    """RGB of a colour temperature in Kelvin, by table lookup and interpolation."""
    if not 0 <= kelvin <= _U16:
        raise ValueError(f"temperature out of range: {kelvin}")
    if kelvin == 6500:
        return 255, 255, 255
    kelvin = min(max(kelvin, 1000), 29999)

    def interpolate(table: bytes, start: int) -> int:
        index, rest = divmod(kelvin - start, _STEP)
        ratio = rest * 255 // _STEP
        return (ratio * table[index] + (255 - ratio) * table[index + 1]) // 255

    green = interpolate(_GREEN, _GREEN_START)
    if kelvin < 6500:
        return 255, green, interpolate(_BLUE, _BLUE_START)
    return interpolate(_RED, _RED_START), green, 255


def ramp(level: int, maximum: int) -> int:
    """Map an intensity in [0, 255] to a lightness in [0, maximum].

    Low inputs map linearly; above 1% of the output range a cubic curve is used.
    """
    if not 0 <= level <= 255:
        raise ValueError(f"level out of range: {level}")
    if not 0 <= maximum <= _U16:
        raise ValueError(f"maximum out of range: {maximum}")
    if level == 0:
        return 0
    cutoff = ((maximum + 50) & _U16) // 100
    if level < cutoff:
        return level
    shifted = level - cutoff
    in_range = (255 - cutoff) & _U32
    out_range = (maximum - cutoff) & _U32
    offset = in_range >> 1
    y = ((shifted**3 + offset) & _U32) // in_range
    return (((y * out_range + offset * offset) & _U32) // in_range // in_range + cutoff) & _U16


@dataclass
class _Lut:
    """Per-channel lookup tables, rebuilt only when their settings change."""

    key: tuple[int, int, bool] | None = None
    r: list[int] = field(default_factory=lambda: [0] * 256)
    g: list[int] = field(default_factory=lambda: [0] * 256)
    b: list[int] = field(default_factory=lambda: [0] * 256)

    def prepare(self, intensity: int, temperature: int, global_pwm: bool) -> None:
        key = (intensity, temperature, global_pwm)
        if key == self.key:
            return
        self.key = key
        tr, tg, tb = to_rgb_fast(temperature)
        if not global_pwm:
            max_r = (intensity * tr + 127) // 255
            max_g = (intensity * tg + 127) // 255
            max_b = (intensity * tb + 127) // 255
            self.r = [(j * max_r + 127) // 255 for j in range(256)]
            self.g = [(j * max_g + 127) // 255 for j in range(256)]
            self.b = [(j * max_b + 127) // 255 for j in range(256)]
            return
        max_r, max_g, max_b = (
            (MAX_OUT * intensity * t + 127 * 127) // 65025 & _U16 for t in (tr, tg, tb)
        )
        self.r = [ramp(j, max_r) for j in range(256)]
        self.g = self.r[:] if max_g == max_r else [ramp(j, max_g) for j in range(256)]
        if max_b == max_r:
            self.b = self.r[:]
        elif max_b == max_g:
            self.b = self.g[:]
        else:
            self.b = [ramp(j, max_b) for j in range(256)]


class WledApa:
    """Rasterises RGB frames to APA102 words and forwards frames to a device.

    The device receives the RGB frame as given; the rasterised words are kept
    in ``frame``.
    """

    BUFFER_SIZE = 396

    def __init__(
        self,
        device: _Writable,
        intensity: int = 255,
        temperature: int = 5000,
        disable_global_pwm: bool = True,
    ) -> None:
        self.device = device
        self.intensity = intensity
        self.temperature = temperature
        self.disable_global_pwm = disable_global_pwm
        self._buffer = bytearray(self.BUFFER_SIZE)
        self._lut = _Lut()

    @property
    def frame(self) -> bytes:
        """The most recently rasterised APA102 words."""
        return bytes(self._buffer)

    def write(self, pixels: bytes) -> int:
        """Rasterise an RGB stream and send it to the device."""
        if len(pixels) % 3 != 0:
            raise ValueError("apa102: invalid RGB stream length")
        self.raster(self._buffer, pixels)
        self.device.write(bytes(pixels))
        return len(pixels)

    def raster(self, dst: bytearray, src: bytes) -> None:
        """Convert RGB triplets in ``src`` to 4-byte APA102 words in ``dst``."""
        length = min(len(src) // 3, len(dst) // 4)
        if length == 0:
            return
        lut = self._lut
        lut.prepare(self.intensity, self.temperature, not self.disable_global_pwm)
        for i in range(length):
            s, d = 3 * i, 4 * i
            r, g, b = lut.r[src[s]], lut.g[src[s + 1]], lut.b[src[s + 2]]
            if self.disable_global_pwm:
                word = (0xFF, b, g, r)
            else:
                m = r | g | b
                if m <= 255:
                    word = (0xE1, b, g, r)
                elif m <= 511:
                    word = (0xE2, b // 2, g // 2, r // 2)
                elif m <= 1023:
                    word = (0xE4, (b + 2) // 4, (g + 2) // 4, (r + 2) // 4)
                else:
                    word = (0xFF, (b + 15) // 31, (g + 15) // 31, (r + 15) // 31)
            dst[d : d + 4] = bytes(v & 0xFF for v in word)

    def close(self) -> None:
        self.device.close()