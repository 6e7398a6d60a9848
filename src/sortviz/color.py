from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .math import clamp
from .trace import StepKind

if TYPE_CHECKING:
    import pyray as rl


@dataclass(slots=True, frozen=True)
class RGBA:
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    @classmethod
    def from_bytes(cls, r: int, g: int, b: int, a: int = 255) -> RGBA:
        inv_255 = 1.0 / 255.0
        return cls(float(r) * inv_255, float(g) * inv_255, float(b) * inv_255, float(a) * inv_255)

    @classmethod
    def from_hex(cls, text: str) -> RGBA:
        """Parse `#rrggbb` or `#rrggbbaa`."""
        digits = str(text).strip().removeprefix("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"expected #rrggbb or #rrggbbaa, got {text!r}")
        channels = [int(digits[idx : idx + 2], 16) for idx in range(0, len(digits), 2)]
        return cls.from_bytes(*channels)

    def clamped(self) -> RGBA:
        return RGBA(
            r=clamp(self.r, 0.0, 1.0),
            g=clamp(self.g, 0.0, 1.0),
            b=clamp(self.b, 0.0, 1.0),
            a=clamp(self.a, 0.0, 1.0),
        )

    def to_bytes(self) -> tuple[int, int, int, int]:
        c = self.clamped()
        return (
            int(c.r * 255.0 + 0.5),
            int(c.g * 255.0 + 0.5),
            int(c.b * 255.0 + 0.5),
            int(c.a * 255.0 + 0.5),
        )

    def to_rl(self) -> rl.Color:
        import pyray as rl

        return rl.Color(*self.to_bytes())


BLACK = RGBA(0.0, 0.0, 0.0, 1.0)
WHITE = RGBA(1.0, 1.0, 1.0, 1.0)


@dataclass(slots=True, frozen=True)
class Palette:
    background: RGBA = BLACK
    settled: RGBA = WHITE
    compare: RGBA = RGBA.from_hex("#0000ff")
    swap: RGBA = RGBA.from_hex("#ff0000")
    copy: RGBA = RGBA.from_hex("#800080")
    set: RGBA = RGBA.from_hex("#ffa500")
    reveal: RGBA = RGBA.from_hex("#00ff00")

    def for_kind(self, kind: StepKind) -> RGBA:
        match kind:
            case StepKind.START:
                return self.settled
            case StepKind.CMP:
                return self.compare
            case StepKind.SWAP:
                return self.swap
            case StepKind.COPY:
                return self.copy
            case StepKind.SET:
                return self.set
        raise ValueError(f"no color for step kind: {kind!r}")


DEFAULT_PALETTE = Palette()
