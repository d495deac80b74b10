"""Wave session configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WaveConfig:
    """Immutable tuning for one collapsing-floor session.

    The count formulas were tuned by play-testing and have no derivation;
    they are kept as plain fields so a tuning pass can change them.

    Attributes:
        warning_duration: Time all remaining tiles flash before a collapse.
        wave_interval: Hold between waves.
        await_grid_timeout: How long to poll the tile source before giving up.
        wave_divisor: Waves 1 and 2 each drop ``N // wave_divisor`` tiles.
        flash_margin: Extra tiles in the flash subset of waves 1 and 2.
        wave3_survivors: Tiles left standing after wave 3.
        final_drop: Tiles dropped by wave 4.
        treasure_lift: Upward offset of the treasure above its tile.
    """

    warning_duration: float = 3.0
    wave_interval: float = 5.0
    await_grid_timeout: float = 15.0
    wave_divisor: int = 4
    flash_margin: int = 2
    wave3_survivors: int = 2
    final_drop: int = 1
    treasure_lift: float = 0.5

    def __post_init__(self) -> None:
        if self.warning_duration < 0:
            raise ValueError("warning_duration must be non-negative")
        if self.wave_interval < 0:
            raise ValueError("wave_interval must be non-negative")
        if self.await_grid_timeout <= 0:
            raise ValueError("await_grid_timeout must be positive")
        if self.wave_divisor <= 0:
            raise ValueError("wave_divisor must be positive")
        for name in ("flash_margin", "wave3_survivors", "final_drop"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
