"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so the settings loader and the CLI can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_TRUSTED_HOSTS = ("osu.ppy.sh", "dev.ppy.sh", "ppy.sh")


@dataclass(frozen=True)
class LinkerConfig:
    """Schemes and hosts the link matchers recognize."""

    external_schemes: Tuple[str, ...] = ("http", "https")
    internal_scheme: str = "osu"
    multiplayer_scheme: str = "osump"
    trusted_hosts: Tuple[str, ...] = field(default=DEFAULT_TRUSTED_HOSTS)

    def __post_init__(self) -> None:
        schemes = [*self.external_schemes, self.internal_scheme, self.multiplayer_scheme]
        for scheme in schemes:
            if not scheme or not scheme.isalpha() or scheme != scheme.lower():
                raise ValueError(f"Unsupported link scheme: {scheme!r}")

    @property
    def application_schemes(self) -> Tuple[str, ...]:
        return (self.internal_scheme, self.multiplayer_scheme)


@dataclass(frozen=True)
class EchoConfig:
    """Local echo settings consumed by the echo coordinator."""

    confirm_delay_ms: int = 250

    def __post_init__(self) -> None:
        if self.confirm_delay_ms < 0:
            raise ValueError(f"confirm_delay_ms must be >= 0, got {self.confirm_delay_ms}")

    @property
    def confirm_delay(self) -> float:
        return self.confirm_delay_ms / 1000
