from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pid_controller import Controller


# -----------------------------
# Controller gains
# -----------------------------
@dataclass
class ControllerConfig:
    gain_p: float = 1.0
    gain_i: float = 0.0
    gain_d: float = 0.0
    integral_limit: Optional[float] = None

    def build(self) -> Controller:
        """Fresh controller with zeroed history."""
        return Controller(self.gain_p, self.gain_i, self.gain_d, self.integral_limit)


# -----------------------------
# Closed-loop run (time loop)
# -----------------------------
@dataclass
class SimulationConfig:
    set_point: float = 5.0
    duration: float = 10.0
    dt: float = 0.01
    # Saturation of the control signal, None = no saturation
    output_limit: Optional[float] = 100.0

    def __post_init__(self):
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.duration < 0:
            raise ValueError(f"duration must be non-negative, got {self.duration}")

    @property
    def steps(self) -> int:
        """Number of control cycles in the run."""
        return int(round(self.duration / self.dt))
