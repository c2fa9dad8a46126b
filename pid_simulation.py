# pid_simulation.py
"""Closed-loop harness driving a Controller against a simple plant."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from pid_config import SimulationConfig
from pid_controller import Controller


class FirstOrderPlant:
    """x' = (-x + u) / time_constant, integrated with explicit Euler."""

    def __init__(self, value: float = 0.0, time_constant: float = 1.0):
        self.value = value
        self.time_constant = time_constant

    def step(self, u: float, dt: float) -> float:
        self.value += (-self.value + u) * dt / self.time_constant
        return self.value


@dataclass
class SimulationResult:
    time: np.ndarray
    output: np.ndarray
    control: np.ndarray
    error: np.ndarray


def run_closed_loop(
    controller: Controller,
    plant: FirstOrderPlant,
    config: SimulationConfig,
) -> SimulationResult:
    steps = config.steps
    time = np.arange(steps) * config.dt

    output_history = np.empty(steps)
    control_history = np.empty(steps)
    error_history = np.empty(steps)

    for i in range(steps):
        x = plant.value
        error = config.set_point - x
        u = controller.calculate(config.set_point, x, config.dt)

        if config.output_limit is not None:
            u = float(np.clip(u, -config.output_limit, config.output_limit))

        output_history[i] = plant.step(u, config.dt)
        control_history[i] = u
        error_history[i] = error

    return SimulationResult(
        time=time,
        output=output_history,
        control=control_history,
        error=error_history,
    )
