# pid_controller.py
"""
Generic PID (Proportional, Integral, Derivative) controller.

The controller compares a desired set point with a measured value and
returns a correction to be fed back into the controlled system. It works
with any numeric type supporting + - * /, negation, ordering and a zero
value: ints (fixed-point style), floats, Fraction, Decimal, numpy scalars.
"""

import logging
import numbers
from typing import Generic, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)


class Numeric(Protocol):
    def __add__(self, other): ...
    def __sub__(self, other): ...
    def __mul__(self, other): ...
    def __truediv__(self, other): ...
    def __neg__(self): ...
    def __lt__(self, other) -> bool: ...
    def __gt__(self, other) -> bool: ...


N = TypeVar("N", bound=Numeric)


def _divide(numerator, denominator):
    # Integers stay integers, truncating toward zero
    if isinstance(numerator, numbers.Integral) and isinstance(denominator, numbers.Integral):
        quotient = abs(numerator) // abs(denominator)
        if (numerator < 0) != (denominator < 0):
            return -quotient
        return quotient
    return numerator / denominator


class Controller(Generic[N]):
    """Single-channel PID controller.

    integral_limit, when given, clamps the accumulated integral into
    [-integral_limit, integral_limit] every cycle. None means unclamped,
    while 0 forces the integral term to zero.
    """

    def __init__(
        self,
        gain_p: N,
        gain_i: N,
        gain_d: N,
        integral_limit: Optional[N] = None,
        zero: Optional[N] = None,
    ):
        self._gain_p = gain_p
        self._gain_i = gain_i
        self._gain_d = gain_d
        self._integral_limit = integral_limit

        if zero is None:
            zero = gain_p - gain_p
        self._zero = zero

        self._previous_error = zero
        self._previous_integral = zero
        self._previous_output = zero

    def calculate(self, set_point: N, measured_value: N, delta_time: N) -> N:
        """Advance the controller by one control cycle.

        Args:
            set_point: desired state of the system
            measured_value: current state of the system
            delta_time: time since the previous call, in any unit the
                caller uses consistently

        Returns:
            Correction to apply to the system. When delta_time is zero or
            negative the previous output is returned and nothing changes.
        """
        if not delta_time > self._zero:
            logger.debug(
                "Skipping cycle with non-positive delta_time=%r, reusing output %r",
                delta_time,
                self._previous_output,
            )
            return self._previous_output

        error = set_point - measured_value

        # Whole accumulated history is rescaled by the current interval
        integral = (self._previous_integral + error) * delta_time
        if self._integral_limit is not None:
            limit = self._integral_limit
            if integral > limit:
                integral = limit
            elif integral < -limit:
                integral = -limit

        derivative = _divide(error - self._previous_error, delta_time)

        output = (
            error * self._gain_p
            + integral * self._gain_i
            + derivative * self._gain_d
        )

        self._previous_error = error
        self._previous_integral = integral
        self._previous_output = output
        return output

    @property
    def gain_p(self) -> N:
        return self._gain_p

    @gain_p.setter
    def gain_p(self, value: N):
        self._gain_p = value

    @property
    def gain_i(self) -> N:
        return self._gain_i

    @gain_i.setter
    def gain_i(self, value: N):
        self._gain_i = value

    @property
    def gain_d(self) -> N:
        return self._gain_d

    @gain_d.setter
    def gain_d(self, value: N):
        self._gain_d = value

    @property
    def integral_limit(self) -> Optional[N]:
        return self._integral_limit

    def set_integral_limit(self, value: N):
        """Install a clamp on the integral. A clamp cannot be removed once set."""
        if value is None:
            raise TypeError(
                "integral_limit cannot be removed, construct a new Controller instead"
            )
        self._integral_limit = value

    @property
    def previous_error(self) -> N:
        return self._previous_error

    @property
    def previous_integral(self) -> N:
        return self._previous_integral

    @property
    def previous_output(self) -> N:
        return self._previous_output

    def __repr__(self):
        return (
            f"{type(self).__name__}(gain_p={self._gain_p!r}, gain_i={self._gain_i!r}, "
            f"gain_d={self._gain_d!r}, integral_limit={self._integral_limit!r}, "
            f"previous_error={self._previous_error!r}, "
            f"previous_integral={self._previous_integral!r}, "
            f"previous_output={self._previous_output!r})"
        )
