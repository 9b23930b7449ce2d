"""Electronic speed controller driven by a PWM channel."""

from __future__ import annotations

from dataclasses import dataclass, field

from . import config


def throttle_to_pulse_us(
    percent: float,
    bidirectional: bool = config.ESC_BIDIRECTIONAL,
    min_us: float = config.ESC_MIN,
    max_us: float = config.ESC_MAX,
    center_us: float = config.ESC_MID,
) -> float:
    """Map a throttle fraction to a pulse width in microseconds.

    Bidirectional throttle is clamped to [-1, 1] around ``center_us``;
    unidirectional throttle is clamped to [0, 1] from ``min_us``.
    """
    if bidirectional:
        percent = max(-1.0, min(1.0, percent))
        if percent >= 0.0:
            return center_us + (max_us - center_us) * percent
        return center_us + (center_us - min_us) * percent
    percent = max(0.0, min(1.0, percent))
    return min_us + (max_us - min_us) * percent


def pulse_to_duty(
    us: float,
    freq_hz: int = config.ESC_PWM_FREQUENCY,
    resolution_bits: int = config.ESC_PWM_RESOLUTION,
) -> int:
    """Convert a pulse width to a PWM duty value at the given frequency and resolution."""
    max_duty = (1 << resolution_bits) - 1
    return int((us * max_duty * freq_hz) / 1_000_000.0)


@dataclass
class PwmOutput:
    """PWM output that keeps the last duty written to each channel."""

    duties: dict[int, int] = field(default_factory=dict)

    def write(self, channel: int, duty: int) -> None:
        """Set the duty of ``channel``."""
        self.duties[channel] = duty


class ESCDriver:
    """One ESC attached to a GPIO pin through a PWM channel."""

    def __init__(
        self,
        pwm_gpio: int,
        freq_hz: int = config.ESC_PWM_FREQUENCY,
        resolution_bits: int = config.ESC_PWM_RESOLUTION,
        channel: int = 0,
        output: PwmOutput | None = None,
    ) -> None:
        self.pwm_gpio = pwm_gpio
        self.freq_hz = freq_hz
        self.resolution_bits = resolution_bits
        self.channel = channel
        self.output = output if output is not None else PwmOutput()

    def set_throttle(
        self,
        percent: float,
        bidirectional: bool = config.ESC_BIDIRECTIONAL,
        min_us: float = config.ESC_MIN,
        max_us: float = config.ESC_MAX,
        center_us: float = config.ESC_MID,
    ) -> int:
        """Drive the ESC at ``percent`` throttle and return the duty written."""
        us = throttle_to_pulse_us(percent, bidirectional, min_us, max_us, center_us)
        duty = pulse_to_duty(us, self.freq_hz, self.resolution_bits)
        self.output.write(self.channel, duty)
        return duty

    def __repr__(self) -> str:
        return (
            f"ESCDriver(pwm_gpio={self.pwm_gpio}, freq_hz={self.freq_hz}, "
            f"resolution_bits={self.resolution_bits}, channel={self.channel})"
        )