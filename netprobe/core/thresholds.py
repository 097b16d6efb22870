"""
Warning/critical thresholds for monitoring checks.

Checks consume collected values; their thresholds must pass ``validate``
before a check runs. Mapping a breach to a plugin exit code is left to the
monitoring frontend.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import ThresholdError


@dataclass
class CheckThresholds:
    """Lower and upper bounds for warning and critical states."""

    warning_min: Optional[float] = None
    warning_max: Optional[float] = None
    critical_min: Optional[float] = None
    critical_max: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CheckThresholds":
        return cls(
            warning_min=data.get("warningMin"),
            warning_max=data.get("warningMax"),
            critical_min=data.get("criticalMin"),
            critical_max=data.get("criticalMax"),
        )

    def has_thresholds(self) -> bool:
        return any(v is not None for v in (self.warning_min, self.warning_max, self.critical_min, self.critical_max))

    def validate(self):
        """Raise ``ThresholdError`` if the bounds are inconsistent."""
        if self.warning_min is not None and self.warning_max is not None and self.warning_min > self.warning_max:
            raise ThresholdError("warning min is greater than warning max")
        if self.critical_min is not None and self.critical_max is not None and self.critical_min > self.critical_max:
            raise ThresholdError("critical min is greater than critical max")
        # the warning range must lie inside the critical range
        if self.warning_min is not None and self.critical_min is not None and self.warning_min < self.critical_min:
            raise ThresholdError("warning min is smaller than critical min")
        if self.warning_max is not None and self.critical_max is not None and self.warning_max > self.critical_max:
            raise ThresholdError("warning max is greater than critical max")

    def state(self, value: float) -> str:
        """Classify ``value`` as ``ok``, ``warning`` or ``critical``."""
        if (self.critical_min is not None and value < self.critical_min) or (
            self.critical_max is not None and value > self.critical_max
        ):
            return "critical"
        if (self.warning_min is not None and value < self.warning_min) or (
            self.warning_max is not None and value > self.warning_max
        ):
            return "warning"
        return "ok"
