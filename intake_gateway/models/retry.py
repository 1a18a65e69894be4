"""
Retry policy for outbound ServiceNow calls
"""
import random
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RetryPolicy(BaseModel):
    """
    Exponential backoff with signed jitter.

    Attributes:
        base_delay: Delay (seconds) before the first retry
        factor: Multiplier applied per additional attempt
        max_attempts: Hard ceiling on total attempts (first call included)
        jitter: Fraction of the computed delay added or subtracted at random
    """
    model_config = ConfigDict(frozen=True)

    base_delay: float = Field(0.5, ge=0.0)
    factor: float = Field(2.0, ge=0.0)
    max_attempts: int = Field(5, ge=1)
    jitter: float = Field(0.15, ge=0.0, le=1.0)

    def should_retry(self, attempt: int) -> bool:
        """True if another attempt is allowed after `attempt` failed"""
        return attempt < self.max_attempts

    def backoff_delay(self, attempt: int, sample: Optional[float] = None) -> float:
        """
        Delay before retrying after `attempt` (1-based) failed.

        Args:
            attempt: Number of the attempt that just failed
            sample: Jitter sample in [-1, 1]; drawn uniformly when omitted

        Returns:
            Delay in seconds, never negative
        """
        delay = self.base_delay * (self.factor ** (attempt - 1))
        if sample is None:
            sample = random.uniform(-1.0, 1.0)
        return max(0.0, delay + delay * self.jitter * sample)
