"""
Fixed-window request budgets per client IP.

Counters live in process memory and reset on restart.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter


class LimiterClass(str, Enum):
    LOGIN = "login"
    CONTACT = "contact"
    API = "api"
    PUBLIC = "public"


@dataclass(frozen=True)
class RatePolicy:
    budget: int
    window_seconds: int


DEFAULT_POLICIES: Dict[LimiterClass, RatePolicy] = {
    LimiterClass.LOGIN: RatePolicy(budget=5, window_seconds=15 * 60),
    LimiterClass.CONTACT: RatePolicy(budget=5, window_seconds=60 * 60),
    LimiterClass.API: RatePolicy(budget=100, window_seconds=15 * 60),
    LimiterClass.PUBLIC: RatePolicy(budget=300, window_seconds=15 * 60),
}


class RateLimiter:
    def __init__(self, policies: Optional[Mapping[LimiterClass, RatePolicy]] = None):
        self.policies = dict(DEFAULT_POLICIES if policies is None else policies)
        self.storage = MemoryStorage()
        self.strategy = FixedWindowRateLimiter(self.storage)
        self._items = {
            limiter_class: RateLimitItemPerSecond(policy.budget, policy.window_seconds)
            for limiter_class, policy in self.policies.items()
        }

    def consume(self, ip: str, limiter_class: LimiterClass) -> bool:
        """Count one request against the bucket; False once the budget is spent"""
        limiter_class = LimiterClass(limiter_class)
        return self.strategy.hit(self._items[limiter_class], limiter_class.value, ip)

    def reset(self) -> None:
        self.storage.reset()
