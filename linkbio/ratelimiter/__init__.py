from .contracts import Policy, ConsumeResult
from .store import CounterStore, InMemoryStore
from .service import RateLimiterService
from .middleware import RateLimiterMiddleware

__all__ = [
    "Policy",
    "ConsumeResult",
    "CounterStore",
    "InMemoryStore",
    "RateLimiterService",
    "RateLimiterMiddleware",
]
