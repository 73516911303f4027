from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from ..authservice import AuthConfig, AuthService, InMemoryUserRepo, SystemClock
from ..authservice.contracts import ClockPort
from ..linkservice import InMemoryLinkRepo, LinkService
from ..productservice import InMemoryProductRepo, ProductService
from ..ratelimiter import RateLimiterService
from ..userservice import UserService


@dataclass
class ServiceContainer:
    """Everything one app instance talks to. Built once per create_app()."""
    auth: AuthService
    users: UserService
    links: LinkService
    products: ProductService
    rate_limiter: RateLimiterService


def build_container(
    cfg: Optional[AuthConfig] = None,
    *,
    clock: Optional[ClockPort] = None,
    rate_limiter: Optional[RateLimiterService] = None,
) -> ServiceContainer:
    cfg = cfg or AuthConfig()
    clock = clock or SystemClock()
    user_repo = InMemoryUserRepo()
    auth = AuthService(
        user_repo=user_repo,
        cfg=cfg,
        clock=clock,
        logger=logging.getLogger("linkbio.authservice"),
    )
    return ServiceContainer(
        auth=auth,
        users=UserService(users=user_repo, hasher=auth.hasher, logger=logging.getLogger("linkbio.userservice")),
        links=LinkService(links=InMemoryLinkRepo(), users=user_repo, logger=logging.getLogger("linkbio.linkservice")),
        products=ProductService(products=InMemoryProductRepo(), users=user_repo, logger=logging.getLogger("linkbio.productservice")),
        rate_limiter=rate_limiter or RateLimiterService(),
    )
