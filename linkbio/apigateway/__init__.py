from .app import create_app
from .container import ServiceContainer, build_container
from .settings import GatewaySettings

__all__ = [
    "create_app",
    "ServiceContainer",
    "build_container",
    "GatewaySettings",
]
