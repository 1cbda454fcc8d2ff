# 🎧 songbot/infrastructure/netease/__init__.py
"""🎧 Клієнти API NetEase Cloud Music: регіон, каталог, хмара, cookie, резервний резолвер."""

from .catalog_client import CatalogClient
from .cloud_api import CloudApi
from .credential_gate import LOGIN_STATUS_PATH, CredentialGate
from .fallback_resolver import FallbackResolver
from .http_client import NeteaseHttpClient
from .region_selector import RegionSelector

__all__ = [
    "CatalogClient",
    "CloudApi",
    "CredentialGate",
    "FallbackResolver",
    "LOGIN_STATUS_PATH",
    "NeteaseHttpClient",
    "RegionSelector",
]
