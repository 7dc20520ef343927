"""
core/naming - 식별자 이름 해석 캐시

Example:
    from core.naming import NameKind, NameResolver

    resolver = NameResolver(session)
    names = resolver.resolve_many(ctx, region, NameKind.SECURITY_GROUP, ["sg-1", "sg-2"])
"""

from .kinds import GlobalNameKind, NameKind, is_kms_identifier
from .loaders import DEFAULT_LOADERS, fetch_global_name
from .resolver import NameResolver, resolve_name_from_map, resolve_names_from_map
from .stats import CacheStats

__all__ = [
    "NameKind",
    "GlobalNameKind",
    "is_kms_identifier",
    "NameResolver",
    "CacheStats",
    "DEFAULT_LOADERS",
    "fetch_global_name",
    "resolve_name_from_map",
    "resolve_names_from_map",
]
