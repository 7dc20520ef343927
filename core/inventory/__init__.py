"""
core/inventory - 리소스 모델, 수집기 인터페이스, 레지스트리

Example:
    from core.inventory import build_default_registry

    registry = build_default_registry(ClientFactory(session), name_resolver=resolver)
    selected, unknown = registry.filter(["ec2", "vpc"])
"""

from .collector import AWSCollector, Collector
from .registry import CollectorRegistry, build_default_registry
from .types import Column, Resource, attr_column, base_columns, raw_column

__all__ = [
    "Resource",
    "Column",
    "attr_column",
    "raw_column",
    "base_columns",
    "Collector",
    "AWSCollector",
    "CollectorRegistry",
    "build_default_registry",
]
