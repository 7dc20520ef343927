"""
core/aws - AWS 공통 헬퍼 (세션, client, ARN, 값 정규화)
"""

from .arn import ARN, extract_account_id, get_resource_name_from_arn, parse_arn
from .client import ClientFactory, get_client
from .values import (
    NOT_AVAILABLE,
    format_json_indent,
    get_map_value,
    get_tag_value,
    normalize_raw_data,
    string_value,
)

__all__ = [
    "ARN",
    "parse_arn",
    "get_resource_name_from_arn",
    "extract_account_id",
    "ClientFactory",
    "get_client",
    "NOT_AVAILABLE",
    "string_value",
    "normalize_raw_data",
    "get_map_value",
    "format_json_indent",
    "get_tag_value",
]
