"""
core/naming/loaders.py - 식별자 -> 이름 bulk 조회

종류별로 페이지네이션 API 한 묶음을 호출해 {id: name} 맵을 만듭니다.
이름이 없으면 id 자체를 값으로 사용합니다.

각 loader의 시그니처: loader(client, ctx) -> dict[str, str]
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from core.aws.values import get_tag_value

from .kinds import KMS_ALIAS_PREFIX, GlobalNameKind, NameKind

if TYPE_CHECKING:
    from core.parallel.context import CollectionContext

TAG_NAME_KEY = "Name"

Loader = Callable[[Any, "CollectionContext | None"], dict[str, str]]


def _paginate(
    client: Any,
    operation: str,
    ctx: CollectionContext | None,
    **kwargs: Any,
) -> Iterator[dict[str, Any]]:
    """페이지 사이마다 취소 여부를 확인하며 페이지 순회"""
    paginator = client.get_paginator(operation)
    for page in paginator.paginate(**kwargs):
        if ctx is not None:
            ctx.raise_if_cancelled()
        yield page


def _load_by_tag(
    client: Any,
    ctx: CollectionContext | None,
    operation: str,
    list_key: str,
    id_key: str,
    tags_key: str = "Tags",
    **kwargs: Any,
) -> dict[str, str]:
    names: dict[str, str] = {}
    for page in _paginate(client, operation, ctx, **kwargs):
        for item in page.get(list_key, []):
            item_id = item.get(id_key, "")
            if not item_id:
                continue
            names[item_id] = get_tag_value(item.get(tags_key), TAG_NAME_KEY) or item_id
    return names


def load_vpc_names(client: Any, ctx: CollectionContext | None = None) -> dict[str, str]:
    return _load_by_tag(client, ctx, "describe_vpcs", "Vpcs", "VpcId")


def load_subnet_names(client: Any, ctx: CollectionContext | None = None) -> dict[str, str]:
    return _load_by_tag(client, ctx, "describe_subnets", "Subnets", "SubnetId")


def load_network_interface_names(client: Any, ctx: CollectionContext | None = None) -> dict[str, str]:
    return _load_by_tag(
        client, ctx, "describe_network_interfaces", "NetworkInterfaces", "NetworkInterfaceId", tags_key="TagSet"
    )


def load_volume_names(client: Any, ctx: CollectionContext | None = None) -> dict[str, str]:
    return _load_by_tag(client, ctx, "describe_volumes", "Volumes", "VolumeId")


def load_snapshot_names(client: Any, ctx: CollectionContext | None = None) -> dict[str, str]:
    return _load_by_tag(client, ctx, "describe_snapshots", "Snapshots", "SnapshotId", OwnerIds=["self"])


def load_security_group_names(client: Any, ctx: CollectionContext | None = None) -> dict[str, str]:
    """보안 그룹은 태그가 아닌 GroupName 사용"""
    names: dict[str, str] = {}
    for page in _paginate(client, "describe_security_groups", ctx):
        for sg in page.get("SecurityGroups", []):
            sg_id = sg.get("GroupId", "")
            if sg_id:
                names[sg_id] = sg.get("GroupName") or sg_id
    return names


def load_image_names(client: Any, ctx: CollectionContext | None = None) -> dict[str, str]:
    """자기 소유 AMI: 이미지 Name > Name 태그 > id"""
    names: dict[str, str] = {}
    for page in _paginate(client, "describe_images", ctx, Owners=["self"]):
        for image in page.get("Images", []):
            image_id = image.get("ImageId", "")
            if image_id:
                names[image_id] = image.get("Name") or get_tag_value(image.get("Tags"), TAG_NAME_KEY) or image_id
    return names


def load_kms_key_names(client: Any, ctx: CollectionContext | None = None) -> dict[str, str]:
    """KMS 키 별칭 맵

    별칭 하나를 키 ID, 키 ARN, 별칭 이름 세 가지 키로 동시에 등록합니다.
    별칭이 없는 키는 맵에 없으며 조회 시 식별자 그대로 반환됩니다.
    """
    key_arns: dict[str, str] = {}
    for page in _paginate(client, "list_keys", ctx):
        for key in page.get("Keys", []):
            key_arns[key.get("KeyId", "")] = key.get("KeyArn", "")

    names: dict[str, str] = {}
    for page in _paginate(client, "list_aliases", ctx):
        for alias in page.get("Aliases", []):
            key_id = alias.get("TargetKeyId")
            alias_name = alias.get("AliasName")
            if not key_id or not alias_name:
                continue
            if not alias_name.startswith(KMS_ALIAS_PREFIX):
                alias_name = KMS_ALIAS_PREFIX + alias_name

            names[key_id] = alias_name
            key_arn = key_arns.get(key_id)
            if key_arn:
                names[key_arn] = alias_name
            names[alias_name] = alias_name
    return names


DEFAULT_LOADERS: dict[NameKind, Loader] = {
    NameKind.VPC: load_vpc_names,
    NameKind.SUBNET: load_subnet_names,
    NameKind.SECURITY_GROUP: load_security_group_names,
    NameKind.NETWORK_INTERFACE: load_network_interface_names,
    NameKind.VOLUME: load_volume_names,
    NameKind.SNAPSHOT: load_snapshot_names,
    NameKind.IMAGE: load_image_names,
    NameKind.KMS: load_kms_key_names,
}


# =============================================================================
# 글로벌 (CloudFront) 항목별 조회
# =============================================================================

# kind -> (operation, 응답 루트 키, config 키)
_GLOBAL_OPERATIONS: dict[GlobalNameKind, tuple[str, str, str]] = {
    GlobalNameKind.ORIGIN_ACCESS_CONTROL: (
        "get_origin_access_control",
        "OriginAccessControl",
        "OriginAccessControlConfig",
    ),
    GlobalNameKind.CACHE_POLICY: ("get_cache_policy", "CachePolicy", "CachePolicyConfig"),
    GlobalNameKind.ORIGIN_REQUEST_POLICY: (
        "get_origin_request_policy",
        "OriginRequestPolicy",
        "OriginRequestPolicyConfig",
    ),
    GlobalNameKind.RESPONSE_HEADERS_POLICY: (
        "get_response_headers_policy",
        "ResponseHeadersPolicy",
        "ResponseHeadersPolicyConfig",
    ),
}


def fetch_global_name(client: Any, kind: GlobalNameKind, identifier: str) -> str:
    """CloudFront 정책/OAC 하나의 이름 조회 (응답에 이름이 없으면 빈 문자열)"""
    operation, root_key, config_key = _GLOBAL_OPERATIONS[kind]
    response = getattr(client, operation)(Id=identifier)
    config = (response.get(root_key) or {}).get(config_key) or {}
    return config.get("Name") or ""
