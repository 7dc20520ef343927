"""
core/inventory/services/cloudfront.py - CloudFront 배포 수집 (글로벌)

CloudFront는 글로벌 서비스이므로 글로벌 리전 작업에서만 수집하고
Region 컬럼은 "Global"로 표시합니다.
Origin Access Control과 정책 이름은 글로벌 이름 캐시에서 조회합니다.
"""

from __future__ import annotations

import logging

from ..collector import AWSCollector
from ..types import Column, Resource, base_columns, raw_column

logger = logging.getLogger(__name__)

GLOBAL_REGION_LABEL = "Global"


def waf_name_from_arn(web_acl_id: str | None) -> str | None:
    """WAF Web ACL ARN/ID에서 표시 이름 추출

    WAFv2 ARN(.../webacl/<name>/<uuid>)이면 <name>, 아니면 마지막 "/" 뒤 값.
    """
    if not web_acl_id:
        return None
    marker = "/webacl/"
    idx = web_acl_id.find(marker)
    if idx != -1:
        name = web_acl_id[idx + len(marker) :].split("/", 1)[0]
        if name:
            return name
    return web_acl_id.rsplit("/", 1)[-1]


class CloudFrontCollector(AWSCollector):
    name = "cloudfront"
    service = "cloudfront"
    global_only = True

    def columns(self) -> list[Column]:
        return base_columns("SubCategory1") + [
            raw_column("ID"),
            raw_column("AlternateDomain"),
            raw_column("Origin"),
            raw_column("OriginAccessControl"),
            raw_column("CachePolicy"),
            raw_column("OriginRequestPolicy"),
            raw_column("ResponseHeadersPolicy"),
            raw_column("PriceClass"),
            raw_column("WAF"),
            raw_column("Status"),
        ]

    def collect_region(self, ctx, region: str) -> list[Resource]:
        cloudfront = self.client(region)
        resources = []

        for page in self.paginate(ctx, cloudfront, "list_distributions"):
            for dist in page.get("DistributionList", {}).get("Items", []):
                resources.append(self._distribution_resource(ctx, dist))

        return resources

    def _global_name(self, ctx, resolve, identifier: str | None) -> str | None:
        if not identifier:
            return None
        if self.name_resolver is None:
            return identifier
        return resolve(ctx, identifier) or identifier

    def _distribution_resource(self, ctx, dist: dict) -> Resource:
        origins = dist.get("Origins", {}).get("Items", [])
        origin = origins[0] if origins else {}
        behavior = dist.get("DefaultCacheBehavior", {})
        resolver = self.name_resolver

        oac = self._global_name(
            ctx, resolver and resolver.get_origin_access_control_name, origin.get("OriginAccessControlId")
        )
        cache_policy = self._global_name(ctx, resolver and resolver.get_cache_policy_name, behavior.get("CachePolicyId"))
        request_policy = self._global_name(
            ctx, resolver and resolver.get_origin_request_policy_name, behavior.get("OriginRequestPolicyId")
        )
        headers_policy = self._global_name(
            ctx, resolver and resolver.get_response_headers_policy_name, behavior.get("ResponseHeadersPolicyId")
        )

        return Resource.create(
            category=self.name,
            sub_category1="Distribution",
            name=dist.get("DomainName"),
            region=GLOBAL_REGION_LABEL,
            arn=dist.get("ARN"),
            raw_data={
                "ID": dist.get("Id"),
                "AlternateDomain": dist.get("Aliases", {}).get("Items", []),
                "Origin": origin.get("DomainName"),
                "OriginAccessControl": oac,
                "CachePolicy": cache_policy,
                "OriginRequestPolicy": request_policy,
                "ResponseHeadersPolicy": headers_policy,
                "PriceClass": dist.get("PriceClass"),
                "WAF": waf_name_from_arn(dist.get("WebACLId")),
                "Status": dist.get("Status"),
            },
        )
