"""
core/inventory/services/elb.py - ELBv2 로드 밸런서, 타겟 그룹, 리스너 수집

로드 밸런서 한 행 뒤에 하위 타겟 그룹/리스너 행이 이어집니다.
WAF 연결 정보는 wafv2 GetWebACLForResource로 조회합니다.
"""

from __future__ import annotations

import logging

from botocore.exceptions import BotoCoreError, ClientError

from core.naming import NameKind

from ..collector import AWSCollector
from ..types import Column, Resource, attr_column, base_columns, raw_column

logger = logging.getLogger(__name__)


class ELBCollector(AWSCollector):
    name = "elb"
    service = "elbv2"

    def columns(self) -> list[Column]:
        return base_columns("SubCategory", "SubSubCategory") + [
            attr_column("ARN", "arn"),
            raw_column("DNSName"),
            raw_column("Type"),
            raw_column("VPC"),
            raw_column("AvailabilityZone"),
            raw_column("SecurityGroup"),
            raw_column("WAF"),
            raw_column("Protocol"),
            raw_column("Port"),
            raw_column("HealthCheck"),
            raw_column("SSLPolicy"),
            raw_column("State"),
            raw_column("CreatedTime"),
        ]

    def collect_region(self, ctx, region: str) -> list[Resource]:
        elbv2 = self.client(region)
        resources = []

        load_balancers = []
        for page in self.paginate(ctx, elbv2, "describe_load_balancers"):
            load_balancers.extend(page.get("LoadBalancers", []))

        for lb in load_balancers:
            lb_arn = lb["LoadBalancerArn"]
            resources.append(self._load_balancer_resource(ctx, region, lb))
            resources.extend(self._target_groups(ctx, elbv2, region, lb_arn))
            resources.extend(self._listeners(ctx, elbv2, region, lb_arn))

        return resources

    def _web_acl_arn(self, region: str, lb_arn: str) -> str | None:
        try:
            wafv2 = self.client(region, "wafv2")
            return wafv2.get_web_acl_for_resource(ResourceArn=lb_arn).get("WebACL", {}).get("ARN")
        except (ClientError, BotoCoreError) as e:
            logger.debug(f"WAF 연결 조회 실패: {lb_arn} {e}")
            return None

    def _load_balancer_resource(self, ctx, region: str, lb: dict) -> Resource:
        vpc = lb.get("VpcId")
        security_groups = lb.get("SecurityGroups", [])
        if self.name_resolver is not None:
            vpc = self.name_resolver.resolve(ctx, region, NameKind.VPC, vpc)
            security_groups = self.name_resolver.resolve_many(ctx, region, NameKind.SECURITY_GROUP, security_groups)

        return Resource.create(
            category=self.name,
            sub_category1="LoadBalancer",
            name=lb.get("LoadBalancerName"),
            region=region,
            arn=lb["LoadBalancerArn"],
            raw_data={
                "DNSName": lb.get("DNSName"),
                "Type": lb.get("Type"),
                "VPC": vpc,
                "AvailabilityZone": [az.get("ZoneName") for az in lb.get("AvailabilityZones", [])],
                "SecurityGroup": security_groups,
                "WAF": self._web_acl_arn(region, lb["LoadBalancerArn"]),
                "State": lb.get("State", {}).get("Code"),
                "CreatedTime": lb.get("CreatedTime"),
            },
        )

    def _target_groups(self, ctx, elbv2, region: str, lb_arn: str) -> list[Resource]:
        resources = []
        try:
            for page in self.paginate(ctx, elbv2, "describe_target_groups", LoadBalancerArn=lb_arn):
                for tg in page.get("TargetGroups", []):
                    resources.append(
                        Resource.create(
                            category=self.name,
                            sub_category2="TargetGroup",
                            name=tg.get("TargetGroupName"),
                            region=region,
                            arn=tg.get("TargetGroupArn"),
                            raw_data={
                                "Type": tg.get("TargetType"),
                                "Protocol": tg.get("Protocol"),
                                "Port": tg.get("Port"),
                                "HealthCheck": tg.get("HealthCheckPath"),
                            },
                        )
                    )
        except ClientError as e:
            logger.debug(f"타겟 그룹 조회 실패: {lb_arn} {e}")
        return resources

    def _listeners(self, ctx, elbv2, region: str, lb_arn: str) -> list[Resource]:
        resources = []
        try:
            for page in self.paginate(ctx, elbv2, "describe_listeners", LoadBalancerArn=lb_arn):
                for listener in page.get("Listeners", []):
                    protocol = listener.get("Protocol", "")
                    port = listener.get("Port", 0)
                    resources.append(
                        Resource.create(
                            category=self.name,
                            sub_category2="Listener",
                            name=f"{protocol}:{port}",
                            region=region,
                            arn=listener.get("ListenerArn"),
                            raw_data={
                                "Protocol": protocol,
                                "Port": port,
                                "SSLPolicy": listener.get("SslPolicy"),
                            },
                        )
                    )
        except ClientError as e:
            logger.debug(f"리스너 조회 실패: {lb_arn} {e}")
        return resources
