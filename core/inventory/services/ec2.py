"""
core/inventory/services/ec2.py - EC2 인스턴스 수집

VPC/Subnet 표시 이름은 실행 단위 이름 캐시에서 조회합니다.
"""

from __future__ import annotations

import logging

from core.aws.values import get_tag_value
from core.naming import NameKind

from ..collector import AWSCollector
from ..types import Column, Resource, base_columns, raw_column

logger = logging.getLogger(__name__)


class EC2Collector(AWSCollector):
    name = "ec2"
    service = "ec2"

    def columns(self) -> list[Column]:
        return base_columns("SubCategory1") + [
            raw_column("InstanceID"),
            raw_column("InstanceType"),
            raw_column("ImageID"),
            raw_column("VPC"),
            raw_column("Subnet"),
            raw_column("SecurityGroup"),
            raw_column("State"),
        ]

    def collect_region(self, ctx, region: str) -> list[Resource]:
        ec2 = self.client(region)
        resources = []

        for page in self.paginate(ctx, ec2, "describe_instances"):
            for reservation in page.get("Reservations", []):
                for instance in reservation.get("Instances", []):
                    resources.append(self._instance_resource(ctx, region, instance))

        return resources

    def _instance_resource(self, ctx, region: str, instance: dict) -> Resource:
        vpc_id = instance.get("VpcId")
        subnet_id = instance.get("SubnetId")
        if self.name_resolver is not None:
            vpc = self.name_resolver.resolve(ctx, region, NameKind.VPC, vpc_id)
            subnet = self.name_resolver.resolve(ctx, region, NameKind.SUBNET, subnet_id)
        else:
            vpc, subnet = vpc_id, subnet_id

        return Resource.create(
            category=self.name,
            sub_category1="Instance",
            name=get_tag_value(instance.get("Tags"), "Name"),
            region=region,
            raw_data={
                "InstanceID": instance.get("InstanceId"),
                "InstanceType": instance.get("InstanceType"),
                "ImageID": instance.get("ImageId"),
                "VPC": vpc,
                "Subnet": subnet,
                "SecurityGroup": [sg.get("GroupName") for sg in instance.get("SecurityGroups", [])],
                "State": instance.get("State", {}).get("Name"),
            },
        )
