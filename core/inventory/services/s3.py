"""
core/inventory/services/s3.py - S3 버킷 수집 (글로벌)

버킷 목록은 글로벌 리전에서 한 번 조회하고, 버킷별 설정은
버킷이 위치한 리전의 client로 조회합니다.
설정 조회 실패(미설정 포함)는 기본값으로 표시하고 수집은 계속합니다.
"""

from __future__ import annotations

import logging

from botocore.exceptions import ClientError

from core.aws.values import format_json_indent

from ..collector import AWSCollector
from ..types import Column, Resource, attr_column, base_columns, raw_column

logger = logging.getLogger(__name__)


def bucket_region(location_constraint: str | None, default: str) -> str:
    """GetBucketLocation 응답을 리전 이름으로 변환 (None -> default, EU -> eu-west-1)"""
    if not location_constraint:
        return default
    if location_constraint == "EU":
        return "eu-west-1"
    return location_constraint


class S3Collector(AWSCollector):
    name = "s3"
    service = "s3"
    global_only = True

    def columns(self) -> list[Column]:
        return base_columns("SubCategory") + [
            attr_column("ARN", "arn"),
            raw_column("Encryption"),
            raw_column("Versioning"),
            raw_column("PABBlockPublicACLs"),
            raw_column("PABIgnorePublicACLs"),
            raw_column("PABBlockPublicPolicy"),
            raw_column("PABRestrictPublicBuckets"),
            raw_column("AccessLogARN"),
            raw_column("LifecycleRules"),
            raw_column("CreationDate"),
        ]

    def collect_region(self, ctx, region: str) -> list[Resource]:
        s3 = self.client(region)
        resources = []

        response = s3.list_buckets()
        for bucket in response.get("Buckets", []):
            ctx.raise_if_cancelled()
            resources.append(self._bucket_resource(s3, region, bucket))

        return resources

    def _bucket_resource(self, s3, region: str, bucket: dict) -> Resource:
        name = bucket["Name"]

        location = None
        try:
            location = s3.get_bucket_location(Bucket=name).get("LocationConstraint")
        except ClientError as e:
            logger.debug(f"버킷 리전 조회 실패: {name} {e}")
        located = bucket_region(location, region)
        client = self.client(located)

        raw_data = {
            "Encryption": "None",
            "Versioning": "Disabled",
            "AccessLogARN": "",
            "LifecycleRules": "",
            "CreationDate": bucket.get("CreationDate"),
        }

        try:
            rules = client.get_bucket_encryption(Bucket=name)["ServerSideEncryptionConfiguration"]["Rules"]
            default = rules[0].get("ApplyServerSideEncryptionByDefault") if rules else None
            if default:
                raw_data["Encryption"] = default.get("SSEAlgorithm")
        except ClientError as e:
            logger.debug(f"버킷 암호화 조회 실패: {name} {e}")

        try:
            status = client.get_bucket_versioning(Bucket=name).get("Status")
            if status:
                raw_data["Versioning"] = status
        except ClientError as e:
            logger.debug(f"버킷 버전 관리 조회 실패: {name} {e}")

        try:
            pab = client.get_public_access_block(Bucket=name)["PublicAccessBlockConfiguration"]
            raw_data["PABBlockPublicACLs"] = pab.get("BlockPublicAcls")
            raw_data["PABIgnorePublicACLs"] = pab.get("IgnorePublicAcls")
            raw_data["PABBlockPublicPolicy"] = pab.get("BlockPublicPolicy")
            raw_data["PABRestrictPublicBuckets"] = pab.get("RestrictPublicBuckets")
        except ClientError as e:
            logger.debug(f"버킷 퍼블릭 액세스 차단 조회 실패: {name} {e}")

        try:
            target = client.get_bucket_logging(Bucket=name).get("LoggingEnabled", {}).get("TargetBucket")
            if target:
                raw_data["AccessLogARN"] = f"arn:aws:s3:::{target}"
        except ClientError as e:
            logger.debug(f"버킷 로깅 조회 실패: {name} {e}")

        try:
            rules = client.get_bucket_lifecycle_configuration(Bucket=name).get("Rules", [])
            raw_data["LifecycleRules"] = "\n".join(format_json_indent(rule) for rule in rules)
        except ClientError as e:
            logger.debug(f"버킷 수명 주기 조회 실패: {name} {e}")

        return Resource.create(
            category=self.name,
            sub_category1="Bucket",
            name=name,
            region=located,
            arn=f"arn:aws:s3:::{name}",
            raw_data=raw_data,
        )
