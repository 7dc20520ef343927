"""
core/inventory/services/kms.py - KMS 키 수집

키 이름은 첫 번째 alias, 없으면 키 ID입니다.
"""

from __future__ import annotations

import logging

from botocore.exceptions import ClientError

from ..collector import AWSCollector
from ..types import Column, Resource, attr_column, base_columns, raw_column

logger = logging.getLogger(__name__)


class KMSCollector(AWSCollector):
    name = "kms"
    service = "kms"

    def columns(self) -> list[Column]:
        return base_columns("SubCategory1") + [
            attr_column("ARN", "arn"),
            raw_column("Description"),
            raw_column("KeyUsage"),
            raw_column("KeyManager"),
            raw_column("State"),
        ]

    def collect_region(self, ctx, region: str) -> list[Resource]:
        kms = self.client(region)
        resources = []

        for page in self.paginate(ctx, kms, "list_keys"):
            for key in page.get("Keys", []):
                key_id = key["KeyId"]
                try:
                    metadata = kms.describe_key(KeyId=key_id)["KeyMetadata"]
                except ClientError as e:
                    logger.debug(f"KMS 키 조회 실패: {key_id} {e}")
                    continue

                key_name = key_id
                try:
                    aliases = kms.list_aliases(KeyId=key_id).get("Aliases", [])
                    if aliases:
                        key_name = aliases[0]["AliasName"]
                except ClientError as e:
                    logger.debug(f"KMS alias 조회 실패: {key_id} {e}")

                resources.append(
                    Resource.create(
                        category=self.name,
                        sub_category1="Key",
                        name=key_name,
                        region=region,
                        arn=metadata.get("Arn"),
                        raw_data={
                            "Description": metadata.get("Description"),
                            "KeyUsage": metadata.get("KeyUsage"),
                            "KeyManager": metadata.get("KeyManager"),
                            "State": metadata.get("KeyState"),
                        },
                    )
                )

        return resources
