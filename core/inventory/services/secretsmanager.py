"""
core/inventory/services/secretsmanager.py - Secrets Manager 시크릿 메타데이터 수집

시크릿 값(GetSecretValue)은 조회하지 않습니다.
"""

from __future__ import annotations

import logging

from core.naming import NameKind

from ..collector import AWSCollector
from ..types import Column, Resource, attr_column, base_columns, raw_column

logger = logging.getLogger(__name__)


class SecretsManagerCollector(AWSCollector):
    name = "secretsmanager"
    service = "secretsmanager"

    def columns(self) -> list[Column]:
        return base_columns("SubCategory1") + [
            attr_column("ARN", "arn"),
            raw_column("Description"),
            raw_column("KmsKey"),
            raw_column("RotationEnabled"),
            raw_column("RotationLambdaARN"),
            raw_column("LastAccessedDate"),
            raw_column("LastRotatedDate"),
            raw_column("LastChangedDate"),
        ]

    def collect_region(self, ctx, region: str) -> list[Resource]:
        client = self.client(region)
        resources = []

        for page in self.paginate(ctx, client, "list_secrets"):
            for secret in page.get("SecretList", []):
                kms_key = secret.get("KmsKeyId")
                if kms_key and self.name_resolver is not None:
                    kms_key = self.name_resolver.resolve(ctx, region, NameKind.KMS, kms_key)

                resources.append(
                    Resource.create(
                        category=self.name,
                        sub_category1="Secret",
                        name=secret.get("Name"),
                        region=region,
                        arn=secret.get("ARN"),
                        raw_data={
                            "Description": secret.get("Description"),
                            "KmsKey": kms_key,
                            "RotationEnabled": secret.get("RotationEnabled"),
                            "RotationLambdaARN": secret.get("RotationLambdaARN"),
                            "LastAccessedDate": secret.get("LastAccessedDate"),
                            "LastRotatedDate": secret.get("LastRotatedDate"),
                            "LastChangedDate": secret.get("LastChangedDate"),
                        },
                    )
                )

        return resources
