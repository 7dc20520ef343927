"""
core/inventory/services/dynamodb.py - DynamoDB 테이블 수집
"""

from __future__ import annotations

import logging

from botocore.exceptions import ClientError

from core.naming import NameKind

from ..collector import AWSCollector
from ..types import Column, Resource, attr_column, base_columns, raw_column

logger = logging.getLogger(__name__)


class DynamoDBCollector(AWSCollector):
    name = "dynamodb"
    service = "dynamodb"

    def columns(self) -> list[Column]:
        return base_columns("SubCategory1") + [
            attr_column("ARN", "arn"),
            raw_column("AttributeDefinitions"),
            raw_column("BillingMode"),
            raw_column("StreamEnabled"),
            raw_column("GlobalTable"),
            raw_column("PointInTimeRecovery"),
            raw_column("RecoveryPeriodInDays"),
            raw_column("EarliestRestorableDateTime"),
            raw_column("LatestRestorableDateTime"),
            raw_column("DeletionProtection"),
            raw_column("TTLAttribute"),
            raw_column("SSE"),
            raw_column("KmsKey"),
            raw_column("ItemCount"),
            raw_column("TableSize(Bytes)", "TableSize"),
            raw_column("Status"),
            raw_column("CreationDateTime"),
        ]

    def collect_region(self, ctx, region: str) -> list[Resource]:
        dynamodb = self.client(region)
        resources = []

        for page in self.paginate(ctx, dynamodb, "list_tables"):
            for table_name in page.get("TableNames", []):
                try:
                    table = dynamodb.describe_table(TableName=table_name)["Table"]
                except ClientError as e:
                    # 목록 조회 후 삭제된 테이블
                    logger.debug(f"테이블 조회 실패: {table_name} {e}")
                    continue
                resources.append(self._table_resource(ctx, dynamodb, region, table))

        return resources

    def _table_resource(self, ctx, dynamodb, region: str, table: dict) -> Resource:
        table_name = table["TableName"]

        pitr = {}
        try:
            backups = dynamodb.describe_continuous_backups(TableName=table_name)
            pitr = backups.get("ContinuousBackupsDescription", {}).get("PointInTimeRecoveryDescription", {})
        except ClientError as e:
            logger.debug(f"PITR 조회 실패: {table_name} {e}")

        ttl_attribute = ""
        try:
            ttl = dynamodb.describe_time_to_live(TableName=table_name)
            ttl_attribute = ttl.get("TimeToLiveDescription", {}).get("AttributeName", "")
        except ClientError as e:
            logger.debug(f"TTL 조회 실패: {table_name} {e}")

        sse = table.get("SSEDescription", {})
        kms_key = ""
        if sse.get("KMSMasterKeyArn"):
            kms_key = sse["KMSMasterKeyArn"]
            if self.name_resolver is not None:
                kms_key = self.name_resolver.resolve(ctx, region, NameKind.KMS, kms_key)

        return Resource.create(
            category=self.name,
            sub_category1="Table",
            name=table_name,
            region=region,
            arn=table.get("TableArn"),
            raw_data={
                "AttributeDefinitions": [
                    f"{a.get('AttributeName')} ({a.get('AttributeType')})" for a in table.get("AttributeDefinitions", [])
                ],
                "BillingMode": table.get("BillingModeSummary", {}).get("BillingMode"),
                "StreamEnabled": table.get("StreamSpecification", {}).get("StreamEnabled"),
                "GlobalTable": table.get("GlobalTableVersion"),
                "PointInTimeRecovery": pitr.get("PointInTimeRecoveryStatus"),
                "RecoveryPeriodInDays": pitr.get("RecoveryPeriodInDays"),
                "EarliestRestorableDateTime": pitr.get("EarliestRestorableDateTime"),
                "LatestRestorableDateTime": pitr.get("LatestRestorableDateTime"),
                "DeletionProtection": table.get("DeletionProtectionEnabled"),
                "TTLAttribute": ttl_attribute,
                "SSE": sse.get("Status"),
                "KmsKey": kms_key,
                "ItemCount": table.get("ItemCount"),
                "TableSize": table.get("TableSizeBytes"),
                "Status": table.get("TableStatus"),
                "CreationDateTime": table.get("CreationDateTime"),
            },
        )
