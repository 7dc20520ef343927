"""
core/inventory/services/rds.py - RDS 클러스터와 인스턴스 수집

클러스터 행 뒤에 멤버 인스턴스(Writer/Reader)가 이어지고,
클러스터에 속하지 않은 인스턴스는 독립 행으로 출력합니다.
멤버 인스턴스의 인증/백업/KMS 값은 클러스터 설정을 따릅니다.
"""

from __future__ import annotations

import logging

from core.naming import NameKind

from ..collector import AWSCollector
from ..types import Column, Resource, base_columns, raw_column

logger = logging.getLogger(__name__)


def kerberos_enabled(domain_memberships: list[dict] | None) -> bool | None:
    """도메인 멤버십 중 joined 상태가 있으면 True, 없으면 None"""
    for membership in domain_memberships or []:
        if membership.get("Status") == "joined":
            return True
    return None


class RDSCollector(AWSCollector):
    name = "rds"
    service = "rds"

    def columns(self) -> list[Column]:
        return base_columns("SubCategory", "SubSubCategory") + [
            raw_column("ID"),
            raw_column("Type"),
            raw_column("Engine"),
            raw_column("Version"),
            raw_column("InstanceClass"),
            raw_column("AllocatedStorage"),
            raw_column("MultiAZ"),
            raw_column("DBClusterMembers"),
            raw_column("EngineLifecycleSupport"),
            raw_column("IAMDatabaseAuthenticationEnabled"),
            raw_column("KerberosAuth"),
            raw_column("KmsKey"),
            raw_column("AvailabilityZone"),
            raw_column("BackupRetentionPeriod"),
        ]

    def _kms_name(self, ctx, region: str, key_id: str | None):
        if self.name_resolver is None:
            return key_id
        return self.name_resolver.resolve(ctx, region, NameKind.KMS, key_id)

    def collect_region(self, ctx, region: str) -> list[Resource]:
        rds = self.client(region)
        resources = []

        clusters = []
        for page in self.paginate(ctx, rds, "describe_db_clusters"):
            clusters.extend(page.get("DBClusters", []))

        instances = {}
        for page in self.paginate(ctx, rds, "describe_db_instances"):
            for inst in page.get("DBInstances", []):
                instances[inst["DBInstanceIdentifier"]] = inst

        for cluster in clusters:
            resources.extend(self._cluster_resources(ctx, region, cluster, instances))

        for inst_id, inst in instances.items():
            if inst.get("DBClusterIdentifier"):
                continue
            resources.append(
                Resource.create(
                    category=self.name,
                    sub_category1="DBInstance",
                    name=inst_id,
                    region=region,
                    raw_data={
                        "ID": inst_id,
                        "Type": "DBInstance",
                        "Engine": inst.get("Engine"),
                        "Version": inst.get("EngineVersion"),
                        "InstanceClass": inst.get("DBInstanceClass"),
                        "AllocatedStorage": inst.get("AllocatedStorage"),
                        "MultiAZ": inst.get("MultiAZ"),
                        "EngineLifecycleSupport": inst.get("EngineLifecycleSupport"),
                        "IAMDatabaseAuthenticationEnabled": inst.get("IAMDatabaseAuthenticationEnabled"),
                        "KerberosAuth": kerberos_enabled(inst.get("DomainMemberships")),
                        "KmsKey": self._kms_name(ctx, region, inst.get("KmsKeyId")),
                        "AvailabilityZone": inst.get("AvailabilityZone"),
                        "BackupRetentionPeriod": inst.get("BackupRetentionPeriod"),
                    },
                )
            )

        return resources

    def _cluster_resources(self, ctx, region: str, cluster: dict, instances: dict[str, dict]) -> list[Resource]:
        cluster_id = cluster["DBClusterIdentifier"]
        members = cluster.get("DBClusterMembers", [])
        kerberos = kerberos_enabled(cluster.get("DomainMemberships"))
        kms_key = self._kms_name(ctx, region, cluster.get("KmsKeyId"))
        lifecycle = cluster.get("EngineLifecycleSupport")

        resources = [
            Resource.create(
                category=self.name,
                sub_category1="DBCluster",
                name=cluster_id,
                region=region,
                raw_data={
                    "ID": cluster_id,
                    "Type": "DBCluster",
                    "Engine": cluster.get("Engine"),
                    "Version": cluster.get("EngineVersion"),
                    "MultiAZ": cluster.get("MultiAZ"),
                    "DBClusterMembers": str(len(members)),
                    "EngineLifecycleSupport": lifecycle,
                    "IAMDatabaseAuthenticationEnabled": cluster.get("IAMDatabaseAuthenticationEnabled"),
                    "KerberosAuth": kerberos,
                    "KmsKey": kms_key,
                    "AvailabilityZone": cluster.get("AvailabilityZones", []),
                    "BackupRetentionPeriod": cluster.get("BackupRetentionPeriod"),
                },
            )
        ]

        for member in members:
            member_id = member.get("DBInstanceIdentifier", "")
            inst = instances.get(member_id)
            if inst is None:
                continue
            role = "Writer" if member.get("IsClusterWriter") else "Reader"
            resources.append(
                Resource.create(
                    category=self.name,
                    sub_category2="DBInstance",
                    name=member_id,
                    region=region,
                    raw_data={
                        "ID": member_id,
                        "Type": f"DBInstance ({role})",
                        "Engine": inst.get("Engine"),
                        "Version": inst.get("EngineVersion"),
                        "InstanceClass": inst.get("DBInstanceClass"),
                        "AllocatedStorage": inst.get("AllocatedStorage"),
                        "MultiAZ": inst.get("MultiAZ"),
                        "EngineLifecycleSupport": inst.get("EngineLifecycleSupport") or lifecycle,
                        "IAMDatabaseAuthenticationEnabled": cluster.get("IAMDatabaseAuthenticationEnabled"),
                        "KerberosAuth": kerberos,
                        "KmsKey": kms_key,
                        "AvailabilityZone": inst.get("AvailabilityZone"),
                        "BackupRetentionPeriod": cluster.get("BackupRetentionPeriod"),
                    },
                )
            )

        return resources
