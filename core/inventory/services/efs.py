"""
core/inventory/services/efs.py - EFS 파일 시스템, 마운트 타겟, 액세스 포인트 수집

ID 컬럼은 Resource.arn에 저장한 리소스 ID를 표시합니다.
"""

from __future__ import annotations

import logging

from botocore.exceptions import ClientError

from core.naming import NameKind

from ..collector import AWSCollector
from ..types import Column, Resource, attr_column, base_columns, raw_column

logger = logging.getLogger(__name__)


class EFSCollector(AWSCollector):
    name = "efs"
    service = "efs"

    def columns(self) -> list[Column]:
        return base_columns("SubCategory", "SubSubCategory") + [
            attr_column("ID", "arn"),
            raw_column("Type"),
            raw_column("Performance"),
            raw_column("Throughput"),
            raw_column("Encrypted"),
            raw_column("KmsKey"),
            raw_column("Size"),
            raw_column("Subnet"),
            raw_column("IPAddress"),
            raw_column("SecurityGroup"),
            raw_column("Path"),
            raw_column("UID"),
            raw_column("GID"),
            raw_column("State"),
            raw_column("CreationTime"),
        ]

    def _resolve(self, ctx, region: str, kind: NameKind, identifier):
        if self.name_resolver is None:
            return identifier
        return self.name_resolver.resolve(ctx, region, kind, identifier)

    def collect_region(self, ctx, region: str) -> list[Resource]:
        efs = self.client(region)
        resources = []

        for page in self.paginate(ctx, efs, "describe_file_systems"):
            for fs in page.get("FileSystems", []):
                fs_id = fs["FileSystemId"]
                resources.append(
                    Resource.create(
                        category=self.name,
                        sub_category1="FileSystem",
                        name=fs.get("Name"),
                        region=region,
                        arn=fs_id,
                        raw_data={
                            "Type": "FileSystem",
                            "Performance": fs.get("PerformanceMode"),
                            "Throughput": fs.get("ThroughputMode"),
                            "Encrypted": fs.get("Encrypted"),
                            "KmsKey": self._resolve(ctx, region, NameKind.KMS, fs.get("KmsKeyId")),
                            "Size": fs.get("SizeInBytes", {}).get("Value"),
                            "State": fs.get("LifeCycleState"),
                            "CreationTime": fs.get("CreationTime"),
                        },
                    )
                )
                resources.extend(self._mount_targets(ctx, efs, region, fs_id))
                resources.extend(self._access_points(ctx, efs, region, fs_id))

        return resources

    def _mount_targets(self, ctx, efs, region: str, fs_id: str) -> list[Resource]:
        try:
            mount_targets = efs.describe_mount_targets(FileSystemId=fs_id).get("MountTargets", [])
        except ClientError as e:
            logger.debug(f"마운트 타겟 조회 실패: {fs_id} {e}")
            return []

        resources = []
        for mt in mount_targets:
            mt_id = mt["MountTargetId"]
            sg_ids = []
            try:
                sg_ids = efs.describe_mount_target_security_groups(MountTargetId=mt_id).get("SecurityGroups", [])
            except ClientError as e:
                logger.debug(f"마운트 타겟 보안 그룹 조회 실패: {mt_id} {e}")

            if self.name_resolver is not None:
                sg_names = self.name_resolver.resolve_many(ctx, region, NameKind.SECURITY_GROUP, sg_ids)
            else:
                sg_names = sg_ids

            resources.append(
                Resource.create(
                    category=self.name,
                    sub_category1="MountTarget",
                    name=mt_id,
                    region=region,
                    arn=mt_id,
                    raw_data={
                        "Type": "MountTarget",
                        "Subnet": self._resolve(ctx, region, NameKind.SUBNET, mt.get("SubnetId")),
                        "IPAddress": mt.get("IpAddress"),
                        "SecurityGroup": sg_names,
                        "State": mt.get("LifeCycleState"),
                    },
                )
            )
        return resources

    def _access_points(self, ctx, efs, region: str, fs_id: str) -> list[Resource]:
        resources = []
        try:
            for page in self.paginate(ctx, efs, "describe_access_points", FileSystemId=fs_id):
                for ap in page.get("AccessPoints", []):
                    posix = ap.get("PosixUser", {})
                    resources.append(
                        Resource.create(
                            category=self.name,
                            sub_category1="AccessPoint",
                            name=ap.get("Name"),
                            region=region,
                            arn=ap.get("AccessPointId"),
                            raw_data={
                                "Type": "AccessPoint",
                                "Path": ap.get("RootDirectory", {}).get("Path") or "/",
                                "UID": posix.get("Uid"),
                                "GID": posix.get("Gid"),
                                "State": ap.get("LifeCycleState"),
                            },
                        )
                    )
        except ClientError as e:
            logger.debug(f"액세스 포인트 조회 실패: {fs_id} {e}")
        return resources
