"""
core/inventory/services/vpc.py - VPC와 하위 네트워크 리소스 수집

VPC 한 행 뒤에 해당 VPC의 하위 리소스가 이어지는 부모/자식 순서로 출력합니다.
순서를 유지해야 하므로 병합 후 정렬하지 않습니다.

VPC별 출력 순서:
    VPC -> PublicSubnet -> PrivateSubnet -> RouteTable -> InternetGateway
    -> NATGateway -> NetworkACL -> SecurityGroup -> Endpoint
"""

from __future__ import annotations

import logging

from core.aws.values import NOT_AVAILABLE, get_tag_value

from ..collector import AWSCollector
from ..types import Column, Resource, base_columns, raw_column

logger = logging.getLogger(__name__)


def _format_nacl_entry(entry: dict) -> str:
    port_range = entry.get("PortRange")
    ports = f"{port_range.get('From', 0)}-{port_range.get('To', 0)}" if port_range else "-"
    egress = "true" if entry.get("Egress") else "false"
    return (
        f"Rule#: {entry.get('RuleNumber', 0)} | Protocol: {entry.get('Protocol', NOT_AVAILABLE)} | "
        f"RuleAction: {entry.get('RuleAction', '')} | Egress: {egress} | "
        f"CIDR: {entry.get('CidrBlock', NOT_AVAILABLE)} | PortRange: {ports}"
    )


def _format_permissions(permissions: list[dict]) -> list[str]:
    rules = []
    for perm in permissions:
        for ip_range in perm.get("IpRanges", []):
            rules.append(
                f"Protocol: {perm.get('IpProtocol', NOT_AVAILABLE)} | "
                f"FromPort: {perm.get('FromPort', 0)} | ToPort: {perm.get('ToPort', 0)} | "
                f"CIDR: {ip_range.get('CidrIp', NOT_AVAILABLE)}"
            )
    return rules


class VPCCollector(AWSCollector):
    name = "vpc"
    service = "ec2"

    def should_sort(self) -> bool:
        return False

    def columns(self) -> list[Column]:
        return base_columns("SubCategory", "SubSubCategory") + [
            raw_column("ID"),
            raw_column("Description"),
            raw_column("CIDR"),
            raw_column("PublicIP"),
            raw_column("Inbound"),
            raw_column("Outbound"),
            raw_column("Type"),
            raw_column("Service"),
            raw_column("Subnets"),
            raw_column("RouteTables"),
            raw_column("SecurityGroups"),
            raw_column("Settings"),
            raw_column("State"),
        ]

    def collect_region(self, ctx, region: str) -> list[Resource]:
        ec2 = self.client(region)
        resources = []

        for page in self.paginate(ctx, ec2, "describe_vpcs"):
            for vpc in page.get("Vpcs", []):
                resources.extend(self._collect_vpc(ctx, ec2, region, vpc))

        return resources

    def _child(self, region: str, kind: str, name, raw_data: dict) -> Resource:
        return Resource.create(
            category=self.name,
            sub_category2=kind,
            name=name,
            region=region,
            raw_data=raw_data,
        )

    def _list(self, ctx, ec2, operation: str, key: str, vpc_id: str, filter_name: str = "vpc-id") -> list[dict]:
        # describe_nat_gateways만 파라미터 이름이 Filter
        param = "Filter" if operation == "describe_nat_gateways" else "Filters"
        items = []
        for page in self.paginate(ctx, ec2, operation, **{param: [{"Name": filter_name, "Values": [vpc_id]}]}):
            items.extend(page.get(key, []))
        return items

    def _collect_vpc(self, ctx, ec2, region: str, vpc: dict) -> list[Resource]:
        vpc_id = vpc["VpcId"]
        resources = [
            Resource.create(
                category=self.name,
                sub_category1="VPC",
                name=get_tag_value(vpc.get("Tags"), "Name"),
                region=region,
                raw_data={"ID": vpc_id, "CIDR": vpc.get("CidrBlock"), "State": vpc.get("State")},
            )
        ]

        route_tables = self._list(ctx, ec2, "describe_route_tables", "RouteTables", vpc_id)
        resources.extend(self._subnet_resources(ctx, ec2, region, vpc_id, route_tables))

        for rt in route_tables:
            resources.append(
                self._child(region, "RouteTable", get_tag_value(rt.get("Tags"), "Name"), {"ID": rt.get("RouteTableId")})
            )

        for igw in self._list(ctx, ec2, "describe_internet_gateways", "InternetGateways", vpc_id, "attachment.vpc-id"):
            resources.append(
                self._child(
                    region,
                    "InternetGateway",
                    get_tag_value(igw.get("Tags"), "Name"),
                    {"ID": igw.get("InternetGatewayId"), "State": "attached"},
                )
            )

        for nat in self._list(ctx, ec2, "describe_nat_gateways", "NatGateways", vpc_id):
            public_ips = []
            for addr in nat.get("NatGatewayAddresses", []):
                ip = addr.get("PublicIp")
                if ip:
                    public_ips.append(f"{ip} (Primary)" if addr.get("IsPrimary") else ip)
            resources.append(
                self._child(
                    region,
                    "NATGateway",
                    get_tag_value(nat.get("Tags"), "Name"),
                    {"ID": nat.get("NatGatewayId"), "PublicIP": public_ips, "State": nat.get("State")},
                )
            )

        for nacl in self._list(ctx, ec2, "describe_network_acls", "NetworkAcls", vpc_id):
            resources.append(
                self._child(
                    region,
                    "NetworkACL",
                    get_tag_value(nacl.get("Tags"), "Name"),
                    {
                        "ID": nacl.get("NetworkAclId"),
                        "Settings": [_format_nacl_entry(e) for e in nacl.get("Entries", [])],
                    },
                )
            )

        for sg in self._list(ctx, ec2, "describe_security_groups", "SecurityGroups", vpc_id):
            resources.append(
                self._child(
                    region,
                    "SecurityGroup",
                    sg.get("GroupName"),
                    {
                        "ID": sg.get("GroupId"),
                        "Description": sg.get("Description"),
                        "Inbound": _format_permissions(sg.get("IpPermissions", [])),
                        "Outbound": _format_permissions(sg.get("IpPermissionsEgress", [])),
                    },
                )
            )

        for ep in self._list(ctx, ec2, "describe_vpc_endpoints", "VpcEndpoints", vpc_id):
            resources.append(
                self._child(
                    region,
                    "Endpoint",
                    get_tag_value(ep.get("Tags"), "Name"),
                    {
                        "ID": ep.get("VpcEndpointId"),
                        "Type": ep.get("VpcEndpointType"),
                        "Service": ep.get("ServiceName"),
                        "Subnets": ep.get("SubnetIds", []),
                        "RouteTables": ep.get("RouteTableIds", []),
                        "SecurityGroups": [g.get("GroupId") for g in ep.get("Groups", [])],
                        "State": ep.get("State"),
                    },
                )
            )

        return resources

    def _subnet_resources(self, ctx, ec2, region: str, vpc_id: str, route_tables: list[dict]) -> list[Resource]:
        """서브넷을 IGW 경로 유무로 Public/Private 분류 (Public 먼저)"""
        main_rt_id = ""
        rt_has_igw: dict[str, bool] = {}
        subnet_to_rt: dict[str, str] = {}

        for rt in route_tables:
            rt_id = rt.get("RouteTableId", "")
            for assoc in rt.get("Associations", []):
                if assoc.get("Main"):
                    main_rt_id = rt_id
                if assoc.get("SubnetId"):
                    subnet_to_rt[assoc["SubnetId"]] = rt_id
            rt_has_igw[rt_id] = any(str(r.get("GatewayId", "")).startswith("igw-") for r in rt.get("Routes", []))

        public, private = [], []
        for subnet in self._list(ctx, ec2, "describe_subnets", "Subnets", vpc_id):
            rt_id = subnet_to_rt.get(subnet.get("SubnetId", ""), main_rt_id)
            is_public = rt_has_igw.get(rt_id, False)
            resource = self._child(
                region,
                "PublicSubnet" if is_public else "PrivateSubnet",
                get_tag_value(subnet.get("Tags"), "Name"),
                {"ID": subnet.get("SubnetId"), "CIDR": subnet.get("CidrBlock")},
            )
            (public if is_public else private).append(resource)

        return public + private
