"""
tests/core/inventory/test_inventory_services_moto.py - 내장 수집기 통합 테스트 (moto)
"""

import pytest

from core.inventory.services.dynamodb import DynamoDBCollector
from core.inventory.services.kms import KMSCollector
from core.inventory.services.s3 import S3Collector
from core.inventory.services.vpc import VPCCollector
from core.naming import NameResolver
from core.parallel import CollectionContext

REGION = "ap-northeast-1"
GLOBAL_REGION = "us-east-1"

VPC_CHILD_ORDER = [
    "PublicSubnet",
    "PrivateSubnet",
    "RouteTable",
    "InternetGateway",
    "NATGateway",
    "NetworkACL",
    "SecurityGroup",
    "Endpoint",
]


@pytest.fixture
def ctx():
    return CollectionContext()


class TestVPCCollector:
    """VPC 부모/자식 행 순서"""

    def _build_network(self, ec2):
        vpc_id = ec2.create_vpc(CidrBlock="10.10.0.0/16")["Vpc"]["VpcId"]
        ec2.create_tags(Resources=[vpc_id], Tags=[{"Key": "Name", "Value": "prod"}])

        igw_id = ec2.create_internet_gateway()["InternetGateway"]["InternetGatewayId"]
        ec2.attach_internet_gateway(InternetGatewayId=igw_id, VpcId=vpc_id)

        public_id = ec2.create_subnet(VpcId=vpc_id, CidrBlock="10.10.1.0/24")["Subnet"]["SubnetId"]
        private_id = ec2.create_subnet(VpcId=vpc_id, CidrBlock="10.10.2.0/24")["Subnet"]["SubnetId"]

        rt_id = ec2.create_route_table(VpcId=vpc_id)["RouteTable"]["RouteTableId"]
        ec2.create_route(RouteTableId=rt_id, DestinationCidrBlock="0.0.0.0/0", GatewayId=igw_id)
        ec2.associate_route_table(RouteTableId=rt_id, SubnetId=public_id)

        ec2.create_security_group(GroupName="web", Description="web tier", VpcId=vpc_id)
        return vpc_id, public_id, private_id

    def _rows_for(self, resources, vpc_id):
        start = next(i for i, r in enumerate(resources) if r.sub_category1 == "VPC" and r.get("ID") == vpc_id)
        rows = [resources[start]]
        for r in resources[start + 1 :]:
            if r.sub_category1 == "VPC":
                break
            rows.append(r)
        return rows

    def test_hierarchy(self, client_factory, ctx):
        ec2 = client_factory.get("ec2", REGION)
        vpc_id, public_id, private_id = self._build_network(ec2)

        collector = VPCCollector(client_factory, name_resolver=NameResolver(client_factory))
        rows = self._rows_for(collector.collect(ctx, REGION), vpc_id)

        assert rows[0].name == "prod"
        assert rows[0].get("CIDR") == "10.10.0.0/16"

        kinds = [r.sub_category2 for r in rows[1:]]
        assert kinds == sorted(kinds, key=VPC_CHILD_ORDER.index)

        subnets = {r.get("ID"): r.sub_category2 for r in rows if r.sub_category2.endswith("Subnet")}
        assert subnets == {public_id: "PublicSubnet", private_id: "PrivateSubnet"}
        assert "InternetGateway" in kinds
        assert kinds.count("RouteTable") == 2
        assert "web" in [r.name for r in rows if r.sub_category2 == "SecurityGroup"]

    def test_not_sorted(self, client_factory):
        assert VPCCollector(client_factory).should_sort() is False


class TestS3Collector:
    def test_buckets(self, client_factory, ctx):
        s3 = client_factory.get("s3", GLOBAL_REGION)
        s3.create_bucket(Bucket="invc-global")
        s3.create_bucket(Bucket="invc-tokyo", CreateBucketConfiguration={"LocationConstraint": REGION})
        s3.put_bucket_versioning(Bucket="invc-tokyo", VersioningConfiguration={"Status": "Enabled"})
        s3.put_bucket_encryption(
            Bucket="invc-tokyo",
            ServerSideEncryptionConfiguration={
                "Rules": [{"ApplyServerSideEncryptionByDefault": {"SSEAlgorithm": "aws:kms"}}]
            },
        )

        collector = S3Collector(client_factory)
        assert collector.collect(ctx, REGION) == []

        by_name = {r.name: r for r in collector.collect(ctx, GLOBAL_REGION)}
        assert set(by_name) == {"invc-global", "invc-tokyo"}

        tokyo = by_name["invc-tokyo"]
        assert tokyo.region == REGION
        assert tokyo.arn == "arn:aws:s3:::invc-tokyo"
        assert tokyo.get("Versioning") == "Enabled"
        assert tokyo.get("Encryption") == "aws:kms"

        assert by_name["invc-global"].region == GLOBAL_REGION
        assert by_name["invc-global"].get("Versioning") == "Disabled"


class TestKMSCollector:
    def test_alias_as_name(self, client_factory, ctx):
        kms = client_factory.get("kms", REGION)
        aliased = kms.create_key(Description="app key")["KeyMetadata"]
        kms.create_alias(AliasName="alias/app", TargetKeyId=aliased["KeyId"])
        bare = kms.create_key(Description="bare")["KeyMetadata"]

        by_arn = {r.arn: r for r in KMSCollector(client_factory).collect(ctx, REGION)}

        assert by_arn[aliased["Arn"]].name == "alias/app"
        assert by_arn[aliased["Arn"]].get("Description") == "app key"
        assert by_arn[bare["Arn"]].name == bare["KeyId"]
        assert by_arn[bare["Arn"]].get("State") == "Enabled"


class TestDynamoDBCollector:
    def test_table(self, client_factory, ctx):
        dynamodb = client_factory.get("dynamodb", REGION)
        dynamodb.create_table(
            TableName="orders",
            KeySchema=[{"AttributeName": "pk", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "pk", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        dynamodb.update_time_to_live(
            TableName="orders",
            TimeToLiveSpecification={"Enabled": True, "AttributeName": "expires_at"},
        )

        [table] = DynamoDBCollector(client_factory).collect(ctx, REGION)

        assert table.name == "orders"
        assert table.sub_category1 == "Table"
        assert table.get("AttributeDefinitions") == "pk (S)"
        assert table.get("BillingMode") == "PAY_PER_REQUEST"
        assert table.get("TTLAttribute") == "expires_at"
        assert table.get("Status") == "ACTIVE"
        assert table.arn.endswith(":table/orders")
