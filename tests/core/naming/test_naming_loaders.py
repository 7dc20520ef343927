"""
tests/core/naming/test_naming_loaders.py - bulk loader 테스트 (moto)
"""

from core.naming import NameKind, NameResolver
from core.naming.loaders import (
    load_kms_key_names,
    load_security_group_names,
    load_subnet_names,
    load_vpc_names,
)

REGION = "ap-northeast-1"


class TestEc2Loaders:
    def test_vpc_names_tag_or_id(self, client_factory):
        ec2 = client_factory.get("ec2", REGION)
        named = ec2.create_vpc(CidrBlock="10.1.0.0/16")["Vpc"]["VpcId"]
        ec2.create_tags(Resources=[named], Tags=[{"Key": "Name", "Value": "prod-vpc"}])
        unnamed = ec2.create_vpc(CidrBlock="10.2.0.0/16")["Vpc"]["VpcId"]

        names = load_vpc_names(ec2)

        assert names[named] == "prod-vpc"
        assert names[unnamed] == unnamed

    def test_subnet_names(self, client_factory):
        ec2 = client_factory.get("ec2", REGION)
        vpc_id = ec2.create_vpc(CidrBlock="10.3.0.0/16")["Vpc"]["VpcId"]
        subnet_id = ec2.create_subnet(VpcId=vpc_id, CidrBlock="10.3.1.0/24")["Subnet"]["SubnetId"]
        ec2.create_tags(Resources=[subnet_id], Tags=[{"Key": "Name", "Value": "app-a"}])

        assert load_subnet_names(ec2)[subnet_id] == "app-a"

    def test_security_group_uses_group_name(self, client_factory):
        ec2 = client_factory.get("ec2", REGION)
        vpc_id = ec2.create_vpc(CidrBlock="10.4.0.0/16")["Vpc"]["VpcId"]
        sg_id = ec2.create_security_group(GroupName="web", Description="web", VpcId=vpc_id)["GroupId"]

        assert load_security_group_names(ec2)[sg_id] == "web"


class TestKmsLoader:
    def test_alias_registered_three_ways(self, client_factory):
        kms = client_factory.get("kms", REGION)
        key = kms.create_key(Description="app")["KeyMetadata"]
        kms.create_alias(AliasName="alias/app", TargetKeyId=key["KeyId"])
        bare = kms.create_key(Description="no alias")["KeyMetadata"]

        names = load_kms_key_names(kms)

        assert names[key["KeyId"]] == "alias/app"
        assert names[key["Arn"]] == "alias/app"
        assert names["alias/app"] == "alias/app"
        assert bare["KeyId"] not in names

    def test_resolver_end_to_end(self, client_factory):
        kms = client_factory.get("kms", REGION)
        key = kms.create_key(Description="app")["KeyMetadata"]
        kms.create_alias(AliasName="alias/data", TargetKeyId=key["KeyId"])

        resolver = NameResolver(client_factory)

        assert resolver.resolve(None, REGION, NameKind.KMS, key["Arn"]) == "alias/data"
        assert resolver.resolve(None, REGION, NameKind.KMS, key["KeyId"]) == "alias/data"
        assert resolver.stats.loads == 1
