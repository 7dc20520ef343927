"""
core/naming/kinds.py - 이름 해석 대상 리소스 종류

NameKind: 리전 단위 bulk 조회로 캐시되는 종류 (EC2 계열 + KMS)
GlobalNameKind: 글로벌 리전에서 항목별로 조회되는 CloudFront 정책 종류
"""

from __future__ import annotations

import re
from enum import Enum

from core.aws.arn import parse_arn
from core.exceptions import InvalidARNError

_UUID_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")

KMS_ALIAS_PREFIX = "alias/"
KMS_MULTI_REGION_PREFIX = "mrk-"


def is_kms_identifier(identifier: str) -> bool:
    """KMS 키 식별자 형태인지 확인 (key UUID, mrk- id, alias/..., KMS ARN)"""
    if identifier.startswith((KMS_ALIAS_PREFIX, KMS_MULTI_REGION_PREFIX)):
        return True
    if _UUID_RE.match(identifier):
        return True
    try:
        return parse_arn(identifier).service == "kms"
    except InvalidARNError:
        return False


class NameKind(Enum):
    """리전 단위로 bulk 캐시되는 리소스 종류

    value는 캐시/로그용 짧은 이름입니다.
    """

    VPC = "vpcs"
    SUBNET = "subnets"
    SECURITY_GROUP = "sgs"
    NETWORK_INTERFACE = "enis"
    VOLUME = "volumes"
    SNAPSHOT = "snapshots"
    IMAGE = "images"
    KMS = "kms"

    @property
    def service(self) -> str:
        """bulk 조회에 사용하는 boto3 서비스 이름"""
        return "kms" if self is NameKind.KMS else "ec2"

    @property
    def prefix(self) -> str:
        """식별자 접두사 (KMS는 접두사 대신 형태 검사)"""
        return _PREFIXES.get(self, "")

    def matches(self, identifier: str) -> bool:
        """식별자가 이 종류의 형태인지 확인

        형태가 맞지 않는 식별자는 이미 이름이거나 다른 형식으로 보고
        API 호출 없이 그대로 반환됩니다.
        """
        if self is NameKind.KMS:
            return is_kms_identifier(identifier)
        return identifier.startswith(self.prefix)


_PREFIXES = {
    NameKind.VPC: "vpc-",
    NameKind.SUBNET: "subnet-",
    NameKind.SECURITY_GROUP: "sg-",
    NameKind.NETWORK_INTERFACE: "eni-",
    NameKind.VOLUME: "vol-",
    NameKind.SNAPSHOT: "snap-",
    NameKind.IMAGE: "ami-",
}


class GlobalNameKind(Enum):
    """글로벌 리전에서 항목별로 조회되는 CloudFront 리소스 종류

    value는 캐시 키 접두사입니다 ("<value>:<id>").
    """

    ORIGIN_ACCESS_CONTROL = "oac"
    CACHE_POLICY = "cachepolicy"
    ORIGIN_REQUEST_POLICY = "originrequestpolicy"
    RESPONSE_HEADERS_POLICY = "responseheaderspolicy"

    def cache_key(self, identifier: str) -> str:
        return f"{self.value}:{identifier}"
