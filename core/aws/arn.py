"""
core/aws/arn.py - ARN 파싱

형식: arn:partition:service:region:account-id:resource
resource는 첫 번째 '/' (없으면 첫 번째 ':')에서 resource_type과 resource로 나뉩니다.

Example:
    >>> arn = parse_arn("arn:aws:ec2:us-east-1:123456789012:instance/i-abc")
    >>> arn.resource_type, arn.resource
    ('instance', 'i-abc')
    >>> get_resource_name_from_arn("arn:aws:s3:::my-bucket")
    'my-bucket'
"""

from __future__ import annotations

from dataclasses import dataclass

from core.exceptions import InvalidARNError

ARN_PREFIX = "arn:"
ARN_PARTS_COUNT = 6
ACCOUNT_PARTS_COUNT = 5


@dataclass(frozen=True)
class ARN:
    """파싱된 ARN"""

    partition: str
    service: str
    region: str
    account_id: str
    resource_type: str
    resource: str

    def __str__(self) -> str:
        resource = self.resource
        if self.resource_type:
            resource = f"{self.resource_type}/{self.resource}"
        return f"arn:{self.partition}:{self.service}:{self.region}:{self.account_id}:{resource}"


def parse_arn(value: str) -> ARN:
    """ARN 문자열 파싱

    Args:
        value: ARN 문자열

    Returns:
        ARN

    Raises:
        InvalidARNError: 'arn:'으로 시작하지 않거나 세그먼트가 6개 미만인 경우
    """
    if not value or not value.startswith(ARN_PREFIX):
        raise InvalidARNError(value)

    parts = value.split(":", ARN_PARTS_COUNT - 1)
    if len(parts) < ARN_PARTS_COUNT:
        raise InvalidARNError(value)

    resource = parts[5]
    resource_type = ""
    if "/" in resource:
        resource_type, resource = resource.split("/", 1)
    elif ":" in resource:
        resource_type, resource = resource.split(":", 1)

    return ARN(
        partition=parts[1],
        service=parts[2],
        region=parts[3],
        account_id=parts[4],
        resource_type=resource_type,
        resource=resource,
    )


def get_resource_name_from_arn(value: str) -> str:
    """ARN에서 리소스 이름만 추출 (잘못된 형식이면 빈 문자열)"""
    try:
        return parse_arn(value).resource
    except InvalidARNError:
        return ""


def extract_account_id(value: str) -> str:
    """ARN에서 계정 ID 추출 (STS caller identity 용)

    Raises:
        InvalidARNError: 세그먼트가 5개 미만인 경우
    """
    parts = (value or "").split(":")
    if len(parts) < ACCOUNT_PARTS_COUNT:
        raise InvalidARNError(value)
    return parts[4]
