"""
core/aws/auth.py - 세션 생성과 자격 증명 확인

수집 시작 전에 한 번 실행되며, 여기서 발생한 오류는 모두 치명적입니다.
"""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError, ProfileNotFound

from core.exceptions import ConfigError, CredentialError

logger = logging.getLogger(__name__)

_SSO_EXPIRED_MARKERS = ("sso session has expired", "SSO session has expired")


def create_session(profile: str | None, region: str) -> boto3.Session:
    """boto3 Session 생성

    Args:
        profile: AWS 프로파일 이름 (None이면 기본 자격 증명 체인)
        region: 기본 리전

    Raises:
        ConfigError: 프로파일을 찾을 수 없는 경우
    """
    try:
        if profile:
            return boto3.Session(profile_name=profile, region_name=region)
        return boto3.Session(region_name=region)
    except ProfileNotFound as e:
        raise ConfigError("profile", f"프로파일을 찾을 수 없습니다: {profile}", cause=e) from e


def check_aws_credentials(session: boto3.Session) -> str:
    """STS GetCallerIdentity로 자격 증명 확인

    Returns:
        호출자 ARN

    Raises:
        CredentialError: 자격 증명이 없거나 만료되었거나 ARN이 비어있는 경우
    """
    try:
        identity = session.client("sts").get_caller_identity()
    except (ClientError, BotoCoreError) as e:
        if any(marker in str(e) for marker in _SSO_EXPIRED_MARKERS):
            raise CredentialError(
                "aws sso session has expired. please run 'aws sso login' to refresh your session",
                cause=e,
            ) from e
        raise CredentialError("aws credentials are not set or invalid", cause=e) from e

    arn = identity.get("Arn") or ""
    if not arn:
        raise CredentialError("aws credentials are not set or invalid: empty ARN")

    logger.info(f"AWS identity: {arn}")
    return arn
