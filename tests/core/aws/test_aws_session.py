"""
tests/core/aws/test_aws_session.py - 세션 생성, 자격 증명 확인, client 캐시 테스트
"""

from unittest.mock import MagicMock

import boto3
import pytest

from conftest import TEST_REGION, create_mock_client_error
from core.aws.auth import check_aws_credentials, create_session
from core.aws.client import DEFAULT_MAX_POOL_CONNECTIONS, ClientFactory, get_client
from core.exceptions import ConfigError, CredentialError


class TestCreateSession:
    def test_region(self):
        session = create_session(None, "us-west-2")
        assert session.region_name == "us-west-2"

    def test_unknown_profile(self, tmp_path, monkeypatch):
        """존재하지 않는 프로파일은 ConfigError"""
        monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
        monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
        with pytest.raises(ConfigError):
            create_session("no-such-profile", TEST_REGION)


class TestCheckCredentials:
    def test_moto_identity(self, aws_session):
        arn = check_aws_credentials(aws_session)
        assert arn.startswith("arn:aws:")
        assert ":123456789012:" in arn

    def test_client_error(self):
        session = MagicMock()
        session.client.return_value.get_caller_identity.side_effect = create_mock_client_error(
            "InvalidClientTokenId"
        )
        with pytest.raises(CredentialError, match="not set or invalid"):
            check_aws_credentials(session)

    def test_sso_expired(self):
        session = MagicMock()
        session.client.return_value.get_caller_identity.side_effect = create_mock_client_error(
            "UnauthorizedException", "The SSO session has expired or is invalid"
        )
        with pytest.raises(CredentialError, match="aws sso login"):
            check_aws_credentials(session)

    def test_empty_arn(self):
        session = MagicMock()
        session.client.return_value.get_caller_identity.return_value = {"Arn": ""}
        with pytest.raises(CredentialError):
            check_aws_credentials(session)


class TestClientFactory:
    def test_get_client_retry_config(self):
        session = boto3.Session(region_name=TEST_REGION)
        client = get_client(session, "ec2", region_name="us-west-2")
        assert client.meta.region_name == "us-west-2"
        assert client.meta.config.retries["mode"] == "adaptive"

    def test_cache_per_service_region(self):
        factory = ClientFactory(boto3.Session(region_name=TEST_REGION))
        a = factory.get("ec2", "us-east-1")
        b = factory.get("ec2", "us-east-1")
        c = factory.get("ec2", "us-west-2")
        assert a is b
        assert a is not c
        assert len(factory) == 2

    def test_pool_size_floor(self):
        factory = ClientFactory(boto3.Session(region_name=TEST_REGION), max_pool_connections=2)
        client = factory.get("s3", "us-east-1")
        assert client.meta.config.max_pool_connections == DEFAULT_MAX_POOL_CONNECTIONS
