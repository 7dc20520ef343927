"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹(moto)과 가짜 수집기 헬퍼를 제공합니다.

Usage:
    def test_something(aws_session, make_registry):
        # aws_session: moto 모킹 안에서 생성한 boto3 Session
        # make_registry: FakeCollector로 CollectorRegistry 생성
        pass
"""

import os
import sys
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.inventory import Collector, CollectorRegistry, Resource, base_columns, raw_column  # noqa: E402

TEST_REGION = "ap-northeast-1"
TEST_ACCOUNT_ID = "123456789012"


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정 (실제 자격 증명/프로파일 차단)"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_PROFILE", raising=False)
    monkeypatch.delenv("INVC_MAX_CONCURRENCY", raising=False)
    yield


# =============================================================================
# moto 픽스처
# =============================================================================


@pytest.fixture
def moto_aws():
    """moto 전체 서비스 모킹"""
    from moto import mock_aws

    with mock_aws():
        yield


@pytest.fixture
def aws_session(moto_aws):
    """moto 모킹 안에서 생성한 boto3 Session"""
    import boto3

    return boto3.Session(region_name=TEST_REGION)


@pytest.fixture
def client_factory(aws_session):
    from core.aws.client import ClientFactory

    return ClientFactory(aws_session)


# =============================================================================
# 가짜 수집기
# =============================================================================


def make_resource(
    category: str = "fake",
    name: str = "res",
    region: str = TEST_REGION,
    sub_category1: str = "",
    sub_category2: str = "",
    **raw: Any,
) -> Resource:
    """테스트용 Resource 생성"""
    return Resource.create(
        category=category,
        name=name,
        region=region,
        sub_category1=sub_category1,
        sub_category2=sub_category2,
        raw_data=raw or {"Value": name},
    )


class FakeCollector(Collector):
    """리전별 고정 결과/예외를 돌려주는 수집기

    Args:
        name: 카테고리 이름
        resources: {region: [Resource]} (없는 리전은 빈 결과)
        errors: {region: Exception} (해당 리전에서 예외 발생)
        delay: collect() 안에서 대기할 시간 (초)
        sort: should_sort() 반환값
    """

    def __init__(
        self,
        name: str,
        resources: Optional[Dict[str, List[Resource]]] = None,
        errors: Optional[Dict[str, BaseException]] = None,
        delay: float = 0.0,
        sort: bool = True,
        on_collect: Optional[Callable[[str], None]] = None,
    ):
        self.name = name
        self._resources = resources or {}
        self._errors = errors or {}
        self._delay = delay
        self._sort = sort
        self._on_collect = on_collect
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def should_sort(self) -> bool:
        return self._sort

    def columns(self):
        return base_columns("SubCategory1") + [raw_column("Value")]

    def collect(self, ctx, region):
        with self._lock:
            self.calls.append(region)
        if self._on_collect is not None:
            self._on_collect(region)
        if self._delay:
            time.sleep(self._delay)
        if region in self._errors:
            raise self._errors[region]
        return list(self._resources.get(region, []))


@pytest.fixture
def make_registry():
    """FakeCollector 목록으로 레지스트리 생성"""

    def _make(*collectors: Collector) -> CollectorRegistry:
        return CollectorRegistry(collectors)

    return _make


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation: str = "TestOperation",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation,
    )
