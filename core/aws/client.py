"""
core/aws/client.py - boto3 client 생성 헬퍼

Retry(adaptive 모드) + 타임아웃 + 연결 풀이 설정된 boto3 client를 생성하고,
(service, region) 단위로 재사용합니다.

주요 구성 요소:
- get_client: retry 설정이 적용된 boto3 client 생성
- ClientFactory: 스레드 세이프 (service, region) client 캐시

Example:
    from core.aws.client import ClientFactory

    clients = ClientFactory(session)
    ec2 = clients.get("ec2", "ap-northeast-1")
    volumes = ec2.describe_volumes()["Volumes"]
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Literal, cast

from botocore.config import Config

from core.config import settings

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]

DEFAULT_RETRY_MODE: RetryMode = "adaptive"
DEFAULT_MAX_POOL_CONNECTIONS = 25


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int = settings.API_MAX_ATTEMPTS,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int = settings.API_CONNECT_TIMEOUT,
    read_timeout: int = settings.API_READ_TIMEOUT,
    max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
    **kwargs: Any,
) -> Any:
    """Retry가 적용된 boto3 client 생성

    botocore 전송 계층의 재시도 설정이며, 수집 작업 단위 재시도와는 무관합니다.

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (ec2, s3, kms 등)
        region_name: 리전 (None이면 세션 기본값)
        max_attempts: 최대 시도 횟수
        retry_mode: 재시도 모드 ('adaptive' 또는 'standard')
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        max_pool_connections: HTTP 연결 풀 크기 (워커 수 이상 권장)
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    config = Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        max_pool_connections=max_pool_connections,
    )

    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # boto3-stubs는 Literal 서비스명을 요구
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )


class ClientFactory:
    """(service, region) 단위 boto3 client 캐시

    boto3 client는 생성 후 스레드 간 공유가 안전하지만 생성 자체는 세션을
    건드리므로 락 안에서 수행합니다.
    """

    def __init__(
        self,
        session: boto3.Session,
        max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
    ):
        self._session = session
        self._max_pool_connections = max(max_pool_connections, DEFAULT_MAX_POOL_CONNECTIONS)
        self._clients: dict[tuple[str, str], Any] = {}
        self._lock = threading.Lock()

    @property
    def session(self) -> boto3.Session:
        return self._session

    def get(self, service_name: str, region_name: str) -> Any:
        """캐시된 client 반환 (없으면 생성)"""
        key = (service_name, region_name)
        with self._lock:
            client = self._clients.get(key)
            if client is None:
                logger.debug(f"boto3 client 생성: {service_name}/{region_name}")
                client = get_client(
                    self._session,
                    service_name,
                    region_name=region_name,
                    max_pool_connections=self._max_pool_connections,
                )
                self._clients[key] = client
            return client

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)
