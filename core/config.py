"""
core/config.py - 전역 설정

인벤토리 수집기 전체에서 사용하는 기본값과 환경변수 헬퍼를 정의합니다.
CLI 플래그가 환경변수보다, 환경변수가 기본값보다 우선합니다.

Usage:
    from core.config import settings, get_default_region

    region = get_default_region()
    workers = settings.DEFAULT_MAX_CONCURRENCY
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version

DIST_NAME = "aws-inventory-collector"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


@dataclass(frozen=True)
class Settings:
    """애플리케이션 기본 설정 (불변)"""

    # 리전
    DEFAULT_REGION: str = "ap-northeast-1"
    GLOBAL_SERVICE_REGION: str = "us-east-1"

    # 병렬 수집
    DEFAULT_MAX_CONCURRENCY: int = 5

    # 출력
    DEFAULT_OUTPUT_DIR: str = "./output"
    RESOURCES_DIR_NAME: str = "resources"
    COMBINED_CSV_NAME: str = "all.csv"
    MANIFEST_NAME: str = "files.json"
    ARCHIVE_NAME: str = "resources.zip"
    INDEX_HTML_NAME: str = "index.html"
    EXCEL_NAME: str = "inventory.xlsx"
    JSON_DIR_NAME: str = "json"

    # boto3 client
    API_MAX_ATTEMPTS: int = 5
    API_CONNECT_TIMEOUT: int = 10
    API_READ_TIMEOUT: int = 30


settings = Settings()


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_int(name: str, default: int) -> int:
    """환경변수를 int로 읽기 (없거나 잘못된 값이면 default)"""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경변수를 bool로 읽기

    true/1/yes/on, false/0/no/off (대소문자 무시)만 인식하며
    그 외 값은 default를 반환합니다.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def get_default_region() -> str:
    """기본 리전 (AWS_DEFAULT_REGION > AWS_REGION > settings.DEFAULT_REGION)"""
    return os.environ.get("AWS_DEFAULT_REGION") or os.environ.get("AWS_REGION") or settings.DEFAULT_REGION


def get_default_profile() -> str | None:
    """기본 프로파일 (AWS_PROFILE > AWS_DEFAULT_PROFILE)"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE") or None


def get_max_concurrency() -> int:
    """최대 동시 수집 작업 수 (INVC_MAX_CONCURRENCY)"""
    return get_env_int("INVC_MAX_CONCURRENCY", settings.DEFAULT_MAX_CONCURRENCY)


def get_version() -> str:
    """설치된 배포판 버전 (개발 체크아웃이면 0.0.0+local)"""
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0+local"
