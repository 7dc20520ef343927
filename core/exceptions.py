"""
core/exceptions.py - 통합 예외 계층 구조

인벤토리 수집 전반에서 사용되는 예외 클래스들을 정의합니다.

예외 계층 구조:
    InventoryError (베이스)
    ├── ConfigError (설정/프로파일)
    ├── CredentialError (자격 증명 확인 실패)
    ├── OutputError (출력 디렉토리/통합 파일 쓰기 실패)
    ├── InvalidARNError (ARN 형식 오류, ValueError 호환)
    ├── CollectionCancelledError (실행 취소)
    └── CollectionError (하나 이상의 카테고리 수집 실패)

Usage:
    from core.exceptions import CollectionError

    try:
        run_collection(options)
    except CollectionError as e:
        for category, error in e.failures.items():
            print(category, error)
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# 베이스 예외
# =============================================================================


class InventoryError(Exception):
    """인벤토리 수집기 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": {k: str(v) for k, v in self.details.items()},
        }


# =============================================================================
# 실행 준비 단계 예외 (치명적)
# =============================================================================


class ConfigError(InventoryError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: BaseException | None = None,
    ):
        super().__init__(f"설정 오류 [{key}]: {message}", cause)
        self.config_key = key
        self.details["config_key"] = key


class CredentialError(InventoryError):
    """AWS 자격 증명 확인 실패"""


class OutputError(InventoryError):
    """출력 쓰기 실패

    출력 디렉토리 생성 실패와 통합 파일(all.csv) 쓰기 실패는 실행을 중단합니다.
    """

    def __init__(
        self,
        path: str,
        message: str,
        cause: BaseException | None = None,
    ):
        super().__init__(f"출력 오류 [{path}]: {message}", cause)
        self.path = path
        self.details["path"] = path


class InvalidARNError(InventoryError, ValueError):
    """ARN 형식 오류"""

    def __init__(self, value: str):
        super().__init__(f"invalid ARN format: {value!r}")
        self.value = value


class CollectionCancelledError(InventoryError):
    """수집 실행이 취소됨"""

    def __init__(self, message: str = "수집이 취소되었습니다"):
        super().__init__(message)


class CollectionError(InventoryError):
    """하나 이상의 카테고리 수집 실패

    메시지는 고정이며, 카테고리별 실패는 failures 맵으로 전달합니다.
    summary는 실행 결과 요약 (RunSummary)입니다.
    """

    def __init__(
        self,
        failures: dict[str, BaseException],
        summary: Any = None,
    ):
        super().__init__("failed to collect one or more categories", details=dict(failures))
        self.failures = dict(failures)
        self.summary = summary

    @property
    def failed_categories(self) -> list[str]:
        return sorted(self.failures)


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

ACCESS_DENIED_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedAccess",
    "UnauthorizedOperation",
}

THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "RateExceeded",
}

NOT_FOUND_CODES = {
    "ResourceNotFoundException",
    "NotFoundException",
    "NoSuchEntity",
    "NoSuchBucket",
    "InvalidInstanceID.NotFound",
}


def _error_code(error: BaseException) -> str:
    response = getattr(error, "response", None)
    if not isinstance(response, dict):
        return ""
    return response.get("Error", {}).get("Code", "") or ""


def is_access_denied(error: BaseException) -> bool:
    """액세스 거부 오류인지 확인"""
    return _error_code(error) in ACCESS_DENIED_CODES


def is_throttling(error: BaseException) -> bool:
    """스로틀링 오류인지 확인"""
    return _error_code(error) in THROTTLING_CODES


def is_not_found(error: BaseException) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인"""
    return _error_code(error) in NOT_FOUND_CODES


def format_error_for_user(error: BaseException) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, InventoryError):
        return str(error)

    response = getattr(error, "response", None)
    if isinstance(response, dict):
        error_info = response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))

        friendly_messages = {
            "AccessDenied": "권한이 없습니다. IAM 정책을 확인하세요.",
            "AccessDeniedException": "권한이 없습니다. IAM 정책을 확인하세요.",
            "UnauthorizedOperation": "권한이 없습니다. IAM 정책을 확인하세요.",
            "ExpiredToken": "인증 토큰이 만료되었습니다. 다시 로그인하세요.",
            "InvalidClientTokenId": "잘못된 자격 증명입니다.",
            "Throttling": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        }

        return friendly_messages.get(code, f"{code}: {message}")

    return str(error)
