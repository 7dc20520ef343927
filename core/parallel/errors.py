"""
core/parallel/errors.py - 작업 실패 분류

수집 작업에서 발생한 예외를 ErrorCategory로 분류하고 AWS 에러 코드를 추출합니다.
로그 메시지와 CLI 실패 요약 테이블에서 사용합니다.

주요 구성 요소:
- categorize_error: 예외를 ErrorCategory로 분류
- categorize_error_code: 에러 코드 문자열 기반 분류
- get_error_code: 예외에서 에러 코드 추출
- FailureInfo / summarize_failures: 카테고리별 실패 요약
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from core.exceptions import (
    CollectionCancelledError,
    format_error_for_user,
    is_access_denied,
    is_not_found,
    is_throttling,
)

from .types import ErrorCategory


def categorize_error_code(error_code: str) -> ErrorCategory:
    """에러 코드에 포함된 키워드로 ErrorCategory 분류"""
    code = error_code.lower()

    if any(x in code for x in ["accessdenied", "unauthorized", "forbidden"]):
        return ErrorCategory.ACCESS_DENIED
    if any(x in code for x in ["notfound", "nosuch", "doesnotexist"]):
        return ErrorCategory.NOT_FOUND
    if any(x in code for x in ["throttl", "ratelimit", "toomanyrequests", "requestlimitexceeded"]):
        return ErrorCategory.THROTTLING
    if "expiredtoken" in code:
        return ErrorCategory.EXPIRED_TOKEN
    if any(x in code for x in ["timeout", "timedout"]):
        return ErrorCategory.TIMEOUT
    if any(x in code for x in ["invalid", "validation", "malformed"]):
        return ErrorCategory.INVALID_REQUEST
    if any(x in code for x in ["internal", "serviceunavailable", "serviceerror"]):
        return ErrorCategory.SERVICE_ERROR

    return ErrorCategory.UNKNOWN


def categorize_error(error: BaseException) -> ErrorCategory:
    """예외 객체를 분석하여 ErrorCategory로 분류

    Args:
        error: 분류할 예외

    Returns:
        에러 카테고리
    """
    if isinstance(error, CollectionCancelledError):
        return ErrorCategory.CANCELLED
    if is_throttling(error):
        return ErrorCategory.THROTTLING
    if is_access_denied(error):
        return ErrorCategory.ACCESS_DENIED
    if is_not_found(error):
        return ErrorCategory.NOT_FOUND

    response = getattr(error, "response", None)
    if isinstance(response, dict):
        error_code = response.get("Error", {}).get("Code", "")
        if error_code:
            return categorize_error_code(error_code)

    # botocore EndpointConnectionError 등은 이름으로 판별
    name = error.__class__.__name__
    if "Timeout" in name:
        return ErrorCategory.TIMEOUT
    if isinstance(error, (ConnectionError, TimeoutError, OSError)) or "Connection" in name:
        return ErrorCategory.NETWORK

    return ErrorCategory.UNKNOWN


def get_error_code(error: BaseException) -> str:
    """예외 객체에서 에러 코드 문자열 추출

    ClientError의 경우 response에서 Code를 추출하고,
    그 외에는 예외 클래스명을 반환합니다.
    """
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        code: str = response.get("Error", {}).get("Code", "Unknown")
        return code
    return error.__class__.__name__


@dataclass(frozen=True)
class FailureInfo:
    """카테고리별 실패 요약 한 줄"""

    category: str
    error_code: str
    error_category: ErrorCategory
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "category": self.category,
            "error_code": self.error_code,
            "error_category": self.error_category.value,
            "message": self.message,
        }


def describe_failure(category: str, error: BaseException) -> FailureInfo:
    return FailureInfo(
        category=category,
        error_code=get_error_code(error),
        error_category=categorize_error(error),
        message=format_error_for_user(error),
    )


def summarize_failures(failures: Mapping[str, BaseException]) -> list[FailureInfo]:
    """카테고리 이름순 실패 요약"""
    return [describe_failure(category, failures[category]) for category in sorted(failures)]
