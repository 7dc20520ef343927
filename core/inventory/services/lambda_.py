"""
core/inventory/services/lambda_.py - Lambda 함수 수집

환경 변수는 "KEY=VALUE" 형태로 정렬해서 표시하며,
민감한 이름의 변수 값은 마스킹합니다.
"""

from __future__ import annotations

import logging

from ..collector import AWSCollector
from ..types import Column, Resource, attr_column, base_columns, raw_column

logger = logging.getLogger(__name__)

MASK = "*****"
SENSITIVE_ENV_MARKERS = ("PRIVATE_KEY", "SECRET", "PASSWORD", "TOKEN")


def format_env_vars(variables: dict[str, str] | None) -> str:
    """환경 변수를 정렬된 "KEY=VALUE" 줄로 변환"""
    if not variables:
        return ""
    entries = []
    for key, value in variables.items():
        if any(marker in key.upper() for marker in SENSITIVE_ENV_MARKERS):
            value = MASK
        entries.append(f"{key}={value}")
    return "\n".join(sorted(entries))


class LambdaCollector(AWSCollector):
    name = "lambda"
    service = "lambda"

    def columns(self) -> list[Column]:
        return base_columns("SubCategory", "SubSubCategory") + [
            attr_column("ARN", "arn"),
            raw_column("RoleARN"),
            raw_column("Type"),
            raw_column("Runtime"),
            raw_column("Architecture"),
            raw_column("MemorySize"),
            raw_column("Timeout"),
            raw_column("EnvVars"),
            raw_column("LastModified"),
        ]

    def collect_region(self, ctx, region: str) -> list[Resource]:
        client = self.client(region)
        resources = []

        for page in self.paginate(ctx, client, "list_functions"):
            for function in page.get("Functions", []):
                architectures = function.get("Architectures", [])
                resources.append(
                    Resource.create(
                        category=self.name,
                        sub_category1="Function",
                        name=function.get("FunctionName"),
                        region=region,
                        arn=function.get("FunctionArn"),
                        raw_data={
                            "RoleARN": function.get("Role"),
                            "Type": "Function",
                            "Runtime": function.get("Runtime"),
                            "Architecture": architectures[0] if architectures else "",
                            "MemorySize": function.get("MemorySize"),
                            "Timeout": function.get("Timeout"),
                            "EnvVars": format_env_vars(function.get("Environment", {}).get("Variables")),
                            "LastModified": function.get("LastModified"),
                        },
                    )
                )

        return resources
