"""
core/output/json_writer.py - JSON 출력

리소스마다 {헤더: 값} 객체 하나를 만들어 배열로 기록합니다 (2칸 들여쓰기).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from core.exceptions import OutputError

from .csv_writer import iter_category_outputs

if TYPE_CHECKING:
    from core.inventory import CollectorRegistry, Column, Resource
    from core.parallel import ResultAggregator

logger = logging.getLogger(__name__)


def to_records(resources: Iterable[Resource], columns: Sequence[Column]) -> list[dict[str, str]]:
    return [{col.header: col.value(resource) for col in columns} for resource in resources]


def write_json(stream: TextIO, resources: Iterable[Resource], columns: Sequence[Column]) -> None:
    json.dump(to_records(resources, columns), stream, indent=2, ensure_ascii=False)
    stream.write("\n")


def write_category_json_files(
    directory: str | Path,
    aggregator: ResultAggregator,
    registry: CollectorRegistry,
) -> list[Path]:
    """카테고리별 <category>.json 작성 (실패한 파일은 로그 후 건너뜀)

    Raises:
        OutputError: 출력 디렉토리 생성 실패
    """
    directory = Path(directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(str(directory), "JSON 디렉토리 생성 실패", cause=e) from e
    written = []

    for category, resources, columns in iter_category_outputs(aggregator, registry):
        path = directory / f"{category}.json"
        try:
            with open(path, "w", encoding="utf-8") as f:
                write_json(f, resources, columns)
        except OSError as e:
            logger.error(f"카테고리 JSON 작성 실패: {category} ({path}) {e}")
            continue
        written.append(path)

    return written
