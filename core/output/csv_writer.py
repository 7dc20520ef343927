"""
core/output/csv_writer.py - CSV 출력

카테고리별 파일(<category>.csv)과 전체 병합 파일(all.csv)을 작성합니다.

실패 정책:
    - 카테고리별 파일: 쓰기 실패는 로그만 남기고 다음 카테고리로 진행
    - 병합 파일: 실패 시 OutputError (실행 실패)
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from core.exceptions import OutputError

if TYPE_CHECKING:
    from core.inventory import CollectorRegistry, Column, Resource
    from core.parallel import ResultAggregator

logger = logging.getLogger(__name__)


def _writer(stream: TextIO):
    return csv.writer(stream, lineterminator="\n")


def write_rows(writer, resources: Iterable[Resource], columns: Sequence[Column]) -> None:
    writer.writerow([col.header for col in columns])
    for resource in resources:
        writer.writerow([col.value(resource) for col in columns])


def write_csv(stream: TextIO, resources: Iterable[Resource], columns: Sequence[Column]) -> None:
    """헤더 한 줄 + 리소스별 한 줄"""
    write_rows(_writer(stream), resources, columns)


def iter_category_outputs(aggregator: ResultAggregator, registry: CollectorRegistry):
    """출력 대상 (category, resources, columns)를 카테고리 사전순으로 반환

    리소스가 없는 카테고리와 레지스트리에 없는 카테고리는 제외합니다.
    """
    for category in aggregator.categories():
        resources = aggregator.resources(category)
        if not resources:
            continue
        collector = registry.get(category)
        if collector is None:
            logger.warning(f"수집기가 없는 카테고리 건너뜀: {category}")
            continue
        yield category, resources, collector.columns()


def write_category_files(
    directory: str | Path,
    aggregator: ResultAggregator,
    registry: CollectorRegistry,
) -> list[Path]:
    """카테고리별 <category>.csv 작성

    Returns:
        작성에 성공한 파일 경로 목록
    """
    directory = Path(directory)
    written = []

    for category, resources, columns in iter_category_outputs(aggregator, registry):
        path = directory / f"{category}.csv"
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                write_csv(f, resources, columns)
        except OSError as e:
            logger.error(f"카테고리 CSV 작성 실패: {category} ({path}) {e}")
            continue
        written.append(path)
        logger.debug(f"카테고리 CSV 작성: {path} ({len(resources)}건)")

    return written


def write_combined_csv(
    path: str | Path,
    aggregator: ResultAggregator,
    registry: CollectorRegistry,
) -> Path:
    """모든 카테고리를 하나의 CSV로 병합

    카테고리마다 헤더와 행을 쓰고, 카테고리 사이에 빈 줄 하나를 넣습니다.
    마지막 카테고리 뒤에는 빈 줄이 없습니다.

    Raises:
        OutputError: 파일 생성/쓰기 실패
    """
    path = Path(path)
    logger.info(f"전체 결과 파일 작성: {path}")

    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = _writer(f)
            for index, (_category, resources, columns) in enumerate(iter_category_outputs(aggregator, registry)):
                if index > 0:
                    f.write("\n")
                write_rows(writer, resources, columns)
    except OSError as e:
        raise OutputError(str(path), "병합 CSV 작성 실패", cause=e) from e

    return path
