"""
core/output/html.py - HTML 인덱스 생성

<output_dir>/<account_id>/ 아래에 다음 파일을 만듭니다:
    files.json      존재하는 카테고리 CSV 목록 [{"path", "display_name"}]
    resources.zip   resources/ 아래 모든 CSV
    index.html      템플릿의 @@INDEX_TITLE@@, @@INDEX_DESCRIPTION@@, @@OUTPUT_FILE@@ 치환
"""

from __future__ import annotations

import json
import logging
import zipfile
from collections.abc import Iterable
from importlib import resources as importlib_resources
from pathlib import Path

from core.config import settings
from core.exceptions import OutputError

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "index.html"
INDEX_DESCRIPTION = "AWS resource inventory collected by invc"


def load_template() -> str:
    template = importlib_resources.files("core.output").joinpath("templates").joinpath(TEMPLATE_NAME)
    return template.read_text(encoding="utf-8")


def build_manifest(account_dir: Path, categories: Iterable[str]) -> list[dict[str, str]]:
    """resources/<category>.csv가 실제로 있는 카테고리만 manifest 항목으로 변환"""
    resources_dir = account_dir / settings.RESOURCES_DIR_NAME
    entries = []
    for category in categories:
        if (resources_dir / f"{category}.csv").is_file():
            entries.append(
                {
                    "path": f"{settings.RESOURCES_DIR_NAME}/{category}.csv",
                    "display_name": category,
                }
            )
    return entries


def create_resources_zip(zip_path: Path, resources_dir: Path) -> Path:
    """resources_dir 아래 CSV를 상대 경로로 압축 (디렉토리가 없으면 빈 zip)"""
    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        if resources_dir.is_dir():
            for csv_path in sorted(resources_dir.rglob("*")):
                if csv_path.is_file() and csv_path.suffix.lower() == ".csv":
                    zf.write(csv_path, csv_path.relative_to(resources_dir).as_posix())
    return zip_path


def render_index(account_id: str, output_file: str, template: str | None = None) -> str:
    html = template if template is not None else load_template()
    return (
        html.replace("@@INDEX_TITLE@@", f"AWS Resources ({account_id})")
        .replace("@@INDEX_DESCRIPTION@@", INDEX_DESCRIPTION)
        .replace("@@OUTPUT_FILE@@", output_file)
    )


def generate_html(output_dir: str | Path, account_id: str, combined_name: str, categories: Iterable[str]) -> Path:
    """manifest, zip, index.html 생성

    Args:
        output_dir: 출력 루트 디렉토리
        account_id: 계정 ID (하위 디렉토리 이름)
        combined_name: 병합 CSV 파일 이름 (index.html 기준 resources/ 아래)
        categories: 출력 카테고리 이름

    Returns:
        index.html 경로

    Raises:
        OutputError: 파일 생성 실패
    """
    account_dir = Path(output_dir) / account_id
    manifest_path = account_dir / settings.MANIFEST_NAME
    zip_path = account_dir / settings.ARCHIVE_NAME
    index_path = account_dir / settings.INDEX_HTML_NAME

    try:
        manifest = build_manifest(account_dir, categories)
        manifest_path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as e:
        raise OutputError(str(manifest_path), "manifest 작성 실패", cause=e) from e

    try:
        create_resources_zip(zip_path, account_dir / settings.RESOURCES_DIR_NAME)
    except (OSError, zipfile.BadZipFile) as e:
        raise OutputError(str(zip_path), "resources.zip 작성 실패", cause=e) from e

    try:
        html = render_index(account_id, f"{settings.RESOURCES_DIR_NAME}/{combined_name}")
        index_path.write_text(html, encoding="utf-8")
    except OSError as e:
        raise OutputError(str(index_path), "index.html 작성 실패", cause=e) from e

    logger.info(f"HTML 인덱스 생성: {index_path} (CSV {len(manifest)}개)")
    return index_path
