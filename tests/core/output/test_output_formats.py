"""
tests/core/output/test_output_formats.py - JSON, Excel, HTML 출력 테스트
"""

import json
import zipfile

import pytest
from openpyxl import load_workbook

from conftest import FakeCollector, make_resource
from core.exceptions import OutputError
from core.output import generate_html, write_category_json_files, write_excel
from core.output.html import build_manifest, load_template, render_index
from core.parallel import ResultAggregator
from core.parallel.types import CollectionResult


@pytest.fixture
def registry(make_registry):
    return make_registry(FakeCollector("ec2"), FakeCollector("a-very-long-category-name-over-31-chars"))


@pytest.fixture
def aggregator(registry):
    results = [
        CollectionResult("ec2", "r1", [make_resource("ec2", "web", "r1"), make_resource("ec2", "db", "r1")]),
        CollectionResult("a-very-long-category-name-over-31-chars", "r1", [make_resource("x", "x", "r1")]),
    ]
    return ResultAggregator().consume(results).finalize(registry)


class TestJson:
    def test_records(self, tmp_path, aggregator, registry):
        written = write_category_json_files(tmp_path / "json", aggregator, registry)

        assert len(written) == 2
        records = json.loads((tmp_path / "json" / "ec2.json").read_text(encoding="utf-8"))
        assert [r["Name"] for r in records] == ["db", "web"]
        assert records[0] == {"Category": "ec2", "SubCategory1": "", "Name": "db", "Region": "r1", "Value": "db"}

    def test_directory_failure(self, tmp_path, aggregator, registry):
        """디렉토리 생성 실패는 OutputError"""
        (tmp_path / "json").write_text("blocker", encoding="utf-8")
        with pytest.raises(OutputError):
            write_category_json_files(tmp_path / "json", aggregator, registry)


class TestExcel:
    def test_sheets(self, tmp_path, aggregator, registry):
        path = write_excel(tmp_path / "inventory.xlsx", aggregator, registry)

        wb = load_workbook(path)
        assert wb.sheetnames == ["a-very-long-category-name-over-", "ec2"]
        ws = wb["ec2"]
        assert [c.value for c in ws[1]] == ["Category", "SubCategory1", "Name", "Region", "Value"]
        assert ws.max_row == 3
        assert ws.freeze_panes == "A2"
        assert ws["A1"].font.bold

    def test_empty(self, tmp_path, make_registry):
        registry = make_registry(FakeCollector("ec2"))
        path = write_excel(tmp_path / "empty.xlsx", ResultAggregator(), registry)
        assert load_workbook(path).sheetnames == ["empty"]


class TestHtml:
    def test_template_placeholders(self):
        template = load_template()
        for placeholder in ("@@INDEX_TITLE@@", "@@INDEX_DESCRIPTION@@", "@@OUTPUT_FILE@@"):
            assert placeholder in template

    def test_render_index(self):
        html = render_index("123456789012", "resources/all.csv", template="@@INDEX_TITLE@@|@@OUTPUT_FILE@@")
        assert html == "AWS Resources (123456789012)|resources/all.csv"

    def test_manifest_only_existing(self, tmp_path):
        resources = tmp_path / "resources"
        resources.mkdir()
        (resources / "ec2.csv").write_text("x", encoding="utf-8")
        assert build_manifest(tmp_path, ["ec2", "vpc"]) == [{"path": "resources/ec2.csv", "display_name": "ec2"}]

    def test_generate_html(self, tmp_path):
        account_dir = tmp_path / "123456789012"
        resources = account_dir / "resources"
        resources.mkdir(parents=True)
        (resources / "ec2.csv").write_text("a\n", encoding="utf-8")
        (resources / "all.csv").write_text("a\n", encoding="utf-8")

        index = generate_html(tmp_path, "123456789012", "all.csv", ["ec2"])

        assert index == account_dir / "index.html"
        html = index.read_text(encoding="utf-8")
        assert "AWS Resources (123456789012)" in html
        assert "resources/all.csv" in html
        assert "@@" not in html
        manifest = json.loads((account_dir / "files.json").read_text(encoding="utf-8"))
        assert manifest == [{"path": "resources/ec2.csv", "display_name": "ec2"}]
        with zipfile.ZipFile(account_dir / "resources.zip") as zf:
            assert sorted(zf.namelist()) == ["all.csv", "ec2.csv"]
