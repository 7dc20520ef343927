"""
tests/core/output/test_output_csv.py - CSV 출력 테스트
"""

import csv
import io

import pytest

from conftest import FakeCollector, make_resource
from core.exceptions import OutputError
from core.output import write_category_files, write_combined_csv, write_csv
from core.parallel import ResultAggregator
from core.parallel.types import CollectionResult


def aggregate(registry, results):
    return ResultAggregator().consume(results).finalize(registry)


@pytest.fixture
def registry(make_registry):
    return make_registry(FakeCollector("ec2"), FakeCollector("kms"), FakeCollector("vpc", sort=False))


@pytest.fixture
def aggregator(registry):
    return aggregate(
        registry,
        [
            CollectionResult("ec2", "r1", [make_resource("ec2", "web", "r1", sub_category1="Instance")]),
            CollectionResult("kms", "r1", []),
            CollectionResult(
                "vpc",
                "r1",
                [
                    make_resource("vpc", "prod", "r1", sub_category1="VPC"),
                    make_resource("vpc", "pub-a", "r1", sub_category2="PublicSubnet"),
                ],
            ),
        ],
    )


class TestWriteCsv:
    def test_header_and_rows(self):
        collector = FakeCollector("ec2")
        stream = io.StringIO()
        write_csv(stream, [make_resource("ec2", "a,b", "r1", Value="multi\nline")], collector.columns())

        rows = list(csv.reader(io.StringIO(stream.getvalue())))
        assert rows[0] == ["Category", "SubCategory1", "Name", "Region", "Value"]
        assert rows[1] == ["ec2", "", "a,b", "r1", "multi\nline"]

    def test_lf_line_endings(self):
        stream = io.StringIO()
        write_csv(stream, [make_resource("ec2", "a")], FakeCollector("ec2").columns())
        assert "\r\n" not in stream.getvalue()
        assert stream.getvalue().endswith("\n")


class TestCategoryFiles:
    def test_one_file_per_non_empty_category(self, tmp_path, aggregator, registry):
        written = write_category_files(tmp_path, aggregator, registry)

        assert [p.name for p in written] == ["ec2.csv", "vpc.csv"]
        assert not (tmp_path / "kms.csv").exists()
        lines = (tmp_path / "vpc.csv").read_text(encoding="utf-8").splitlines()
        assert lines[1].startswith("vpc,VPC,prod")
        assert lines[2].startswith("vpc,,pub-a")

    def test_write_error_skipped(self, tmp_path, aggregator, registry):
        """카테고리 파일 실패는 다음 카테고리로 진행"""
        (tmp_path / "ec2.csv").mkdir()
        written = write_category_files(tmp_path, aggregator, registry)
        assert [p.name for p in written] == ["vpc.csv"]


class TestCombinedCsv:
    def test_blank_line_between_categories(self, tmp_path, aggregator, registry):
        path = write_combined_csv(tmp_path / "all.csv", aggregator, registry)
        text = path.read_text(encoding="utf-8")

        blocks = text.split("\n\n")
        assert len(blocks) == 2
        assert blocks[0].splitlines()[0].startswith("Category,SubCategory1,Name")
        assert blocks[0].splitlines()[1].startswith("ec2,")
        assert blocks[1].splitlines()[1].startswith("vpc,VPC,prod")
        assert not text.endswith("\n\n")

    def test_single_category_no_separator(self, tmp_path, make_registry):
        registry = make_registry(FakeCollector("ec2"))
        agg = aggregate(registry, [CollectionResult("ec2", "r1", [make_resource("ec2", "a")])])
        text = write_combined_csv(tmp_path / "all.csv", agg, registry).read_text(encoding="utf-8")
        assert "\n\n" not in text

    def test_empty_aggregator(self, tmp_path, make_registry):
        registry = make_registry(FakeCollector("ec2"))
        path = write_combined_csv(tmp_path / "all.csv", aggregate(registry, []), registry)
        assert path.read_text(encoding="utf-8") == ""

    def test_write_failure_raises(self, tmp_path, aggregator, registry):
        with pytest.raises(OutputError):
            write_combined_csv(tmp_path / "missing" / "all.csv", aggregator, registry)

    def test_deterministic(self, tmp_path, registry):
        results = [
            CollectionResult("ec2", "r2", [make_resource("ec2", "b", "r2")]),
            CollectionResult("ec2", "r1", [make_resource("ec2", "a", "r1")]),
        ]
        first = write_combined_csv(tmp_path / "a.csv", aggregate(registry, results), registry).read_bytes()
        second = write_combined_csv(
            tmp_path / "b.csv", aggregate(registry, list(reversed(results))), registry
        ).read_bytes()
        assert first == second
