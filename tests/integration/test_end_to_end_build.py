"""End-to-end tests: source tree on disk -> generated asset directory."""

import json
import logging

import pytest
from loguru import logger as loguru_logger

from tutor_pipeline.asset_store import AssetStore
from tutor_pipeline.cli import build_assets, generate_topics, validate_assets
from tutor_pipeline.config import PipelineConfig
from tutor_pipeline.errors import OutputDirectoryError
from tutor_pipeline.index_generator import build_topic_index, parse_asset_filename, write_topic_index
from tutor_pipeline.pipeline_driver import PipelineDriver

LINEARSEARCH_LEGACY = '''
def generate_pseudocode_de():
    return """Schritt 1: i = 0"""


def generate_pseudocode_fa():
    return """گام ۱..."""
'''


@pytest.fixture
def content(make_topic):
    make_topic(
        "bubblesort",
        {
            "variants.de.v1.json": [
                {
                    "id": "basic",
                    "is_default": True,
                    "label": {"de": "Einfach"},
                    "pseudocode": {"de": "Schritt 1..."},
                },
                {"id": "optimized", "pseudocode": {"de": "Optimiert"}},
            ],
            "variants.fa.v1.json": [
                {"id": "optimized", "pseudocode": {"fa": "بهینه"}},
                {"id": "recursive", "pseudocode": {"fa": "بازگشتی"}},
            ],
            "explain.de.v1.json": {
                "title": "Bubblesort",
                "sections": [{"id": "definition", "body": "X"}, {"id": "extra", "body": "Y"}],
                "sections_order": ["extra", "definition"],
            },
            "exam.fa.v1.json": {
                "questions": [
                    {"id": "q2", "prompt": "دوم", "answer": "ب"},
                    {"id": "q1", "task": "اول", "choices": ["الف", "ب"], "answer": "الف"},
                ]
            },
        },
    )
    make_topic("linearsearch", {"legacy.py": LINEARSEARCH_LEGACY})
    make_topic("empty_topic", {})


@pytest.fixture
def config(source_dir, output_dir):
    return PipelineConfig(source_dir=source_dir, output_dir=output_dir)


def read_asset(output_dir, name):
    return json.loads((output_dir / name).read_text(encoding="utf-8"))


def snapshot(directory):
    return {path.name: path.read_bytes() for path in sorted(directory.iterdir())}


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    loguru_logger.remove()


class TestScenarios:
    def test_default_variant_pseudocode(self, content, config, output_dir):
        PipelineDriver(config).run()

        asset = read_asset(output_dir, "bubblesort.de.pseudocode.json")
        assert asset["selected_variant"] == "basic"
        assert asset["pseudocode"] == "Schritt 1..."
        assert asset["title"] == "Bubblesort"
        assert [v["id"] for v in asset["variants"]] == ["basic", "optimized", "recursive"]

    def test_legacy_pseudocode_used(self, content, config, output_dir):
        PipelineDriver(config).run()

        asset = read_asset(output_dir, "linearsearch.fa.pseudocode.json")
        assert asset["pseudocode"] == "گام ۱..."
        assert asset["selected_variant"] == "default"
        assert asset["title"] == "Linearsearch (FA)"

    def test_missing_exam_is_skipped(self, content, config, output_dir):
        report = PipelineDriver(config).run()

        assert not (output_dir / "bubblesort.de.exam.json").exists()
        assert "bubblesort.de.exam :: exam file missing" in report.skipped

    def test_explain_sections_order(self, content, config, output_dir):
        PipelineDriver(config).run()

        asset = read_asset(output_dir, "bubblesort.de.explain.json")
        assert asset["blocks"] == [
            {"kind": "extra", "text": "Y"},
            {"kind": "definition", "text": "X"},
        ]
        assert asset["summary"] == "X"


class TestProperties:
    def test_idempotent(self, content, config, output_dir):
        PipelineDriver(config).run()
        first = snapshot(output_dir)

        PipelineDriver(config).run()

        assert snapshot(output_dir) == first

    def test_parallel_build_matches_sequential(self, content, config, source_dir, tmp_path):
        report = PipelineDriver(config).run()
        parallel_config = PipelineConfig(source_dir=source_dir, output_dir=tmp_path / "parallel", workers=4)

        parallel_report = PipelineDriver(parallel_config).run()

        assert snapshot(tmp_path / "parallel") == snapshot(config.output_dir)
        assert parallel_report.skipped == report.skipped

    def test_debug_logging_does_not_change_output(self, content, config, output_dir, tmp_path, caplog):
        report = PipelineDriver(config).run()
        expected = snapshot(output_dir)
        caplog.set_level(logging.DEBUG)
        debug_config = PipelineConfig(source_dir=config.source_dir, output_dir=tmp_path / "debug")

        debug_report = PipelineDriver(debug_config).run()

        assert (tmp_path / "debug" / "linearsearch.fa.pseudocode.json").exists()
        assert not [item for item in debug_report.skipped if "topic failed" in item]
        assert debug_report.skipped == report.skipped
        assert snapshot(tmp_path / "debug") == expected

    def test_fallback_to_other_language(self, content, config, output_dir):
        PipelineDriver(config).run()

        asset = read_asset(output_dir, "bubblesort.fa.pseudocode.json")
        texts = {v["id"]: v["pseudocode"] for v in asset["variants"]}
        assert texts == {"basic": "Schritt 1...", "optimized": "بهینه", "recursive": "بازگشتی"}
        assert asset["selected_variant"] == "basic"

    def test_exam_questions_sorted(self, content, config, output_dir):
        PipelineDriver(config).run()

        asset = read_asset(output_dir, "bubblesort.fa.exam.json")
        assert [q["id"] for q in asset["questions"]] == ["q1", "q2"]
        assert asset["questions"][0]["type"] == "mc"
        assert asset["questions"][0]["choices"] == ["الف", "ب"]
        assert "choices" not in asset["questions"][1]

    def test_stale_files_removed(self, content, config, output_dir):
        output_dir.mkdir(parents=True)
        (output_dir / "removed_topic.de.exam.json").write_text("{}", encoding="utf-8")

        PipelineDriver(config).run()

        assert not (output_dir / "removed_topic.de.exam.json").exists()

    def test_report(self, content, config):
        report = PipelineDriver(config).run()

        assert report.topics_included == ["bubblesort", "linearsearch"]
        assert report.files_written == sorted(report.files_written)
        assert "empty_topic.de.pseudocode :: no pseudocode source" in report.skipped
        assert "empty_topic.fa.explain :: explain file missing" in report.skipped
        assert "linearsearch.de.explain :: explain file missing" in report.skipped
        assert len(report.files_written) == 6

    def test_malformed_source_isolated(self, content, make_topic, config, output_dir):
        make_topic("broken", {"exam.de.v1.json": "{nope", "variants.de.v1.json": "]["})

        report = PipelineDriver(config).run()

        assert "broken.de.exam :: exam file malformed" in report.skipped
        assert (output_dir / "bubblesort.de.pseudocode.json").exists()

    def test_topic_failure_isolated(self, content, config, output_dir, monkeypatch):
        driver = PipelineDriver(config)
        original = driver.build_topic

        def flaky(topic):
            if topic == "bubblesort":
                raise RuntimeError("boom")
            return original(topic)

        monkeypatch.setattr(driver, "build_topic", flaky)
        report = driver.run()

        assert "bubblesort :: topic failed: boom" in report.skipped
        assert (output_dir / "linearsearch.de.pseudocode.json").exists()

    def test_output_dir_failure_is_fatal(self, content, source_dir, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        config = PipelineConfig(source_dir=source_dir, output_dir=blocker / "run")

        with pytest.raises(OutputDirectoryError):
            PipelineDriver(config).run()

    def test_index_matches_generated_files(self, content, config, output_dir):
        PipelineDriver(config).run()

        index = write_topic_index(output_dir, config.index_path)

        parsed = {parse_asset_filename(p.name).topic for p in output_dir.iterdir()}
        assert index.topics == sorted(parsed)
        assert index.availability["linearsearch"] == {"de": ["pseudocode"], "fa": ["pseudocode"]}
        store = AssetStore(output_dir, config.index_path)
        assert store.load_topics()["topics"] == ["bubblesort", "linearsearch"]
        assert store.load_asset("bubblesort", "de")["selected_variant"] == "basic"

    def test_index_regenerated_independently(self, content, config, output_dir):
        PipelineDriver(config).run()
        (output_dir / "bubblesort.fa.exam.json").unlink()

        index = build_topic_index(output_dir)

        assert "exam" not in index.availability["bubblesort"].get("fa", [])


class TestCommandLine:
    def test_build_cli(self, content, source_dir, tmp_path):
        run_dir = tmp_path / "data" / "run"
        report_path = tmp_path / "report.json"

        exit_code = build_assets.main(
            ["--source", str(source_dir), "--output", str(run_dir), "--report", str(report_path)]
        )

        assert exit_code == 0
        index = json.loads((tmp_path / "data" / "topics.json").read_text(encoding="utf-8"))
        assert index["topics"] == ["bubblesort", "linearsearch"]
        report = json.loads(report_path.read_text(encoding="utf-8"))
        assert "bubblesort.de.exam :: exam file missing" in report["skipped"]
        assert validate_assets.main(["--assets", str(run_dir)]) == 0

    def test_build_cli_debug_level(self, content, source_dir, tmp_path):
        run_dir = tmp_path / "data" / "run"
        report_path = tmp_path / "report.json"

        exit_code = build_assets.main(
            [
                "--source", str(source_dir),
                "--output", str(run_dir),
                "--report", str(report_path),
                "--log-level", "DEBUG",
            ]
        )

        assert exit_code == 0
        assert (run_dir / "linearsearch.fa.pseudocode.json").exists()
        report = json.loads(report_path.read_text(encoding="utf-8"))
        assert not [item for item in report["skipped"] if "topic failed" in item]

    def test_build_cli_invalid_language(self, content, source_dir, tmp_path):
        exit_code = build_assets.main(
            ["--source", str(source_dir), "--output", str(tmp_path / "run"), "--languages", "en"]
        )

        assert exit_code == 1

    def test_generate_topics_cli(self, content, config, output_dir, tmp_path):
        PipelineDriver(config).run()
        index_path = tmp_path / "index.json"

        exit_code = generate_topics.main(
            ["--assets", str(output_dir), "--output", str(index_path), "--no-availability"]
        )

        assert exit_code == 0
        assert json.loads(index_path.read_text(encoding="utf-8")) == {
            "topics": ["bubblesort", "linearsearch"],
            "source": "generated-from-assets",
        }

    def test_generate_topics_cli_missing_dir(self, tmp_path):
        exit_code = generate_topics.main(
            ["--assets", str(tmp_path / "missing"), "--output", str(tmp_path / "i.json")]
        )

        assert exit_code == 1
