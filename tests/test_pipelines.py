"""Tests for the pipeline registry, base class and runner."""

from unittest.mock import patch

import pytest
from conftest import SOURCE_TABLE

from nba_profiles.exceptions import PipelineError, PublishError, SourceSchemaError
from nba_profiles.pipelines import (
    BasePipeline,
    ProfilePipeline,
    ReferencePipeline,
    create_pipeline,
    get_pipeline,
    list_pipelines,
    run_pipelines,
)
from nba_profiles.pipelines.registry import register_pipeline
from nba_profiles.publish import DuckDBTablePublisher, ParquetPublisher, PublishAuditLogger


class TestRegistry:
    """Tests for pipeline registration."""

    def test_builtin_pipelines_registered(self):
        assert list_pipelines()[:2] == ["profile", "reference"]
        assert get_pipeline("profile") is ProfilePipeline
        assert get_pipeline("reference") is ReferencePipeline

    def test_get_unknown_pipeline(self):
        assert get_pipeline("nonexistent") is None
        assert create_pipeline("nonexistent") is None

    def test_create_pipeline_passes_source(self):
        pipeline = create_pipeline("reference", source="main.other_stats")

        assert isinstance(pipeline, ReferencePipeline)
        assert pipeline.source == "main.other_stats"

    def test_source_defaults_to_settings(self):
        assert create_pipeline("profile").source == SOURCE_TABLE

    def test_register_requires_name(self):
        with pytest.raises(ValueError, match="must define 'name'"):

            @register_pipeline
            class Nameless(BasePipeline):
                def build_sql(self, source):
                    return ""


class TestBasePipelineRun:
    """Tests for BasePipeline.run() failure handling and audit."""

    def test_success_audited(self, source_con):
        publisher = DuckDBTablePublisher(source_con, run_id="run1")

        ReferencePipeline(source=SOURCE_TABLE).run(source_con, publisher)

        last = PublishAuditLogger(source_con).get_last_run("player_team_reference")
        assert last["status"] == "SUCCESS"
        assert last["row_count"] == 5
        assert last["run_id"] == "run1"

    def test_schema_failure_stops_before_staging(self, con):
        publisher = DuckDBTablePublisher(con, run_id="run1")

        with pytest.raises(SourceSchemaError):
            ReferencePipeline(source="missing_table").run(con, publisher)

        assert publisher.staging_artifacts() == []
        failed = PublishAuditLogger(con).get_failed_runs("player_team_reference")
        assert failed[0]["error_message"].startswith("SourceSchemaError")

    def test_publish_failure_audited_and_raised(self, source_con):
        publisher = DuckDBTablePublisher(source_con, run_id="run1")

        with (
            patch.object(DuckDBTablePublisher, "commit", side_effect=RuntimeError("locked")),
            pytest.raises(PublishError),
        ):
            ProfilePipeline(source=SOURCE_TABLE).run(source_con, publisher)

        assert not publisher.exists("player_profiles")
        last = PublishAuditLogger(source_con).get_last_run("player_profiles")
        assert last["status"] == "FAILED"


class TestRunPipelines:
    """Tests for run_pipelines()."""

    def test_runs_all_pipelines(self, source_con):
        results = run_pipelines(source_con, source=SOURCE_TABLE, run_id="run1")

        assert [r.dataset for r in results] == ["player_profiles", "player_team_reference"]
        assert [r.row_count for r in results] == [7, 5]
        assert {r.run_id for r in results} == {"run1"}

    def test_runs_named_pipeline(self, source_con):
        results = run_pipelines(source_con, names=["reference"], source=SOURCE_TABLE)

        assert [r.dataset for r in results] == ["player_team_reference"]
        assert not DuckDBTablePublisher(source_con).exists("player_profiles")

    def test_parquet_target(self, source_con, tmp_path):
        results = run_pipelines(
            source_con, target="parquet", output_dir=tmp_path, source=SOURCE_TABLE
        )

        assert all(r.target == "parquet" for r in results)
        assert (tmp_path / "player_profiles.parquet").exists()
        assert (tmp_path / "player_team_reference.parquet").exists()

    def test_rerun_reproduces_output(self, source_con, tmp_path):
        run_pipelines(source_con, target="parquet", output_dir=tmp_path, source=SOURCE_TABLE)
        publisher = ParquetPublisher(source_con, output_dir=tmp_path)
        first = publisher.read("player_profiles")

        run_pipelines(source_con, target="parquet", output_dir=tmp_path, source=SOURCE_TABLE)

        assert publisher.read("player_profiles") == first

    def test_unknown_pipeline_rejected_before_running(self, source_con):
        with pytest.raises(ValueError, match="Unknown pipeline 'bogus'"):
            run_pipelines(source_con, names=["reference", "bogus"], source=SOURCE_TABLE)

        assert not DuckDBTablePublisher(source_con).exists("player_team_reference")

    def test_first_failure_aborts_run(self, con):
        with pytest.raises(PipelineError):
            run_pipelines(con, source="missing_table")

        assert PublishAuditLogger(con).get_last_run("player_team_reference") is None
