# Databricks notebook source

# MAGIC %md
# MAGIC # Tests: Walkthroughs and Orchestration
# MAGIC
# MAGIC Walkthrough sections run against the shared session; stage runner banners.

# COMMAND ----------

import os

import matplotlib.pyplot as plt
import pytest
from pyspark.ml import PipelineModel

from spark_tour.config import tour_config
from spark_tour.data_generator import sample_datasets
from spark_tour.ingest.copy_to import copy_to
from spark_tour.orchestration.run_walkthroughs import run_stage
from spark_tour.walkthroughs import ml_pipelines_demo, spark_tutorial

# COMMAND ----------

class TestLocalPipeline:

    def test_am_on_cyl_and_mpg(self):
        coefs = ml_pipelines_demo.local_pipeline(sample_datasets.mtcars())
        assert list(coefs.index) == ["(Intercept)", "mpg", "cyl_c6", "cyl_c8"]


class TestSparkTutorialSections:

    def test_tour_sections_on_shared_session(self, spark, tmp_path):
        tables = spark_tutorial.copy_datasets(spark)
        assert set(tables) == {"iris", "flights", "batting"}

        open_figures = plt.get_fignums()
        delay = spark_tutorial.dplyr_examples(tables["flights"], str(tmp_path / "delays.png"))
        assert plt.get_fignums() == open_figures
        assert (delay["count"] > 20).all()
        assert (tmp_path / "delays.png").exists()

        best = spark_tutorial.window_function_example(tables["batting"]).collect()
        assert all(r["H"] > 0 for r in best)

        assert len(spark_tutorial.sql_example(spark)) == 10

        fit = spark_tutorial.machine_learning_example(spark)
        assert set(fit.coefficients()) == {"(Intercept)", "wt", "cyl"}

        iris_csv, iris_parquet, iris_json = spark_tutorial.read_write_example(
            spark, tables["iris"], str(tmp_path)
        )
        assert iris_csv.count() == iris_parquet.count() == iris_json.count() == 150

        per_species = spark_tutorial.distributed_apply_example(spark, tables["iris"])
        assert per_species.count() == 6

        lines = spark_tutorial.extension_example(spark, str(tmp_path))
        assert lines == tour_config.NUM_FLIGHTS + 1

        spark_tutorial.table_utilities_example(spark)
        assert not spark.catalog.isCached(tour_config.BATTING_TABLE)

        spark_tutorial.connection_utilities_example(spark)


class TestMlPipelinesDemo:

    @pytest.fixture
    def artifact_paths(self, tmp_path, monkeypatch):
        paths = {
            "FLIGHTS_PIPELINE_PATH": str(tmp_path / "flights_pipeline"),
            "FLIGHTS_MODEL_PATH": str(tmp_path / "flights_model"),
            "NEW_FLIGHTS_MODEL_PATH": str(tmp_path / "new_flights_model"),
        }
        for name, path in paths.items():
            monkeypatch.setattr(tour_config, name, path)
        return paths

    def test_fit_save_reload_refit(self, spark, artifact_paths):
        spark_flights = copy_to(spark, sample_datasets.flights(n=5000),
                                tour_config.FLIGHTS_TABLE, overwrite=True)

        transformer = ml_pipelines_demo.feature_query_example(spark)
        assert "__THIS__" in transformer.getStatement()

        flights_pipeline, fitted = ml_pipelines_demo.fit_example(spark_flights)
        assert isinstance(fitted, PipelineModel)

        new_model = ml_pipelines_demo.persistence_example(
            spark, spark_flights, flights_pipeline, fitted
        )
        assert isinstance(new_model, PipelineModel)
        for path in artifact_paths.values():
            assert os.path.isdir(os.path.join(path, "metadata"))


class TestRunStage:

    def test_steps_run_in_order(self, capsys):
        calls = []
        run_stage("demo", [lambda: calls.append(1), lambda: calls.append(2)])

        assert calls == [1, 2]
        assert "Stage 'demo' completed" in capsys.readouterr().out

    def test_failure_is_reported_and_raised(self, capsys):
        def broken():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            run_stage("demo", [broken])
        out = capsys.readouterr().out
        assert "X Failed:" in out
        assert "boom" in out
