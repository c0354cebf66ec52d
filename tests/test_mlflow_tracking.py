# Databricks notebook source

# MAGIC %md
# MAGIC # Unit Tests: MLflow Tracking
# MAGIC
# MAGIC Pipeline fits logged to a throwaway SQLite tracking store.

# COMMAND ----------

import mlflow
import pytest

from spark_tour.data_generator import sample_datasets
from spark_tour.ingest.copy_to import copy_to, sdf_partition
from spark_tour.ml_operations.mlflow_experiment_tracking import pipeline_params, track_pipeline_fit
from spark_tour.ml_pipelines.flights_pipeline import build_flights_pipeline

# COMMAND ----------

@pytest.fixture
def tracking_uri(tmp_path):
    previous = mlflow.get_tracking_uri()
    uri = f"sqlite:///{tmp_path / 'mlflow.db'}"
    mlflow.set_tracking_uri(uri)
    yield uri
    mlflow.set_tracking_uri(previous)


class TestPipelineParams:

    def test_flattened_stage_params(self):
        params = pipeline_params(build_flights_pipeline("tracked_flights"))

        assert params["stage_1"] == "SQLTransformer"
        assert params["stage_2"] == "Binarizer"
        assert params["stage_2.threshold"] == "15.0"
        assert params["stage_4.formula"] == "delayed ~ month + day + hours + distance"
        assert params["stage_5"] == "LogisticRegression"
        assert all(len(v) <= 250 for v in params.values())


class TestTrackPipelineFit:

    def test_run_records_params_and_metrics(self, spark, tracking_uri):
        flights = copy_to(spark, sample_datasets.flights(n=2000), "tracked_flights",
                          overwrite=True)
        splits = sdf_partition(flights, seed=3, training=0.5, testing=0.5)

        model, run_id = track_pipeline_fit(
            build_flights_pipeline("tracked_flights"),
            splits["training"], splits["testing"],
            run_name="test_fit", experiment_name="spark_tour_tests",
        )

        run = mlflow.get_run(run_id)
        assert len(model.stages) == 5
        assert run.data.params["stage_2.threshold"] == "15.0"
        assert int(run.data.params["training_rows"]) > 0
        assert 0.0 <= run.data.metrics["auc_roc"] <= 1.0
        assert 0.0 <= run.data.metrics["auc_pr"] <= 1.0
        assert run.data.tags["pipeline"] == "flights_delay"
