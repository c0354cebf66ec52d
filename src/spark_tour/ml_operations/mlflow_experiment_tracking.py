# Databricks notebook source

# MAGIC %md
# MAGIC # MLflow: Tracking Pipeline Fits
# MAGIC
# MAGIC Every (re)fit of the flights pipeline can be recorded as an MLflow run:
# MAGIC - **Parameters** - stage classes and their explicitly set parameters
# MAGIC - **Metrics** - AUC-ROC / AUC-PR on the held-out split
# MAGIC - **Artifacts** - optionally the fitted PipelineModel itself
# MAGIC - **Tags** - project and stage labels
# MAGIC
# MAGIC Monthly re-fits then line up as comparable runs in one experiment.

# COMMAND ----------

import mlflow
import mlflow.spark
from pyspark.ml import Pipeline, PipelineModel
from pyspark.ml.evaluation import BinaryClassificationEvaluator
from pyspark.sql import DataFrame

from spark_tour.config import tour_config

# COMMAND ----------

def pipeline_params(pipeline: Pipeline) -> dict:
    """Flatten the explicitly set stage parameters into MLflow-friendly keys."""
    params = {}
    for i, stage in enumerate(pipeline.getStages(), start=1):
        params[f"stage_{i}"] = type(stage).__name__
        for param in stage.params:
            if stage.isSet(param):
                params[f"stage_{i}.{param.name}"] = str(stage.getOrDefault(param))[:250]
    return params

# COMMAND ----------

def track_pipeline_fit(pipeline: Pipeline, train_df: DataFrame, test_df: DataFrame,
                       run_name: str,
                       experiment_name: str = tour_config.MLFLOW_EXPERIMENT_NAME,
                       log_model: bool = False):
    """
    Fit `pipeline` on `train_df` inside an MLflow run and score it on `test_df`.

    Returns:
        (PipelineModel, run_id)
    """
    mlflow.set_experiment(experiment_name)

    with mlflow.start_run(run_name=run_name) as run:

        # Log parameters
        mlflow.log_params(pipeline_params(pipeline))
        mlflow.log_param("training_rows", train_df.count())
        mlflow.log_param("test_rows", test_df.count())

        # Train the model
        model: PipelineModel = pipeline.fit(train_df)

        # Evaluate
        predictions = model.transform(test_df)
        auc = BinaryClassificationEvaluator(metricName="areaUnderROC").evaluate(predictions)
        pr_auc = BinaryClassificationEvaluator(metricName="areaUnderPR").evaluate(predictions)

        mlflow.log_metric("auc_roc", auc)
        mlflow.log_metric("auc_pr", pr_auc)

        if log_model:
            mlflow.spark.log_model(model, "flights_model")

        mlflow.set_tag("project", "spark_tour")
        mlflow.set_tag("pipeline", "flights_delay")

        print(f"Run ID: {run.info.run_id}")
        print(f"AUC-ROC: {auc:.4f}")
        print(f"AUC-PR: {pr_auc:.4f}")

        return model, run.info.run_id
