# Databricks notebook source

# MAGIC %md
# MAGIC # ML Pipeline: Flight Delay Classifier
# MAGIC
# MAGIC **Source**: `flights` table
# MAGIC **Pattern**: Pipeline (unfit) -> PipelineModel (fit) -> predictions
# MAGIC **Artifacts**: saved Pipeline and PipelineModel directories
# MAGIC
# MAGIC ## Stages
# MAGIC ```
# MAGIC ┌──────────────────┐   ┌────────────┐   ┌─────────────┐   ┌──────────┐   ┌────────────────────┐
# MAGIC │ SQLTransformer    │──>│ Binarizer  │──>│ Bucketizer  │──>│ RFormula │──>│ LogisticRegression │
# MAGIC │ (feature query)   │   │ delayed    │   │ hours       │   │          │   │                    │
# MAGIC └──────────────────┘   └────────────┘   └─────────────┘   └──────────┘   └────────────────────┘
# MAGIC ```
# MAGIC
# MAGIC The saved directories are Spark ML's own format: any Spark session (Scala, Java,
# MAGIC Python) can load them, with no dependency on this package.

# COMMAND ----------

import json

from pyspark.ml import Pipeline, PipelineModel
from pyspark.ml.classification import LogisticRegression
from pyspark.sql import DataFrame, SparkSession

from spark_tour.config import tour_config
from spark_tour.ml_pipelines.feature_transformers import (
    ft_binarizer, ft_bucketizer, ft_dplyr_transformer, ft_r_formula,
)

# COMMAND ----------

PIPELINE_CLASS = "org.apache.spark.ml.Pipeline"
PIPELINE_MODEL_CLASS = "org.apache.spark.ml.PipelineModel"

# COMMAND ----------

def flights_feature_query(table: str = tour_config.FLIGHTS_TABLE) -> str:
    """Departed flights, with month and day turned into categorical labels."""
    return f"""
        SELECT
            CAST(dep_delay AS DOUBLE) AS dep_delay,
            sched_dep_time,
            CONCAT('m', month) AS month,
            CONCAT('d', day) AS day,
            distance
        FROM {table}
        WHERE dep_delay IS NOT NULL
    """

# COMMAND ----------

def build_flights_pipeline(table: str = tour_config.FLIGHTS_TABLE) -> Pipeline:
    """Assemble the unfit five-stage pipeline. No data is read here."""
    return Pipeline(stages=[
        ft_dplyr_transformer(flights_feature_query(table), table),
        ft_binarizer(
            input_col="dep_delay",
            output_col="delayed",
            threshold=tour_config.DELAY_THRESHOLD,
        ),
        ft_bucketizer(
            input_col="sched_dep_time",
            output_col="hours",
            splits=tour_config.SCHED_DEP_TIME_SPLITS,
        ),
        ft_r_formula(tour_config.FLIGHTS_FORMULA),
        LogisticRegression(),
    ])

# COMMAND ----------

# MAGIC %md
# MAGIC ## Fit, Transform, Inspect

# COMMAND ----------

def ml_fit(pipeline: Pipeline, df: DataFrame) -> PipelineModel:
    return pipeline.fit(df)


def ml_transform(model: PipelineModel, df: DataFrame) -> DataFrame:
    return model.transform(df)


def tally_predictions(predictions: DataFrame) -> DataFrame:
    """Confusion counts: one row per (delayed, prediction) pair."""
    return (
        predictions
        .groupBy("delayed", "prediction")
        .count()
        .orderBy("delayed", "prediction")
    )

# COMMAND ----------

def describe_pipeline(obj) -> str:
    """
    Text listing of a Pipeline or PipelineModel: every stage with the parameters
    explicitly set on it, plus coefficients once the final stage is fitted.
    """
    if isinstance(obj, Pipeline):
        kind, stages = "Pipeline", obj.getStages()
    else:
        kind, stages = "PipelineModel", obj.stages

    lines = [f"{kind} ({obj.uid}) with {len(stages)} stages"]
    for i, stage in enumerate(stages, start=1):
        lines.append(f"  |--{i} {type(stage).__name__} ({stage.uid})")
        for param in stage.params:
            if stage.isSet(param):
                lines.append(f"  |     {param.name}: {stage.getOrDefault(param)}")
        if hasattr(stage, "coefficients"):
            lines.append(f"  |     intercept: {stage.intercept}")
            lines.append(f"  |     coefficients: {list(stage.coefficients.toArray())}")
    return "\n".join(lines)

# COMMAND ----------

# MAGIC %md
# MAGIC ## Persistence
# MAGIC
# MAGIC `ml_save` writes a directory (`metadata/` + `stages/`). `ml_load` reads the
# MAGIC class recorded in `metadata/` to decide whether it is a Pipeline or a PipelineModel.

# COMMAND ----------

def ml_save(obj, path: str, overwrite: bool = False) -> None:
    writer = obj.write()
    if overwrite:
        writer = writer.overwrite()
    writer.save(path)
    print(f"Saved {type(obj).__name__} to {path}")


def ml_load(spark: SparkSession, path: str):
    """Load a saved Pipeline or PipelineModel into the open session."""
    metadata = json.loads(
        spark.sparkContext.textFile(f"{path.rstrip('/')}/metadata").first()
    )
    saved_class = metadata["class"]

    if saved_class == PIPELINE_MODEL_CLASS:
        return PipelineModel.load(path)
    if saved_class == PIPELINE_CLASS:
        return Pipeline.load(path)
    raise ValueError(f"{path} holds a {saved_class}, not a Pipeline or PipelineModel")
