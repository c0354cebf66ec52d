# Databricks notebook source

# MAGIC %md
# MAGIC # Walkthrough: Spark ML Pipelines
# MAGIC
# MAGIC An interactive analysis (filters, derived columns, a model) can be written down
# MAGIC as a formal ML Pipeline, saved, and handed to a scheduled Spark job as is.
# MAGIC
# MAGIC ## Two data products
# MAGIC | Product | What it is | Used for |
# MAGIC |---------|-----------|----------|
# MAGIC | **Pipeline** | The "empty" sequence of steps, no data seen yet | Re-fitting on fresh data (e.g. monthly) |
# MAGIC | **PipelineModel** | The pipeline after `fit`, with learned coefficients | Producing predictions in daily jobs |
# MAGIC
# MAGIC Both are saved in Spark ML's own format, so the production job needs Spark only.

# COMMAND ----------

import numpy as np
import pandas as pd
from pyspark.sql import functions as F

from spark_tour.config import tour_config
from spark_tour.connection.session import spark_connect, spark_disconnect
from spark_tour.data_generator import sample_datasets
from spark_tour.ingest.copy_to import copy_to, sample_frac, sdf_partition
from spark_tour.ml_operations.mlflow_experiment_tracking import track_pipeline_fit
from spark_tour.ml_pipelines.feature_transformers import ft_dplyr_transformer, ml_param
from spark_tour.ml_pipelines.flights_pipeline import (
    build_flights_pipeline, describe_pipeline, flights_feature_query, ml_fit,
    ml_load, ml_save, ml_transform, tally_predictions,
)

# COMMAND ----------

# MAGIC %md
# MAGIC ## A Local Pipeline, for Comparison
# MAGIC
# MAGIC In plain pandas, "pipeline" is just a function: a transformation followed by a
# MAGIC model fit. Nothing runs until data is passed in.

# COMMAND ----------

def local_pipeline(pdf: pd.DataFrame) -> pd.Series:
    """`am ~ cyl + mpg` with cylinders as a category, by least squares."""
    pdf = pdf.assign(cyl="c" + pdf["cyl"].astype(str))
    X = pd.get_dummies(pdf[["cyl", "mpg"]], columns=["cyl"], drop_first=True, dtype=float)
    X.insert(0, "(Intercept)", 1.0)
    beta, *_ = np.linalg.lstsq(X.to_numpy(), pdf["am"].astype(float).to_numpy(), rcond=None)
    return pd.Series(beta, index=X.columns)

# COMMAND ----------

# MAGIC %md
# MAGIC ## Feature Query -> SQL Transformer
# MAGIC
# MAGIC The feature preparation is first written as an ordinary query against `flights`.
# MAGIC As a pipeline stage, the table name is replaced with `__THIS__`.

# COMMAND ----------

def feature_query_example(spark):
    df = spark.sql(flights_feature_query(tour_config.FLIGHTS_TABLE))
    df.show(5)

    transformer = ft_dplyr_transformer(
        flights_feature_query(tour_config.FLIGHTS_TABLE), tour_config.FLIGHTS_TABLE
    )
    print(ml_param(transformer, "statement"))
    return transformer

# COMMAND ----------

# MAGIC %md
# MAGIC ## Pipeline -> PipelineModel

# COMMAND ----------

def fit_example(spark_flights, track_with_mlflow: bool = False):
    flights_pipeline = build_flights_pipeline(tour_config.FLIGHTS_TABLE)
    print(describe_pipeline(flights_pipeline))

    partitioned_flights = sdf_partition(
        spark_flights,
        seed=tour_config.FLIGHTS_PARTITION_SEED,
        **tour_config.FLIGHTS_PARTITION_WEIGHTS,
    )

    if track_with_mlflow:
        fitted_pipeline, _ = track_pipeline_fit(
            flights_pipeline,
            partitioned_flights["training"],
            partitioned_flights["testing"],
            run_name="flights_initial_fit",
        )
    else:
        fitted_pipeline = ml_fit(flights_pipeline, partitioned_flights["training"])
    print(describe_pipeline(fitted_pipeline))

    predictions = ml_transform(fitted_pipeline, partitioned_flights["testing"])
    tally_predictions(predictions).show()

    return flights_pipeline, fitted_pipeline

# COMMAND ----------

# MAGIC %md
# MAGIC ## Save, Reload, Re-fit

# COMMAND ----------

def persistence_example(spark, spark_flights, flights_pipeline, fitted_pipeline,
                        track_with_mlflow: bool = False):
    ml_save(flights_pipeline, tour_config.FLIGHTS_PIPELINE_PATH, overwrite=True)
    ml_save(fitted_pipeline, tour_config.FLIGHTS_MODEL_PATH, overwrite=True)

    # Predictions for a single day from the reloaded model
    reloaded_model = ml_load(spark, tour_config.FLIGHTS_MODEL_PATH)
    new_df = spark_flights.filter(
        (F.col("month") == tour_config.RELOAD_MONTH) & (F.col("day") == tour_config.RELOAD_DAY)
    )
    ml_transform(reloaded_model, new_df).select("delayed", "probability", "prediction").show(10)

    # Re-fit the saved (unfit) pipeline on a fresh sample
    reloaded_pipeline = ml_load(spark, tour_config.FLIGHTS_PIPELINE_PATH)
    new_sample = sample_frac(spark_flights, tour_config.REFIT_FRACTION)
    if track_with_mlflow:
        new_model, _ = track_pipeline_fit(
            reloaded_pipeline, new_sample, new_df, run_name="flights_refit"
        )
    else:
        new_model = ml_fit(reloaded_pipeline, new_sample)
    print(describe_pipeline(new_model))

    ml_save(new_model, tour_config.NEW_FLIGHTS_MODEL_PATH, overwrite=True)
    return new_model

# COMMAND ----------

def main(track_with_mlflow: bool = False):
    print(local_pipeline(sample_datasets.mtcars()))

    spark = spark_connect()
    spark_flights = copy_to(spark, sample_datasets.flights(), tour_config.FLIGHTS_TABLE,
                            overwrite=True)

    feature_query_example(spark)
    flights_pipeline, fitted_pipeline = fit_example(spark_flights, track_with_mlflow)
    persistence_example(spark, spark_flights, flights_pipeline, fitted_pipeline,
                        track_with_mlflow)

    spark_disconnect(spark)

# COMMAND ----------

if __name__ == "__main__":
    main()
