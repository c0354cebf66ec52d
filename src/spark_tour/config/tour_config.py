# Databricks notebook source

# =============================================================================
# TOUR CONFIGURATION
# Centralized configuration for the Spark walkthroughs
# =============================================================================

import os
import tempfile

# ---- Connection ----
# "local[*]" for a local engine, a spark:// or yarn URL for a cluster,
# "databricks" to go through Databricks Connect
MASTER = os.environ.get("SPARK_TOUR_MASTER", "local[*]")
APP_NAME = "spark-tour"

# Engine version the walkthroughs expect; empty string disables the check
SPARK_VERSION = os.environ.get("SPARK_TOUR_SPARK_VERSION", "3.5")
SPARK_LOG_LEVEL = "WARN"

# Default session settings (small local cluster)
SPARK_CONF = {
    "spark.sql.shuffle.partitions": "4",
    "spark.sql.adaptive.enabled": "true",
    "spark.sql.execution.arrow.pyspark.enabled": "true",
}

# ---- Storage Paths ----
WORK_DIR = os.environ.get(
    "SPARK_TOUR_WORK_DIR", os.path.join(tempfile.gettempdir(), "spark_tour")
)
EVENT_LOG_DIR = os.path.join(WORK_DIR, "event_logs")
DATA_DIR = os.path.join(WORK_DIR, "data")
MODEL_DIR = os.path.join(WORK_DIR, "models")

# Saved ML artifacts
FLIGHTS_PIPELINE_PATH = os.path.join(MODEL_DIR, "flights_pipeline")
FLIGHTS_MODEL_PATH = os.path.join(MODEL_DIR, "flights_model")
NEW_FLIGHTS_MODEL_PATH = os.path.join(MODEL_DIR, "new_flights_model")

# ---- Table Names ----
IRIS_TABLE = "iris"
FLIGHTS_TABLE = "flights"
BATTING_TABLE = "batting"
MTCARS_TABLE = "mtcars"

# ---- Sample Data Sizes ----
NUM_FLIGHTS = 20000
NUM_PLAYERS = 400
DATA_SEED = 42

# ---- Machine Learning ----
MTCARS_MIN_HP = 100
MTCARS_PARTITION_WEIGHTS = {"training": 0.5, "test": 0.5}
MTCARS_PARTITION_SEED = 1099

# Flights pipeline
DELAY_THRESHOLD = 15.0                       # Minutes of departure delay
SCHED_DEP_TIME_SPLITS = [400, 800, 1200, 1600, 2000, 2400]
FLIGHTS_FORMULA = "delayed ~ month + day + hours + distance"
FLIGHTS_PARTITION_WEIGHTS = {"training": 0.1, "testing": 0.1, "rest": 0.8}
FLIGHTS_PARTITION_SEED = 2013
REFIT_FRACTION = 0.1

# Reload example: predictions for a single day
RELOAD_MONTH = 7
RELOAD_DAY = 5

# ---- MLflow Settings ----
MLFLOW_EXPERIMENT_NAME = "spark_tour_flights_pipeline"

# ---- H2O / Sparkling Water ----
SPARKLING_WATER_VERSION = "3.46.0.6-1-3.5"
H2O_GLM_FEATURES = ["wt", "cyl"]
H2O_GLM_RESPONSE = "mpg"
RUN_H2O_SECTION = os.environ.get("SPARK_TOUR_WITH_H2O") == "1"
