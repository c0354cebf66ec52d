# Databricks notebook source

# MAGIC %md
# MAGIC # Connection Lifecycle
# MAGIC
# MAGIC Open a session, optionally pin the engine version, close it at the end.
# MAGIC
# MAGIC | Master | Session |
# MAGIC |--------|---------|
# MAGIC | `local[*]` | Local engine inside this Python process' JVM |
# MAGIC | `spark://host:7077`, `yarn` | Remote cluster |
# MAGIC | `databricks` | Databricks Connect (DATABRICKS_HOST / TOKEN / CLUSTER_ID) |
# MAGIC
# MAGIC There is no retry or pooling: a failed connection raises straight from PySpark.

# COMMAND ----------

import glob
import os
import webbrowser
from collections import deque
from urllib.parse import urlparse

import pyspark
from pyspark.sql import SparkSession

from spark_tour.config import tour_config

# COMMAND ----------

def check_spark_version(version: str) -> None:
    """Raise if the installed engine does not match the requested version prefix."""
    if not version:
        return
    installed = pyspark.__version__
    if installed != version and not installed.startswith(f"{version}."):
        raise ValueError(
            f"Requested Spark {version} but PySpark {installed} is installed"
        )

# COMMAND ----------

def spark_connect(master: str = tour_config.MASTER,
                  version: str = tour_config.SPARK_VERSION,
                  app_name: str = tour_config.APP_NAME,
                  config: dict = None,
                  enable_delta: bool = False) -> SparkSession:
    """
    Open a Spark session.

    Args:
        master: Cluster URL, "local[*]" or "databricks"
        version: Expected engine version prefix ("3.5"); falsy to skip the check
        app_name: Application name shown in the web console
        config: Extra Spark settings, merged over the defaults
        enable_delta: Wire in the Delta Lake SQL extension and catalog
    """
    if master == "databricks":
        from databricks.connect import DatabricksSession
        spark = DatabricksSession.builder.getOrCreate()
        print(f"Connected to Databricks, Spark {spark.version}")
        return spark

    check_spark_version(version)

    os.makedirs(tour_config.EVENT_LOG_DIR, exist_ok=True)
    settings = dict(tour_config.SPARK_CONF)
    settings.update({
        "spark.eventLog.enabled": "true",
        "spark.eventLog.dir": f"file://{tour_config.EVENT_LOG_DIR}",
    })
    settings.update(config or {})

    active = SparkSession.getActiveSession()
    if active is not None:
        print(
            f"WARNING: reusing the active Spark session ({active.sparkContext.master}, "
            f"{active.sparkContext.appName}); master, app name, event log and Delta "
            f"settings only take effect after spark_disconnect"
        )

    builder = SparkSession.builder.appName(app_name).master(master)
    for key, value in settings.items():
        builder = builder.config(key, value)

    if enable_delta:
        from delta import configure_spark_with_delta_pip
        builder = (
            builder
            .config("spark.sql.extensions", "io.delta.sql.DeltaSparkSessionExtension")
            .config("spark.sql.catalog.spark_catalog",
                    "org.apache.spark.sql.delta.catalog.DeltaCatalog")
        )
        builder = configure_spark_with_delta_pip(builder)

    spark = builder.getOrCreate()
    spark.sparkContext.setLogLevel(tour_config.SPARK_LOG_LEVEL)

    print(f"* Using Spark: {spark.version} (master={master})")
    return spark

# COMMAND ----------

def spark_disconnect(spark: SparkSession) -> None:
    """Stop the session and release its cluster resources."""
    spark.stop()
    print("Spark session stopped")


def spark_version(spark: SparkSession) -> str:
    return spark.version

# COMMAND ----------

# MAGIC %md
# MAGIC ## Connection Utilities

# COMMAND ----------

def spark_web(spark: SparkSession, open_browser: bool = False):
    """Return the web console URL, optionally opening it in a browser."""
    url = spark.sparkContext.uiWebUrl
    if url and open_browser:
        webbrowser.open(url)
    return url


def spark_log(spark: SparkSession, n: int = 100) -> list:
    """
    Return the last `n` lines of this application's event log.

    The engine writes one JSON event per line and flushes in batches, so a
    freshly opened session may not have anything on disk yet.
    """
    if spark.conf.get("spark.eventLog.enabled", "false") != "true":
        raise ValueError("Event logging is not enabled for this session")

    log_dir = urlparse(spark.conf.get("spark.eventLog.dir")).path
    app_id = spark.sparkContext.applicationId
    candidates = sorted(glob.glob(os.path.join(log_dir, f"{app_id}*")))
    if not candidates:
        return []

    with open(candidates[0], encoding="utf-8") as f:
        return [line.rstrip("\n") for line in deque(f, maxlen=n)]
