# Databricks notebook source

# MAGIC %md
# MAGIC # Extensions: Calling the Engine Directly
# MAGIC
# MAGIC Anything the JVM side of Spark exposes can be reached through Py4J. `invoke`
# MAGIC calls a method by name on an engine-side object, which is enough to wrap
# MAGIC functionality that has no Python API yet.
# MAGIC
# MAGIC Example: count the lines of a text file with `JavaSparkContext.textFile(path, 1).count()`.

# COMMAND ----------

import pandas as pd
from pyspark.sql import SparkSession

# COMMAND ----------

def spark_context(spark: SparkSession):
    """The engine-side JavaSparkContext behind this session."""
    return spark.sparkContext._jsc


def invoke(obj, method: str, *args):
    """Call `method` on an engine-side (Py4J) object."""
    return getattr(obj, method)(*args)

# COMMAND ----------

def count_lines(spark: SparkSession, path: str) -> int:
    rdd = invoke(spark_context(spark), "textFile", path, 1)
    return invoke(rdd, "count")

# COMMAND ----------

def write_local_csv(pdf: pd.DataFrame, path: str) -> None:
    """Plain local CSV: header row, no index, missing values left empty."""
    pdf.to_csv(path, index=False, na_rep="")
