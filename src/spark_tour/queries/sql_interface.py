# Databricks notebook source

# MAGIC %md
# MAGIC # SQL Passthrough
# MAGIC
# MAGIC Every table registered with `copy_to` or a `spark_read_*` call is visible to SQL.
# MAGIC `db_get_query` runs a statement on the cluster and brings the result back as a
# MAGIC local pandas DataFrame, so keep it to previews and aggregates.

# COMMAND ----------

import pandas as pd
from pyspark.sql import SparkSession

# COMMAND ----------

def db_get_query(spark: SparkSession, statement: str) -> pd.DataFrame:
    return spark.sql(statement).toPandas()
