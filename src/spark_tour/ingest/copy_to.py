# Databricks notebook source

# MAGIC %md
# MAGIC # Data Ingress: Copy Local Data to the Cluster
# MAGIC
# MAGIC **Source**: in-memory pandas DataFrames
# MAGIC **Pattern**: `createDataFrame` + temporary view
# MAGIC **Target**: named remote tables, queryable from the DataFrame API and SQL
# MAGIC
# MAGIC The returned DataFrame is only a reference: the rows live in the cluster.

# COMMAND ----------

import pandas as pd
from pandas.api import types as ptypes
from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.types import (
    BooleanType, DoubleType, LongType, StringType, StructField, StructType, TimestampType,
)

# COMMAND ----------

_PYTHON_TYPES = [(bool, BooleanType()), (int, LongType()), (float, DoubleType())]


def _column_type(series: pd.Series):
    """Spark type for a pandas column; all-missing object columns become strings."""
    if ptypes.is_bool_dtype(series):
        return BooleanType()
    if ptypes.is_integer_dtype(series):
        return LongType()
    if ptypes.is_float_dtype(series):
        return DoubleType()
    if ptypes.is_datetime64_any_dtype(series):
        return TimestampType()

    present = series.dropna()
    if len(present):
        first = present.iloc[0]
        for py_type, spark_type in _PYTHON_TYPES:
            if isinstance(first, py_type):
                return spark_type
    return StringType()


def _pandas_schema(pdf: pd.DataFrame) -> StructType:
    return StructType([
        StructField(str(name), _column_type(pdf[name]), nullable=True)
        for name in pdf.columns
    ])


def _pandas_to_spark(spark: SparkSession, pdf: pd.DataFrame) -> DataFrame:
    """Convert with NaN -> NULL so `IS NULL` filters behave like missing values."""
    clean = pdf.astype(object).where(pdf.notna(), None)
    return spark.createDataFrame(clean.values.tolist(), schema=_pandas_schema(pdf))


def copy_to(spark: SparkSession, data, name: str = None,
            overwrite: bool = False) -> DataFrame:
    """
    Copy a local dataset into the cluster and register it under `name`.

    Args:
        spark: Active session
        data: pandas DataFrame (or an existing Spark DataFrame)
        name: Table name to register
        overwrite: Replace an existing table with the same name
    """
    if not name:
        raise ValueError("copy_to needs a table name")
    if not overwrite and spark.catalog.tableExists(name):
        raise ValueError(f"Table '{name}' already exists; pass overwrite=True to replace it")

    df = data if isinstance(data, DataFrame) else _pandas_to_spark(spark, data)
    df.createOrReplaceTempView(name)
    return spark.table(name)

# COMMAND ----------

def src_tbls(spark: SparkSession) -> list:
    """Names of the tables and views visible to the session."""
    return sorted(t.name for t in spark.catalog.listTables())


def sdf_len(spark: SparkSession, n: int) -> DataFrame:
    """A one-column DataFrame with `id` running from 1 to n."""
    return spark.range(1, n + 1)

# COMMAND ----------

# MAGIC %md
# MAGIC ## Partitioning & Sampling

# COMMAND ----------

def sdf_partition(df: DataFrame, seed: int = None, **weights) -> dict:
    """
    Randomly split a DataFrame into named partitions.

        parts = sdf_partition(df, training=0.5, test=0.5, seed=1099)
        parts["training"]

    Weights are relative; Spark normalizes them.
    """
    if not weights:
        raise ValueError("sdf_partition needs at least one named weight")
    bad = [name for name, w in weights.items() if w <= 0]
    if bad:
        raise ValueError(f"Partition weights must be positive: {bad}")

    splits = df.randomSplit(list(weights.values()), seed=seed)
    return dict(zip(weights.keys(), splits))


def sample_frac(df: DataFrame, fraction: float, seed: int = None) -> DataFrame:
    return df.sample(withReplacement=False, fraction=fraction, seed=seed)
