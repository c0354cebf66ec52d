# Databricks notebook source

# MAGIC %md
# MAGIC # Table Utilities
# MAGIC Cache control and quick statistics for registered tables.

# COMMAND ----------

from pyspark.sql import SparkSession

# COMMAND ----------

def tbl_cache(spark: SparkSession, name: str, force: bool = True) -> None:
    """
    Cache a table in cluster memory.

    Caching is lazy; with `force` the table is scanned once so it is
    materialized immediately.
    """
    spark.catalog.cacheTable(name)
    if force:
        spark.table(name).count()


def tbl_uncache(spark: SparkSession, name: str) -> None:
    spark.catalog.uncacheTable(name)


def is_cached(spark: SparkSession, name: str) -> bool:
    return spark.catalog.isCached(name)

# COMMAND ----------

def get_table_stats(spark: SparkSession, name: str) -> dict:
    """Get basic statistics for a registered table."""
    df = spark.table(name)
    return {
        "table": name,
        "row_count": df.count(),
        "column_count": len(df.columns),
        "columns": df.columns,
        "cached": spark.catalog.isCached(name),
    }
