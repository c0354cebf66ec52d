# Databricks notebook source

# MAGIC %md
# MAGIC # Reading and Writing Data
# MAGIC
# MAGIC | Format | Write | Read |
# MAGIC |--------|-------|------|
# MAGIC | CSV | `df.write.csv(path, header=True)` | `spark.read.csv(path, header=True, inferSchema=True)` |
# MAGIC | JSON | `df.write.json(path)` | `spark.read.json(path)` |
# MAGIC | Parquet | `df.write.parquet(path)` | `spark.read.parquet(path)` |
# MAGIC | Delta | `df.write.format("delta").save(path)` | `spark.read.format("delta").load(path)` |
# MAGIC
# MAGIC Paths can be local, HDFS or S3. Each path is a directory of part files.
# MAGIC Readers register the result under a table name, so it shows up in `src_tbls`.

# COMMAND ----------

from pyspark.sql import DataFrame, SparkSession

# COMMAND ----------

def _register(df: DataFrame, name: str) -> DataFrame:
    df.createOrReplaceTempView(name)
    return df

# COMMAND ----------

# MAGIC %md
# MAGIC ## CSV

# COMMAND ----------

def spark_write_csv(df: DataFrame, path: str, mode: str = "overwrite") -> None:
    df.write.mode(mode).option("header", "true").csv(path)


def spark_read_csv(spark: SparkSession, name: str, path: str) -> DataFrame:
    df = (
        spark.read
        .option("header", "true")
        .option("inferSchema", "true")
        .csv(path)
    )
    return _register(df, name)

# COMMAND ----------

# MAGIC %md
# MAGIC ## JSON

# COMMAND ----------

def spark_write_json(df: DataFrame, path: str, mode: str = "overwrite") -> None:
    df.write.mode(mode).json(path)


def spark_read_json(spark: SparkSession, name: str, path: str) -> DataFrame:
    return _register(spark.read.json(path), name)

# COMMAND ----------

# MAGIC %md
# MAGIC ## Parquet

# COMMAND ----------

def spark_write_parquet(df: DataFrame, path: str, mode: str = "overwrite") -> None:
    df.write.mode(mode).parquet(path)


def spark_read_parquet(spark: SparkSession, name: str, path: str) -> DataFrame:
    return _register(spark.read.parquet(path), name)

# COMMAND ----------

# MAGIC %md
# MAGIC ## Delta
# MAGIC Needs a session opened with `spark_connect(..., enable_delta=True)`.

# COMMAND ----------

def spark_write_delta(df: DataFrame, path: str, mode: str = "overwrite") -> None:
    df.write.format("delta").mode(mode).save(path)


def spark_read_delta(spark: SparkSession, name: str, path: str,
                     version: int = None) -> DataFrame:
    """Read a Delta table, optionally as of an earlier version (time travel)."""
    reader = spark.read.format("delta")
    if version is not None:
        reader = reader.option("versionAsOf", version)
    return _register(reader.load(path), name)
