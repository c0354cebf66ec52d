# Databricks notebook source

# MAGIC %md
# MAGIC # Unit Tests: SQL and File Formats
# MAGIC
# MAGIC SQL passthrough and CSV / JSON / Parquet round trips.

# COMMAND ----------

import os

import pandas as pd

from spark_tour.data_generator import sample_datasets
from spark_tour.ingest.copy_to import copy_to, src_tbls
from spark_tour.io_formats.file_formats import (
    spark_read_csv, spark_read_json, spark_read_parquet,
    spark_write_csv, spark_write_json, spark_write_parquet,
)
from spark_tour.queries.sql_interface import db_get_query

# COMMAND ----------

class TestSqlInterface:

    def test_preview_returns_local_frame(self, spark):
        copy_to(spark, sample_datasets.iris(), "sql_iris", overwrite=True)
        preview = db_get_query(spark, "SELECT * FROM sql_iris LIMIT 10")

        assert isinstance(preview, pd.DataFrame)
        assert len(preview) == 10
        assert "Species" in preview.columns

    def test_aggregate_query(self, spark):
        copy_to(spark, sample_datasets.iris(), "sql_iris_agg", overwrite=True)
        counts = db_get_query(
            spark, "SELECT Species, COUNT(*) AS n FROM sql_iris_agg GROUP BY Species ORDER BY Species"
        )
        assert counts["n"].tolist() == [50, 50, 50]


class TestFileFormats:
    """Write each format to a temp dir and read it back as a named table."""

    def test_csv_round_trip(self, spark, tmp_path):
        iris = copy_to(spark, sample_datasets.iris(), "fmt_iris_csv_src", overwrite=True)
        path = str(tmp_path / "iris.csv")

        spark_write_csv(iris, path)
        back = spark_read_csv(spark, "iris_csv", path)

        assert os.path.isdir(path)
        assert back.count() == 150
        assert dict(back.dtypes)["Sepal_Length"] == "double"
        assert "iris_csv" in src_tbls(spark)

    def test_parquet_round_trip_keeps_schema(self, spark, tmp_path):
        iris = copy_to(spark, sample_datasets.iris(), "fmt_iris_pq_src", overwrite=True)
        path = str(tmp_path / "iris.parquet")

        spark_write_parquet(iris, path)
        back = spark_read_parquet(spark, "iris_parquet", path)

        assert back.schema == iris.schema
        assert back.count() == 150
        assert "iris_parquet" in src_tbls(spark)

    def test_json_round_trip(self, spark, tmp_path):
        iris = copy_to(spark, sample_datasets.iris(), "fmt_iris_json_src", overwrite=True)
        path = str(tmp_path / "iris.json")

        spark_write_json(iris, path)
        back = spark_read_json(spark, "iris_json", path)

        assert back.count() == 150
        assert set(back.columns) == set(iris.columns)
        assert "iris_json" in src_tbls(spark)

    def test_overwrite_mode_replaces_output(self, spark, tmp_path):
        path = str(tmp_path / "ids.parquet")
        spark_write_parquet(spark.range(10), path)
        spark_write_parquet(spark.range(3), path)
        assert spark_read_parquet(spark, "ids_parquet", path).count() == 3
