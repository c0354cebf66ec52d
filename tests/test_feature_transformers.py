# Databricks notebook source

# MAGIC %md
# MAGIC # Unit Tests: Feature Transformer Stages
# MAGIC
# MAGIC SQL, binarizer, bucketizer and formula stages.

# COMMAND ----------

import pandas as pd
import pytest
from pyspark.ml.feature import SQLTransformer

from spark_tour.ingest.copy_to import copy_to
from spark_tour.ml_pipelines.feature_transformers import (
    ft_binarizer, ft_bucketizer, ft_dplyr_transformer, ft_r_formula, ml_param,
)

# COMMAND ----------

class TestDplyrTransformer:

    def test_table_name_becomes_placeholder(self):
        stage = ft_dplyr_transformer("SELECT a, b FROM flights WHERE b > 1", "flights")
        assert isinstance(stage, SQLTransformer)
        assert ml_param(stage, "statement") == "SELECT a, b FROM __THIS__ WHERE b > 1"

    def test_only_table_references_are_rewritten(self):
        statement = (
            "SELECT f.flights_count FROM Flights f "
            "JOIN `flights` g ON f.id = g.id JOIN flights_archive h ON f.id = h.id"
        )
        stage = ft_dplyr_transformer(statement, "flights")
        rewritten = ml_param(stage, "statement")

        assert rewritten.count("__THIS__") == 2
        assert "f.flights_count" in rewritten
        assert "flights_archive" in rewritten

    def test_statement_must_read_the_table(self):
        with pytest.raises(ValueError, match="does not read"):
            ft_dplyr_transformer("SELECT 1 FROM other_table", "flights")

    def test_applies_to_any_input(self, spark):
        df = copy_to(spark, pd.DataFrame({"x": [1, 2, 3]}), "ft_any_input", overwrite=True)
        stage = ft_dplyr_transformer("SELECT x * 2 AS y FROM some_table", "some_table")
        assert sorted(r["y"] for r in stage.transform(df).collect()) == [2, 4, 6]


class TestStageConstructors:

    def test_binarizer_is_strictly_greater_than(self, spark):
        df = copy_to(spark, pd.DataFrame({"dep_delay": [10.0, 15.0, 20.0]}),
                     "ft_binarizer", overwrite=True)
        out = ft_binarizer("dep_delay", "delayed", 15).transform(df).orderBy("dep_delay")
        assert [r["delayed"] for r in out.collect()] == [0.0, 0.0, 1.0]

    def test_bucketizer_assigns_hour_buckets(self, spark):
        df = copy_to(spark, pd.DataFrame({"sched_dep_time": [500, 900, 1230, 2300]}),
                     "ft_bucketizer", overwrite=True)
        stage = ft_bucketizer("sched_dep_time", "hours", [400, 800, 1200, 1600, 2000, 2400])
        out = stage.transform(df).orderBy("sched_dep_time")
        assert [r["hours"] for r in out.collect()] == [0.0, 1.0, 2.0, 4.0]

    def test_r_formula_and_ml_param(self):
        stage = ft_r_formula("delayed ~ month + day")
        assert ml_param(stage, "formula") == "delayed ~ month + day"
        assert ml_param(stage, "handleInvalid") == "keep"
        assert ml_param(ft_binarizer("a", "b", 3), "threshold") == 3.0
