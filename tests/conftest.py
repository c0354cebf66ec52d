# Databricks notebook source

# MAGIC %md
# MAGIC # Test Fixtures
# MAGIC
# MAGIC One local Spark session shared by every test module.

# COMMAND ----------

import pytest

from spark_tour.connection.session import spark_connect

# COMMAND ----------

@pytest.fixture(scope="session")
def spark():
    """
    One local session for the whole test run.
    Small shuffle partition count keeps tiny test DataFrames fast.
    """
    session = spark_connect(
        master="local[2]",
        app_name="spark-tour-tests",
        config={"spark.sql.shuffle.partitions": "2"},
    )
    yield session
    session.stop()
