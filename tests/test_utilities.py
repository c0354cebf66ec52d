# Databricks notebook source

# MAGIC %md
# MAGIC # Unit Tests: Connection, Extensions, Table Utilities, Plot
# MAGIC
# MAGIC Session helpers, engine method calls, cache control and the delay plot.

# COMMAND ----------

import json
from types import SimpleNamespace

import matplotlib.pyplot as plt
import pandas as pd
import pyspark
import pytest

from spark_tour.connection.session import (
    check_spark_version, spark_connect, spark_log, spark_version, spark_web,
)
from spark_tour.data_generator import sample_datasets
from spark_tour.extensions.count_lines import count_lines, invoke, spark_context, write_local_csv
from spark_tour.ingest.copy_to import copy_to
from spark_tour.queries.delay_plot import plot_delays
from spark_tour.utils.common_functions import get_table_stats, is_cached, tbl_cache, tbl_uncache

# COMMAND ----------

class TestConnection:

    def test_version_check(self):
        check_spark_version("")
        check_spark_version(None)
        check_spark_version(pyspark.__version__)
        check_spark_version(".".join(pyspark.__version__.split(".")[:2]))

        with pytest.raises(ValueError, match="Requested Spark 1.6"):
            check_spark_version("1.6")

    def test_partial_version_must_match_whole_components(self):
        major, minor = pyspark.__version__.split(".")[:2]
        with pytest.raises(ValueError):
            check_spark_version(f"{major}.{minor}0")

    def test_spark_version(self, spark):
        assert spark_version(spark) == spark.version

    def test_web_console_url(self, spark):
        url = spark_web(spark)
        assert url is None or url.startswith("http")

    def test_log_tail(self, spark):
        spark.range(100).count()
        # job-end events flush the event log once the listener bus drains
        spark.sparkContext._jsc.sc().listenerBus().waitUntilEmpty()

        lines = spark_log(spark, n=5)
        assert 0 < len(lines) <= 5
        assert all("Event" in json.loads(line) for line in lines)

    def test_log_needs_event_logging(self):
        no_event_log = SimpleNamespace(
            conf=SimpleNamespace(get=lambda key, default=None: "false")
        )
        with pytest.raises(ValueError, match="Event logging is not enabled"):
            spark_log(no_event_log)

    def test_reconnect_warns_and_reuses_session(self, spark, capsys):
        again = spark_connect(
            master="local[1]",
            app_name="another-name",
            config={"spark.sql.shuffle.partitions": "2"},
        )

        assert again.sparkContext.applicationId == spark.sparkContext.applicationId
        assert "WARNING: reusing the active Spark session" in capsys.readouterr().out


class TestExtensions:

    def test_count_lines_of_local_csv(self, spark, tmp_path):
        pdf = sample_datasets.flights(n=250)
        path = str(tmp_path / "flights.csv")
        write_local_csv(pdf, path)

        assert count_lines(spark, path) == 251

    def test_invoke_reaches_engine_objects(self, spark):
        assert invoke(spark_context(spark), "version") == spark.version


class TestTableUtilities:

    def test_cache_cycle(self, spark):
        copy_to(spark, sample_datasets.batting(n_players=20), "util_batting", overwrite=True)

        tbl_cache(spark, "util_batting")
        assert is_cached(spark, "util_batting")
        assert get_table_stats(spark, "util_batting")["cached"] is True

        tbl_uncache(spark, "util_batting")
        assert not is_cached(spark, "util_batting")

    def test_table_stats(self, spark):
        copy_to(spark, pd.DataFrame({"a": [1, 2, 3], "b": ["x", "y", "z"]}), "util_stats",
                overwrite=True)
        stats = get_table_stats(spark, "util_stats")
        assert stats["row_count"] == 3
        assert stats["column_count"] == 2
        assert stats["columns"] == ["a", "b"]


class TestDelayPlot:

    def test_plot_is_saved(self, tmp_path):
        delay = pd.DataFrame({
            "count": [25, 40, 31, 60, 22],
            "dist": [200.0, 500.0, 750.0, 1100.0, 1600.0],
            "delay": [4.0, 6.5, 8.0, 7.0, 3.5],
        })
        path = tmp_path / "delays.png"
        fig = plot_delays(delay, str(path))

        assert path.exists()
        assert fig.axes[0].get_xlabel() == "Mean distance (miles)"
        plt.close(fig)
