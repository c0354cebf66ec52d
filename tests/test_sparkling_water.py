# Databricks notebook source

# MAGIC %md
# MAGIC # Integration Tests: Sparkling Water
# MAGIC
# MAGIC H2O GLM on mtcars; skipped unless the h2o extra is installed.

# COMMAND ----------

import pytest

from spark_tour.config import tour_config
from spark_tour.data_generator import sample_datasets
from spark_tour.ingest.copy_to import copy_to

# COMMAND ----------

@pytest.mark.integration
class TestSparklingWater:
    """Needs the `h2o` extra and a Sparkling Water build matching the local Spark."""

    def test_glm_on_mtcars(self, spark):
        pytest.importorskip("pysparkling")
        from spark_tour.sparkling.sparkling_water import as_h2o_frame, h2o_context, h2o_glm

        mtcars = copy_to(spark, sample_datasets.mtcars(), "h2o_mtcars", overwrite=True)
        hc = h2o_context(spark)
        frame = as_h2o_frame(hc, mtcars)

        model = h2o_glm(frame, x=tour_config.H2O_GLM_FEATURES, y=tour_config.H2O_GLM_RESPONSE)
        coefs = model.coef()

        assert coefs["wt"] < 0
        assert coefs["cyl"] < 0
