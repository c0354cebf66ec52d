# Databricks notebook source

# MAGIC %md
# MAGIC # H2O on Spark: Sparkling Water
# MAGIC
# MAGIC Sparkling Water starts an H2O cluster inside the Spark executors and moves data
# MAGIC between the two engines.
# MAGIC
# MAGIC ```
# MAGIC ┌──────────────────────┐   asH2OFrame    ┌───────────────────────┐
# MAGIC │ Spark DataFrame       │ ──────────────> │ H2OFrame              │
# MAGIC │ (mtcars)              │                 │ h2o.glm, h2o.gbm, ... │
# MAGIC └──────────────────────┘                 └───────────────────────┘
# MAGIC ```
# MAGIC
# MAGIC ## Installation
# MAGIC ```bash
# MAGIC pip install "spark-tour[h2o]"   # h2o + h2o-pysparkling-3.5
# MAGIC ```
# MAGIC The Sparkling Water build must match the Spark minor version
# MAGIC (see `SPARKLING_WATER_VERSION`). Imports are deferred so the rest of the
# MAGIC package works without H2O installed.

# COMMAND ----------

from pyspark.sql import DataFrame, SparkSession

# COMMAND ----------

def h2o_context(spark: SparkSession):
    """Start (or reuse) the H2O cluster attached to this Spark session."""
    from pysparkling import H2OContext
    hc = H2OContext.getOrCreate()
    print(f"H2O cluster running alongside Spark {spark.version}")
    return hc


def as_h2o_frame(hc, df: DataFrame):
    return hc.asH2OFrame(df)

# COMMAND ----------

def h2o_glm(frame, x, y: str, lambda_search: bool = True, family: str = "gaussian"):
    """
    Fit an H2O generalized linear model.

    Args:
        frame: H2OFrame with the training data
        x: Predictor column names
        y: Response column name
        lambda_search: Search the regularization path for the best lambda
        family: GLM family ("gaussian", "binomial", "poisson", ...)
    """
    from h2o.estimators.glm import H2OGeneralizedLinearEstimator

    model = H2OGeneralizedLinearEstimator(family=family, lambda_search=lambda_search)
    model.train(x=list(x), y=y, training_frame=frame)
    return model
