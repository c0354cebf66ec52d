# Databricks notebook source

# MAGIC %md
# MAGIC # Distributed Python: `spark_apply`
# MAGIC
# MAGIC Ship an arbitrary Python function to the workers. Each call receives a plain
# MAGIC pandas DataFrame and must return one.
# MAGIC
# MAGIC | Mode | PySpark primitive | Unit of work |
# MAGIC |------|-------------------|--------------|
# MAGIC | whole table | `mapInPandas(fn, schema)` | each Arrow batch of each partition |
# MAGIC | `group_by=...` | `groupBy(...).applyInPandas(fn, schema)` | each group, in full |
# MAGIC
# MAGIC The output schema must be declared up front; by default it is the input schema.
# MAGIC Any library importable on the workers (numpy, scipy, ...) can be used inside the closure.

# COMMAND ----------

from typing import Callable

import numpy as np
import pandas as pd
from pyspark.sql import DataFrame
from scipy import stats

# COMMAND ----------

def spark_apply(df: DataFrame, fn: Callable[[pd.DataFrame], pd.DataFrame],
                schema=None, group_by=None) -> DataFrame:
    """
    Run `fn` over the rows of `df` on the cluster.

    Args:
        df: Input DataFrame
        fn: pandas DataFrame -> pandas DataFrame
        schema: Output StructType or DDL string; defaults to df.schema
        group_by: Column name(s); when given, `fn` sees one whole group at a time
    """
    schema = schema if schema is not None else df.schema

    if group_by:
        cols = [group_by] if isinstance(group_by, str) else list(group_by)
        return df.groupBy(*cols).applyInPandas(fn, schema=schema)

    def apply_batches(batches):
        for pdf in batches:
            yield fn(pdf)

    return df.mapInPandas(apply_batches, schema=schema)

# COMMAND ----------

# MAGIC %md
# MAGIC ## Example Closures

# COMMAND ----------

IRIS_MEASUREMENTS = ["Sepal_Length", "Sepal_Width", "Petal_Length", "Petal_Width"]
IRIS_MEASUREMENTS_SCHEMA = ", ".join(f"{c} double" for c in IRIS_MEASUREMENTS)


def add_gamma_noise(pdf: pd.DataFrame) -> pd.DataFrame:
    """Shift the four measurements by a single Gamma(shape=2) draw per batch."""
    shift = np.random.default_rng().gamma(shape=2.0)
    return pdf[IRIS_MEASUREMENTS].astype(float) + shift

# COMMAND ----------

TIDY_COLUMNS = ["term", "estimate", "std_error", "statistic", "p_value"]


def tidy_lm(response: str, predictor: str, group_col: str = None):
    """
    Build a per-group closure fitting `response ~ predictor` by least squares.

    The closure returns one row per term (intercept, slope) with the estimate,
    its standard error, t statistic and two-sided p value. When `group_col` is
    given, the group value is carried along as the first column.
    """
    def fit(pdf: pd.DataFrame) -> pd.DataFrame:
        y = pdf[response].astype(float).to_numpy()
        x = pdf[predictor].astype(float).to_numpy()
        X = np.column_stack([np.ones_like(x), x])

        beta, _, rank, _ = np.linalg.lstsq(X, y, rcond=None)
        dof = len(y) - rank
        residuals = y - X @ beta
        sigma2 = residuals @ residuals / dof if dof > 0 else np.nan
        std_error = np.sqrt(np.diag(sigma2 * np.linalg.pinv(X.T @ X)))
        t_stat = beta / std_error
        p_value = 2 * stats.t.sf(np.abs(t_stat), dof) if dof > 0 else np.full(2, np.nan)

        out = pd.DataFrame({
            "term": ["(Intercept)", predictor],
            "estimate": beta,
            "std_error": std_error,
            "statistic": t_stat,
            "p_value": p_value,
        })
        if group_col:
            out.insert(0, group_col, pdf[group_col].iloc[0])
        return out

    return fit


def tidy_lm_schema(group_col: str = None, group_type: str = "string") -> str:
    cols = ["term string", "estimate double", "std_error double",
            "statistic double", "p_value double"]
    if group_col:
        cols.insert(0, f"{group_col} {group_type}")
    return ", ".join(cols)
