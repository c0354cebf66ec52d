# Databricks notebook source

# MAGIC %md
# MAGIC # Feature Transformers
# MAGIC
# MAGIC Pipeline stages are Spark ML transformers; these helpers only construct them.
# MAGIC
# MAGIC `ft_dplyr_transformer` turns a query written against a concrete table into a
# MAGIC `SQLTransformer`: the table name is swapped for `__THIS__`, so the stage can be
# MAGIC applied to whatever DataFrame flows through the pipeline.
# MAGIC
# MAGIC ```
# MAGIC SELECT ... FROM flights WHERE ...   ->   SELECT ... FROM __THIS__ WHERE ...
# MAGIC ```

# COMMAND ----------

import re

from pyspark.ml.feature import Binarizer, Bucketizer, RFormula, SQLTransformer

# COMMAND ----------

PLACEHOLDER = "__THIS__"

# COMMAND ----------

def ft_dplyr_transformer(statement: str, table_name: str) -> SQLTransformer:
    """Build a SQLTransformer from a query that reads `table_name`."""
    pattern = re.compile(
        rf"\b(FROM|JOIN)(\s+)`?{re.escape(table_name)}`?(?![\w.])", re.IGNORECASE
    )
    rewritten, count = pattern.subn(rf"\1\2{PLACEHOLDER}", statement)
    if count == 0:
        raise ValueError(f"Statement does not read from table '{table_name}'")
    return SQLTransformer(statement=rewritten)

# COMMAND ----------

def ft_binarizer(input_col: str, output_col: str, threshold: float) -> Binarizer:
    """1.0 when the value is strictly greater than `threshold`, else 0.0."""
    return Binarizer(inputCol=input_col, outputCol=output_col, threshold=float(threshold))


def ft_bucketizer(input_col: str, output_col: str, splits,
                  handle_invalid: str = "keep") -> Bucketizer:
    """
    Bucket a continuous column by `splits`.

    NaN values go to an extra bucket when `handle_invalid="keep"`. Values
    outside the outer splits always fail the job; use -inf / inf splits to
    make the range open.
    """
    return Bucketizer(inputCol=input_col, outputCol=output_col,
                      splits=[float(s) for s in splits], handleInvalid=handle_invalid)


def ft_r_formula(formula: str, handle_invalid: str = "keep") -> RFormula:
    """R model formula; with "keep", categories unseen at fit time get their own index."""
    return RFormula(formula=formula, handleInvalid=handle_invalid)

# COMMAND ----------

def ml_param(stage, name: str):
    """Read a parameter (set or default) from a pipeline stage, e.g. "statement"."""
    return stage.getOrDefault(stage.getParam(name))
