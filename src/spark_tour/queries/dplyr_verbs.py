# Databricks notebook source

# MAGIC %md
# MAGIC # Relational Verbs on Remote Tables
# MAGIC
# MAGIC dplyr verbs map one-to-one onto DataFrame methods; Spark turns the chain into a
# MAGIC single query plan and only runs it when results are requested.
# MAGIC
# MAGIC | dplyr | PySpark |
# MAGIC |-------|---------|
# MAGIC | `filter` | `filter` / `where` |
# MAGIC | `select` | `select` |
# MAGIC | `mutate` | `withColumn` |
# MAGIC | `arrange` | `orderBy` |
# MAGIC | `group_by` + `summarise` | `groupBy().agg()` |
# MAGIC | `n()` | `F.count("*")` |
# MAGIC | `min_rank(desc(x))` | `F.rank().over(Window.orderBy(F.desc(x)))` |
# MAGIC | `collect` | `toPandas` |

# COMMAND ----------

import pandas as pd
from pyspark.sql import DataFrame
from pyspark.sql import functions as F
from pyspark.sql.window import Window

# COMMAND ----------

def filter_dep_delay(flights: DataFrame, delay: float) -> DataFrame:
    """Flights that left exactly `delay` minutes late."""
    return flights.filter(F.col("dep_delay") == delay)

# COMMAND ----------

def summarise_delay_by_tailnum(flights: DataFrame, min_count: int = 20,
                               max_dist: float = 2000) -> pd.DataFrame:
    """
    Per-aircraft flight count, mean distance and mean arrival delay.

    Keeps aircraft with more than `min_count` flights, a mean distance under
    `max_dist` and a known mean delay, then collects the result locally.
    """
    return (
        flights
        .groupBy("tailnum")
        .agg(
            F.count("*").alias("count"),
            F.avg("distance").alias("dist"),
            F.avg("arr_delay").alias("delay"),
        )
        .filter(
            (F.col("count") > min_count)
            & (F.col("dist") < max_dist)
            & F.col("delay").isNotNull()
        )
        .toPandas()
    )

# COMMAND ----------

# MAGIC %md
# MAGIC ## Window Functions
# MAGIC
# MAGIC `min_rank` is SQL `RANK()`: ties share a rank and leave a gap after them.

# COMMAND ----------

def top_hits_per_player(batting: DataFrame, top_n: int = 2) -> DataFrame:
    """Each player's best `top_n` seasons by hits, ignoring hitless seasons."""
    window = Window.partitionBy("playerID").orderBy(F.desc("H"))
    return (
        batting
        .select("playerID", "yearID", "teamID", "G", "AB", "R", "H")
        .orderBy("playerID", "yearID", "teamID")
        .withColumn("_hits_rank", F.rank().over(window))
        .filter((F.col("_hits_rank") <= top_n) & (F.col("H") > 0))
        .drop("_hits_rank")
    )

# COMMAND ----------

def mtcars_features(mtcars: DataFrame, min_hp: int = 100) -> DataFrame:
    """Higher-powered cars, flagged when they have eight cylinders."""
    return (
        mtcars
        .filter(F.col("hp") >= min_hp)
        .withColumn("cyl8", F.col("cyl") == 8)
    )
