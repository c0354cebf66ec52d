# Databricks notebook source

# MAGIC %md
# MAGIC # Walkthrough: Spark from Python, End to End
# MAGIC
# MAGIC 1. Connect to a cluster (a local one by default)
# MAGIC 2. Copy in-memory datasets into it
# MAGIC 3. Query them with relational verbs and window functions
# MAGIC 4. Query them with SQL
# MAGIC 5. Fit a linear model
# MAGIC 6. Read and write CSV / JSON / Parquet
# MAGIC 7. Run arbitrary Python on the workers
# MAGIC 8. Call engine methods directly
# MAGIC 9. Table and connection utilities
# MAGIC 10. H2O through Sparkling Water
# MAGIC
# MAGIC ## Installation
# MAGIC ```bash
# MAGIC pip install spark-tour            # pulls in pyspark, which bundles a local Spark
# MAGIC pip install "spark-tour[h2o]"     # optional: Sparkling Water section
# MAGIC python -m spark_tour.walkthroughs.spark_tutorial
# MAGIC ```

# COMMAND ----------

import os
import tempfile

import matplotlib.pyplot as plt

from spark_tour.config import tour_config
from spark_tour.connection.session import spark_connect, spark_disconnect, spark_log, spark_web
from spark_tour.data_generator import sample_datasets
from spark_tour.distributed.spark_apply import (
    IRIS_MEASUREMENTS_SCHEMA, TIDY_COLUMNS, add_gamma_noise, spark_apply, tidy_lm, tidy_lm_schema,
)
from spark_tour.extensions.count_lines import count_lines, write_local_csv
from spark_tour.ingest.copy_to import copy_to, sdf_len, sdf_partition, src_tbls
from spark_tour.io_formats.file_formats import (
    spark_read_csv, spark_read_json, spark_read_parquet,
    spark_write_csv, spark_write_json, spark_write_parquet,
)
from spark_tour.ml.linear_models import ml_linear_regression
from spark_tour.queries.delay_plot import plot_delays
from spark_tour.queries.dplyr_verbs import (
    filter_dep_delay, mtcars_features, summarise_delay_by_tailnum, top_hits_per_player,
)
from spark_tour.queries.sql_interface import db_get_query
from spark_tour.utils.common_functions import tbl_cache, tbl_uncache

# COMMAND ----------

# MAGIC %md
# MAGIC ## 1-2. Connect and Copy Data In
# MAGIC
# MAGIC The returned handles are references to tables that now live in the cluster.

# COMMAND ----------

def copy_datasets(spark):
    tables = {
        "iris": copy_to(spark, sample_datasets.iris(), tour_config.IRIS_TABLE, overwrite=True),
        "flights": copy_to(spark, sample_datasets.flights(), tour_config.FLIGHTS_TABLE, overwrite=True),
        "batting": copy_to(spark, sample_datasets.batting(), tour_config.BATTING_TABLE, overwrite=True),
    }
    print(f"Tables: {src_tbls(spark)}")
    return tables

# COMMAND ----------

# MAGIC %md
# MAGIC ## 3. Relational Verbs

# COMMAND ----------

def dplyr_examples(flights, plot_path=None):
    # Flights that left exactly two minutes late
    filter_dep_delay(flights, 2).show(10)

    # Mean distance and arrival delay per aircraft
    delay = summarise_delay_by_tailnum(flights)
    print(delay.head(10))

    fig = plot_delays(delay, plot_path)
    plt.close(fig)
    return delay


def window_function_example(batting):
    """Each player's two best seasons by hits."""
    best = top_hits_per_player(batting)
    best.show(10)
    return best

# COMMAND ----------

# MAGIC %md
# MAGIC ## 4. SQL
# MAGIC Registered tables are queryable by name; the result comes back as a pandas DataFrame.

# COMMAND ----------

def sql_example(spark):
    iris_preview = db_get_query(spark, f"SELECT * FROM {tour_config.IRIS_TABLE} LIMIT 10")
    print(iris_preview)
    return iris_preview

# COMMAND ----------

# MAGIC %md
# MAGIC ## 5. Machine Learning
# MAGIC
# MAGIC Predict fuel consumption (`mpg`) from weight (`wt`) and cylinder count (`cyl`),
# MAGIC assuming both relationships are linear.

# COMMAND ----------

def machine_learning_example(spark):
    mtcars = copy_to(spark, sample_datasets.mtcars(), tour_config.MTCARS_TABLE, overwrite=True)

    partitions = sdf_partition(
        mtcars_features(mtcars, min_hp=tour_config.MTCARS_MIN_HP),
        seed=tour_config.MTCARS_PARTITION_SEED,
        **tour_config.MTCARS_PARTITION_WEIGHTS,
    )

    fit = ml_linear_regression(partitions["training"], response="mpg", features=["wt", "cyl"])
    print(fit)
    print(fit.summary())
    return fit

# COMMAND ----------

# MAGIC %md
# MAGIC ## 6. Reading and Writing Data

# COMMAND ----------

def read_write_example(spark, iris, work_dir):
    csv_path = os.path.join(work_dir, "iris.csv")
    parquet_path = os.path.join(work_dir, "iris.parquet")
    json_path = os.path.join(work_dir, "iris.json")

    spark_write_csv(iris, csv_path)
    iris_csv = spark_read_csv(spark, "iris_csv", csv_path)

    spark_write_parquet(iris, parquet_path)
    iris_parquet = spark_read_parquet(spark, "iris_parquet", parquet_path)

    spark_write_json(iris, json_path)
    iris_json = spark_read_json(spark, "iris_json", json_path)

    print(f"Tables: {src_tbls(spark)}")
    return iris_csv, iris_parquet, iris_json

# COMMAND ----------

# MAGIC %md
# MAGIC ## 7. Distributed Python
# MAGIC
# MAGIC Whole-table: shift the measurements by a random Gamma draw.
# MAGIC Grouped: one least-squares fit of petal width on petal length per species.

# COMMAND ----------

def distributed_apply_example(spark, iris):
    noisy = spark_apply(iris, add_gamma_noise, schema=IRIS_MEASUREMENTS_SCHEMA)
    noisy.show(5)

    scaled = spark_apply(sdf_len(spark, 10), lambda pdf: pdf * 10)
    scaled.show()

    per_species = spark_apply(
        iris,
        tidy_lm("Petal_Width", "Petal_Length", group_col="Species"),
        schema=tidy_lm_schema("Species"),
        group_by="Species",
    )
    per_species.select("Species", *TIDY_COLUMNS).show()
    return per_species

# COMMAND ----------

# MAGIC %md
# MAGIC ## 8. Extensions
# MAGIC Wrap an engine method (`textFile(...).count()`) in a Python function.

# COMMAND ----------

def extension_example(spark, work_dir):
    csv_path = os.path.join(work_dir, "flights_local.csv")
    write_local_csv(sample_datasets.flights(), csv_path)
    lines = count_lines(spark, csv_path)
    print(f"{csv_path}: {lines} lines")
    return lines

# COMMAND ----------

# MAGIC %md
# MAGIC ## 9. Table & Connection Utilities

# COMMAND ----------

def table_utilities_example(spark):
    tbl_cache(spark, tour_config.BATTING_TABLE)
    print(f"Cached {tour_config.BATTING_TABLE}")
    tbl_uncache(spark, tour_config.BATTING_TABLE)
    print(f"Uncached {tour_config.BATTING_TABLE}")


def connection_utilities_example(spark):
    print(f"Web console: {spark_web(spark)}")
    for line in spark_log(spark, n=10):
        print(line[:160])

# COMMAND ----------

# MAGIC %md
# MAGIC ## 10. H2O
# MAGIC Fit an H2O GLM on mtcars with lambda search. Needs the `h2o` extra.

# COMMAND ----------

def h2o_example():
    from spark_tour.sparkling.sparkling_water import as_h2o_frame, h2o_context, h2o_glm

    spark = spark_connect()
    mtcars = copy_to(spark, sample_datasets.mtcars(), tour_config.MTCARS_TABLE, overwrite=True)

    hc = h2o_context(spark)
    mtcars_h2o = as_h2o_frame(hc, mtcars)
    mtcars_glm = h2o_glm(
        mtcars_h2o,
        x=tour_config.H2O_GLM_FEATURES,
        y=tour_config.H2O_GLM_RESPONSE,
        lambda_search=True,
    )
    print(mtcars_glm)

    spark_disconnect(spark)
    return mtcars_glm

# COMMAND ----------

def main(include_h2o: bool = tour_config.RUN_H2O_SECTION):
    os.makedirs(tour_config.DATA_DIR, exist_ok=True)
    work_dir = tempfile.mkdtemp(dir=tour_config.DATA_DIR)

    spark = spark_connect()
    tables = copy_datasets(spark)

    dplyr_examples(tables["flights"], os.path.join(work_dir, "delays.png"))
    window_function_example(tables["batting"])
    sql_example(spark)
    machine_learning_example(spark)
    read_write_example(spark, tables["iris"], work_dir)
    distributed_apply_example(spark, tables["iris"])
    extension_example(spark, work_dir)
    table_utilities_example(spark)
    connection_utilities_example(spark)

    spark_disconnect(spark)

    if include_h2o:
        h2o_example()

# COMMAND ----------

if __name__ == "__main__":
    main()
