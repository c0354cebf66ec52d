# Databricks notebook source

# MAGIC %md
# MAGIC # Plot: Distance vs Arrival Delay
# MAGIC
# MAGIC The aggregate from `summarise_delay_by_tailnum` is small enough to plot locally.
# MAGIC One point per aircraft, sized by its number of flights, with a smoothed trend.

# COMMAND ----------

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

# COMMAND ----------

def plot_delays(delay: pd.DataFrame, path: str = None):
    """
    Scatter mean distance against mean delay and overlay a quadratic trend.

    Args:
        delay: Local frame with `dist`, `delay` and `count` columns
        path: Optional image path to save the figure to
    """
    fig, ax = plt.subplots(figsize=(8, 5))

    sns.scatterplot(data=delay, x="dist", y="delay", size="count",
                    sizes=(5, 60), alpha=0.5, ax=ax)
    sns.regplot(data=delay, x="dist", y="delay", order=2,
                scatter=False, ax=ax)

    ax.set_xlabel("Mean distance (miles)")
    ax.set_ylabel("Mean arrival delay (minutes)")

    if path:
        fig.savefig(path, bbox_inches="tight")
        print(f"Plot saved to {path}")
    return fig
