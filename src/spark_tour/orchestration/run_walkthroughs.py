# Databricks notebook source

# MAGIC %md
# MAGIC # Orchestration: Run Every Walkthrough
# MAGIC
# MAGIC ```
# MAGIC ┌───────────────────────────────────────┐
# MAGIC │  Stage 1: Spark tutorial               │
# MAGIC │    connect -> copy -> query -> ML ...  │
# MAGIC │            │                           │
# MAGIC │            ▼                           │
# MAGIC │  Stage 2: ML pipelines demo            │
# MAGIC │    build -> fit -> save -> reload      │
# MAGIC └───────────────────────────────────────┘
# MAGIC ```
# MAGIC
# MAGIC Stages run sequentially; each walkthrough opens and closes its own session.

# COMMAND ----------

from datetime import datetime

from spark_tour.walkthroughs import ml_pipelines_demo, spark_tutorial

# COMMAND ----------

def run_stage(stage_name, steps):
    """
    Run a stage's steps in order.

    Args:
        stage_name: Name of the stage
        steps: Callables taking no arguments
    """
    print(f"\n{'='*60}")
    print(f"STAGE: {stage_name}")
    print(f"Started: {datetime.now().isoformat()}")
    print(f"{'='*60}")

    for step in steps:
        name = getattr(step, "__qualname__", repr(step))
        print(f"  Running: {name}")
        try:
            step()
            print(f"  > Completed: {name}")
        except Exception as e:
            print(f"  X Failed: {name} -> {str(e)}")
            raise

    print(f"Stage '{stage_name}' completed at {datetime.now().isoformat()}")

# COMMAND ----------

def main():
    run_stage("Spark tutorial", [spark_tutorial.main])
    run_stage("ML pipelines demo", [ml_pipelines_demo.main])
    print(f"\nAll walkthroughs completed at {datetime.now().isoformat()}")

# COMMAND ----------

if __name__ == "__main__":
    main()
