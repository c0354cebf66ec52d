# Databricks notebook source

# MAGIC %md
# MAGIC # Machine Learning: Linear Models
# MAGIC
# MAGIC Thin wrappers over Spark ML that take a response column and feature columns
# MAGIC (or an R-style formula) and return the fitted model with an R-like summary.
# MAGIC
# MAGIC | Helper | Spark estimator | Summary statistics |
# MAGIC |--------|-----------------|--------------------|
# MAGIC | `ml_linear_regression` | `LinearRegression` (normal equations) | std errors, t, p, R², RMSE |
# MAGIC | `ml_logistic_regression` | `LogisticRegression` (binomial) | AUC, accuracy |
# MAGIC | `ml_generalized_linear_regression` | `GeneralizedLinearRegression` (IRLS) | std errors, t, p, AIC, deviance |
# MAGIC
# MAGIC All fitting happens in the cluster; only coefficients come back.

# COMMAND ----------

from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np
import pandas as pd
from pyspark.ml import Pipeline, PipelineModel
from pyspark.ml.feature import RFormula, VectorAssembler
from pyspark.ml.classification import LogisticRegression
from pyspark.ml.regression import GeneralizedLinearRegression, LinearRegression
from pyspark.sql import DataFrame

# COMMAND ----------

INTERCEPT = "(Intercept)"
FEATURES_COL = "features"
FORMULA_LABEL_COL = "label"

# COMMAND ----------

@dataclass
class ModelSummary:
    """Coefficient table plus fit statistics for one fitted model."""
    kind: str
    formula: str
    coefficients: pd.DataFrame
    statistics: Dict[str, float] = field(default_factory=dict)

    def __str__(self):
        lines = [f"{self.kind}", f"Formula: {self.formula}", "", "Coefficients:"]
        lines.append(self.coefficients.to_string(index=False))
        if self.statistics:
            lines.append("")
            lines.extend(f"{name}: {value:.5g}" for name, value in self.statistics.items())
        return "\n".join(lines)


@dataclass
class ModelFit:
    """A fitted feature stage + estimator, with the names needed to read it."""
    kind: str
    model: PipelineModel
    response: str
    feature_names: List[str]
    formula: str

    @property
    def estimator_model(self):
        return self.model.stages[-1]

    def coefficients(self) -> Dict[str, float]:
        est = self.estimator_model
        values = {INTERCEPT: float(est.intercept)} if est.getFitIntercept() else {}
        values.update(zip(self.feature_names, (float(c) for c in est.coefficients.toArray())))
        return values

    def predict(self, df: DataFrame) -> DataFrame:
        return self.model.transform(df)

    def summary(self) -> ModelSummary:
        return _SUMMARIZERS[self.kind](self)

    def __str__(self):
        coefs = pd.DataFrame([self.coefficients()])
        return f"{self.kind}\nFormula: {self.formula}\n\nCoefficients:\n{coefs.to_string(index=False)}"

# COMMAND ----------

# MAGIC %md
# MAGIC ## Feature Preparation

# COMMAND ----------

def _feature_stage(response: str, features, formula: str):
    """Return (stage, label column, formula text) for either calling style."""
    if formula:
        return (RFormula(formula=formula, featuresCol=FEATURES_COL, labelCol=FORMULA_LABEL_COL),
                FORMULA_LABEL_COL, formula)
    if not response or not features:
        raise ValueError("Pass either a formula or both response and features")
    features = [features] if isinstance(features, str) else list(features)
    return (VectorAssembler(inputCols=features, outputCol=FEATURES_COL),
            response, f"{response} ~ {' + '.join(features)}")


def _feature_names(df: DataFrame, fallback: List[str]) -> List[str]:
    """Read expanded feature names from the vector column's ML attribute metadata."""
    attrs = df.schema[FEATURES_COL].metadata.get("ml_attr", {}).get("attrs", {})
    indexed = sorted((a["idx"], a["name"]) for group in attrs.values() for a in group)
    return [name for _, name in indexed] or list(fallback)


def _fit(kind: str, df: DataFrame, stage, estimator, response: str, formula: str) -> ModelFit:
    model = Pipeline(stages=[stage, estimator]).fit(df)
    fallback = stage.getInputCols() if isinstance(stage, VectorAssembler) else []
    names = _feature_names(model.stages[0].transform(df), fallback)
    return ModelFit(kind=kind, model=model, response=response,
                    feature_names=names, formula=formula)

# COMMAND ----------

# MAGIC %md
# MAGIC ## Estimators

# COMMAND ----------

def ml_linear_regression(df: DataFrame, response: str = None, features=None,
                         formula: str = None, fit_intercept: bool = True,
                         reg_param: float = 0.0, elastic_net_param: float = 0.0) -> ModelFit:
    """
    Fit an ordinary (or penalized) least squares model.

        fit = ml_linear_regression(training, response="mpg", features=["wt", "cyl"])
        print(fit.summary())
    """
    stage, label, formula_text = _feature_stage(response, features, formula)
    estimator = LinearRegression(
        featuresCol=FEATURES_COL,
        labelCol=label,
        fitIntercept=fit_intercept,
        regParam=reg_param,
        elasticNetParam=elastic_net_param,
        solver="normal" if elastic_net_param == 0 else "auto",
    )
    return _fit("Linear Regression", df, stage, estimator, response or label, formula_text)


def ml_logistic_regression(df: DataFrame, response: str = None, features=None,
                           formula: str = None, fit_intercept: bool = True,
                           reg_param: float = 0.0, elastic_net_param: float = 0.0,
                           threshold: float = 0.5) -> ModelFit:
    stage, label, formula_text = _feature_stage(response, features, formula)
    estimator = LogisticRegression(
        featuresCol=FEATURES_COL,
        labelCol=label,
        fitIntercept=fit_intercept,
        regParam=reg_param,
        elasticNetParam=elastic_net_param,
        threshold=threshold,
        family="binomial",
    )
    return _fit("Logistic Regression", df, stage, estimator, response or label, formula_text)


def ml_generalized_linear_regression(df: DataFrame, response: str = None, features=None,
                                     formula: str = None, family: str = "gaussian",
                                     link: str = None, reg_param: float = 0.0) -> ModelFit:
    stage, label, formula_text = _feature_stage(response, features, formula)
    estimator = GeneralizedLinearRegression(
        featuresCol=FEATURES_COL,
        labelCol=label,
        family=family,
        regParam=reg_param,
    )
    if link:
        estimator.setLink(link)
    return _fit("Generalized Linear Regression", df, stage, estimator,
                response or label, formula_text)

# COMMAND ----------

# MAGIC %md
# MAGIC ## Summaries
# MAGIC
# MAGIC Spark reports per-coefficient arrays with the intercept **last**; the tables
# MAGIC below put it first, as R does.

# COMMAND ----------

def _coefficient_table(fit: ModelFit, std_errors=None, t_values=None, p_values=None) -> pd.DataFrame:
    coefs = fit.coefficients()
    terms = list(coefs.keys())
    has_intercept = fit.estimator_model.getFitIntercept()

    def reorder(values):
        if values is None:
            return [np.nan] * len(terms)
        values = list(values)
        return values[-1:] + values[:-1] if has_intercept else values

    return pd.DataFrame({
        "term": terms,
        "estimate": [coefs[t] for t in terms],
        "std_error": reorder(std_errors),
        "t_value": reorder(t_values),
        "p_value": reorder(p_values),
    })


def _summarize_linear(fit: ModelFit) -> ModelSummary:
    est = fit.estimator_model
    summary = est.summary
    exact = est.getSolver() == "normal" and est.getRegParam() == 0
    table = _coefficient_table(
        fit,
        summary.coefficientStandardErrors if exact else None,
        summary.tValues if exact else None,
        summary.pValues if exact else None,
    )
    stats = {
        "r_squared": summary.r2,
        "adj_r_squared": summary.r2adj,
        "rmse": summary.rootMeanSquaredError,
        "num_instances": float(summary.numInstances),
    }
    return ModelSummary(fit.kind, fit.formula, table, stats)


def _summarize_logistic(fit: ModelFit) -> ModelSummary:
    summary = fit.estimator_model.summary
    stats = {
        "area_under_roc": summary.areaUnderROC,
        "accuracy": summary.accuracy,
    }
    return ModelSummary(fit.kind, fit.formula, _coefficient_table(fit), stats)


def _summarize_glm(fit: ModelFit) -> ModelSummary:
    summary = fit.estimator_model.summary
    table = _coefficient_table(
        fit, summary.coefficientStandardErrors, summary.tValues, summary.pValues
    )
    stats = {
        "aic": summary.aic,
        "deviance": summary.deviance,
        "null_deviance": summary.nullDeviance,
        "dispersion": summary.dispersion,
    }
    return ModelSummary(fit.kind, fit.formula, table, stats)


_SUMMARIZERS = {
    "Linear Regression": _summarize_linear,
    "Logistic Regression": _summarize_logistic,
    "Generalized Linear Regression": _summarize_glm,
}
