"""Reference fits from third-party libraries, used to cross-check LMSim."""

import numpy as np


def sklearn_fit(x, y):
    """Return ``(intercept, slope, y_pred)`` from scikit-learn's LinearRegression."""
    from sklearn.linear_model import LinearRegression

    model = LinearRegression().fit(np.asarray(x).reshape(-1, 1), np.asarray(y))
    y_pred = model.predict(np.asarray(x).reshape(-1, 1))
    return float(model.intercept_), float(model.coef_[0]), y_pred


def scipy_fit(x, y):
    """Return the ``scipy.stats.linregress`` result."""
    from scipy.stats import linregress

    return linregress(x, y)
