"""Statistical routines: simple OLS and expression preprocessing."""

from . import expression as expression
from . import ols as ols
