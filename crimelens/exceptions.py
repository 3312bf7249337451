"""
crimelens/exceptions.py
-----------------------
Errors raised by the aggregation and projection layers. Dashboard
sections catch CrimeLensError and render it with st.error; processing
scripts let it propagate so run_all.py stops the pipeline.
"""


class CrimeLensError(Exception):
    """Base class for all errors raised by crimelens."""


class ValidationError(CrimeLensError, ValueError):
    """A query argument is outside the fixed enumerations or bounds."""


class ProjectionError(CrimeLensError, ArithmeticError):
    """The regression cannot be fitted or produced a non-finite value."""
