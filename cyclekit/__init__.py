"""cyclekit — menstrual cycle phase and prediction engine with a stateless HTTP API."""

__version__ = "0.1.0"
