"""Weather proxy: cached current weather and forecasts for named cities."""

__version__ = "0.1.0"
