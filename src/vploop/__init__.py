"""vploop -- current-conditions client for Vantage Pro weather consoles."""

__version__ = "0.1.0"
