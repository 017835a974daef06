"""Client, response cache, typed models and a small JSON anime service for the Jikan API."""

__version__ = "0.1.0"