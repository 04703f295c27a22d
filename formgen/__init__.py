"""formgen: generate typed Angular form templates and factories from entity forms."""

__version__ = "0.1.0"
