"""Building blocks for a text status bar: data gathering, values and states per block."""

__version__ = "0.1.0"