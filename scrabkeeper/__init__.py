"""scrabkeeper – počítadlo skóre pre fyzickú stolovú hru so slovami."""

__version__ = "0.1.0"
