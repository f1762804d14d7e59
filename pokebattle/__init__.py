"""Pokemon battle resolution core: type chart, moves, damage engine and turn sessions."""
__version__ = "0.1.0"
