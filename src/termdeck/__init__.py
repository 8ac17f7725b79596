"""termdeck - tab, pane and group workspace model for a terminal client"""

__version__ = "0.1.0"
