"""EyeBreak: a 20-20-20 eye-strain break timer."""

__version__ = "0.1.0"
