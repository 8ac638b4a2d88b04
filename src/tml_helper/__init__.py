"""tml-helper: generate tModLoader source files from layered templates."""

__version__ = "0.2.0"
