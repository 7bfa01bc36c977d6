# wget_mirror/__init__.py
"""
wget_mirror package initializer.
Defines package version; the CLI lives in :mod:`wget_mirror.cli`.
"""
__version__ = "0.1.0"
