"""Perceptual duplicate detection for photo uploads."""

__version__ = "0.1.0"
