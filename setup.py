"""Setuptools build hooks for nameddims."""

from __future__ import annotations

from setuptools import setup

# Pure Python modules only: keep the default command classes so the wheel
# is built as ``py3-none-any``.
setup()
