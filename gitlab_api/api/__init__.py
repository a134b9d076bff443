"""
API classes - base class for the per-resource endpoints
"""

from .abstract_api import AbstractApi

__all__ = ["AbstractApi"]
