"""
Attribute estimator module.

Remote image classification expanded into a RichEstimate.
"""

from .client import RemoteAttributeEstimator
from .normalizer import build_rich_estimate, parse_labels

__all__ = ["RemoteAttributeEstimator", "build_rich_estimate", "parse_labels"]
