"""
Support Module

Generic containers shared by the HTTP and validation layers.
"""

from .header_bag import HeaderBag
from .parameter_bag import ParameterBag

__all__ = [
    "HeaderBag",
    "ParameterBag",
]
