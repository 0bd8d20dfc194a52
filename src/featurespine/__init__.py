"""
featurespine - Feature-toggle adapters with per-request memoization.

Re-exports the public API of :mod:`featurespine.core` and
:mod:`featurespine.adapters`.
"""

__version__ = "0.1.0"

from featurespine.adapters import *  # noqa
from featurespine.core import *  # noqa
