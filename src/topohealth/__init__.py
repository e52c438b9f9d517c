"""Topology health platform.

Reconciles serviceability, telemetry and IS-IS data into per-link
health records and computes shortest paths over the result.
"""

__version__ = "0.1.0"
