"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""


class InvalidRegion(ValueError):
    """Bounding region is inverted, degenerate or not finite."""


class InvalidAgentCount(ValueError):
    """Requested number of scanning agents is outside the allowed range."""


class LookupFailed(RuntimeError):
    """The place-lookup service could not answer a query."""
