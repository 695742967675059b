"""Command line routing for Samwise."""

from samwise.cli.capability import Capability
from samwise.cli.router import Router, levenshtein

__all__ = ["Capability", "Router", "levenshtein"]
