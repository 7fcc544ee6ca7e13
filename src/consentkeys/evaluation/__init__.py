"""Evaluation helpers built on top of the public engine API."""
