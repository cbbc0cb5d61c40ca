"""Operator status notification dispatch."""
