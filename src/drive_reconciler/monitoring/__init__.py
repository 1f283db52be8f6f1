"""Prometheus metrics for the drive reconciler."""
