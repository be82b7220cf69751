"""Kubernetes dashboard logic: listing filters, status classifiers, summaries and storage fragments."""

__version__ = "0.1.0"