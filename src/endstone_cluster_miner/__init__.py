"""Cluster Miner for Endstone."""

__version__ = "1.0.0"
