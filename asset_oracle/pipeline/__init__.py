"""
Pipeline: verification aggregation and attestation.

OracleAggregator runs the checks, commits their signals, signs the commitment
and hands it to the ledger. build_aggregator() wires one from settings.
"""

from asset_oracle.pipeline.aggregator import OracleAggregator, build_aggregator

__all__ = ["OracleAggregator", "build_aggregator"]
