"""
Signal provider adapters: imagery lookup, image classification, company registry.

Each adapter exposes one synchronous call that returns a value or raises
ProviderError. Checks treat them as replaceable black boxes.
"""

from asset_oracle.integrations.registry import CompanyRegistry, CompanyRegistryClient
from asset_oracle.integrations.satellite import ImageryProvider, StaticMapImageryClient
from asset_oracle.integrations.spv_fingerprint import (
    SPVFingerprint,
    detect_spv_fingerprint,
    requires_legal_wrapper,
)
from asset_oracle.integrations.vision import ImageClassifier, MockVisionClassifier

__all__ = [
    "CompanyRegistry",
    "CompanyRegistryClient",
    "ImageClassifier",
    "ImageryProvider",
    "MockVisionClassifier",
    "SPVFingerprint",
    "StaticMapImageryClient",
    "detect_spv_fingerprint",
    "requires_legal_wrapper",
]
