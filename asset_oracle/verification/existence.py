"""
Existence check: does the asset physically exist at the claimed location?

Signals:
- satellite_image: 1.0 when imagery was fetched, 0.0 otherwise (evidence: image URL).
- vision_analysis: classifier confidence that a building is present.

score = 0.7 * vision + 0.3. A fetched image floors the score at 0.3 and the
classifier decides the rest; pass when score > 0.8.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from asset_oracle.verification.base import DEGRADED_SCORE, call_provider
from asset_oracle.verification.models import (
    CheckName,
    CheckResult,
    SignalData,
    SignalKind,
    SubmissionData,
    clamp_score,
)

if TYPE_CHECKING:
    from asset_oracle.integrations.satellite import ImageryProvider
    from asset_oracle.integrations.vision import ImageClassifier

VISION_WEIGHT = 0.7
IMAGERY_FLOOR = 0.3
EXISTENCE_CONFIDENCE = 0.95
BUILDING_DETECTED_EVIDENCE = "Building detected with high confidence"
NO_IMAGERY_EVIDENCE = "No imagery available for analysis"


class ExistenceCheck:
    name = CheckName.EXISTENCE

    def __init__(self, imagery: ImageryProvider, classifier: ImageClassifier) -> None:
        self._imagery = imagery
        self._classifier = classifier

    def verify(self, submission: SubmissionData) -> CheckResult:
        signals: dict[SignalKind, SignalData] = {}

        image_url, image_error = call_provider(
            self._imagery.fetch_image,
            submission.coordinates,
            check=self.name,
            signal=SignalKind.SATELLITE_IMAGE.value,
            submission_id=submission.id,
        )
        signals[SignalKind.SATELLITE_IMAGE] = SignalData(
            source=self._imagery.source,
            score=1.0 if image_error is None else DEGRADED_SCORE,
            data=image_url if image_error is None else {"error": image_error},
        )

        vision_score = DEGRADED_SCORE
        evidence: object = NO_IMAGERY_EVIDENCE
        if image_error is None:
            raw, vision_error = call_provider(
                self._classifier.classify,
                image_url,
                check=self.name,
                signal=SignalKind.VISION_ANALYSIS.value,
                submission_id=submission.id,
            )
            if vision_error is None:
                vision_score = clamp_score(raw)
                evidence = BUILDING_DETECTED_EVIDENCE
            else:
                evidence = {"error": vision_error}
        signals[SignalKind.VISION_ANALYSIS] = SignalData(
            source=self._classifier.source,
            score=vision_score,
            data=evidence,
        )

        final_score = (vision_score * VISION_WEIGHT) + IMAGERY_FLOOR
        return CheckResult.from_score(
            self.name,
            final_score,
            signals,
            confidence=EXISTENCE_CONFIDENCE,
        )
