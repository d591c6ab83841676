from typing import Optional

from eduplatform.model.enums import LevelingPolicyType
from eduplatform.services.leveling import (
    BucketMasteryPolicy,
    LevelingPolicy,
    LevelThresholds,
    OverallThresholdPolicy,
)


class LevelingFactory:
    @staticmethod
    def create(policy: Optional[str] = None) -> LevelingPolicy:
        """
        Create the leveling policy based on the configured strategy.

        Args:
            policy: Override the configured policy name ("overall" or "bucket")

        Returns:
            LevelingPolicy instance
        """
        from eduplatform.config import get_settings

        settings = get_settings()
        _policy = policy or settings.leveling_policy

        if _policy == LevelingPolicyType.OVERALL.value:
            return OverallThresholdPolicy()

        if _policy == LevelingPolicyType.BUCKET.value:
            return BucketMasteryPolicy(mastery_threshold=settings.bucket_mastery_threshold)

        raise ValueError(f"Unsupported leveling policy: {_policy}")

    @staticmethod
    def default_thresholds() -> LevelThresholds:
        """Thresholds applied to quizzes created without custom cut points."""
        from eduplatform.config import get_settings

        settings = get_settings()
        return LevelThresholds(
            beginner=settings.default_beginner_threshold,
            intermediate=settings.default_intermediate_threshold,
            advanced=settings.default_advanced_threshold,
        )
