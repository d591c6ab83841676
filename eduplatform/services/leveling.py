"""
Leveling policies: turn a diagnostic score into a placement level.

Two strategies exist and are selected by configuration:
    - OverallThresholdPolicy: compares the overall percentage with the quiz's
      thresholds. Ties resolve upwards (>=).
    - BucketMasteryPolicy: looks at each difficulty bucket's own percentage
      and places the student at the highest bucket they have mastered.

Either way the result is exactly one Level.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from eduplatform.model.enums import Level
from eduplatform.services.scoring import DiagnosticScore


@dataclass(frozen=True)
class LevelThresholds:
    beginner: float = 40.0
    intermediate: float = 65.0
    advanced: float = 85.0


@dataclass(frozen=True)
class LevelDetermination:
    level: Level
    overall_percentage: float
    thresholds: LevelThresholds


def level_for_percentage(percentage: float, thresholds: LevelThresholds) -> Level:
    if percentage >= thresholds.advanced:
        return Level.ADVANCED
    if percentage >= thresholds.intermediate:
        return Level.INTERMEDIATE
    # Below the beginner threshold still places as beginner
    return Level.BEGINNER


class LevelingPolicy(ABC):
    @abstractmethod
    def determine_level(self, score: DiagnosticScore, thresholds: LevelThresholds) -> Level:
        ...

    def determine(self, score: DiagnosticScore, thresholds: LevelThresholds) -> LevelDetermination:
        return LevelDetermination(
            level=self.determine_level(score, thresholds),
            overall_percentage=score.overall_percentage,
            thresholds=thresholds,
        )


class OverallThresholdPolicy(LevelingPolicy):
    def determine_level(self, score: DiagnosticScore, thresholds: LevelThresholds) -> Level:
        return level_for_percentage(score.overall_percentage, thresholds)


class BucketMasteryPolicy(LevelingPolicy):
    """Quiz thresholds are ignored; a single mastery cut applies to every bucket."""

    def __init__(self, mastery_threshold: float = 70.0):
        self.mastery_threshold = mastery_threshold

    def determine_level(self, score: DiagnosticScore, thresholds: LevelThresholds) -> Level:
        if score.bucket(Level.ADVANCED).percentage >= self.mastery_threshold:
            return Level.ADVANCED
        if score.bucket(Level.INTERMEDIATE).percentage >= self.mastery_threshold:
            return Level.INTERMEDIATE
        return Level.BEGINNER
