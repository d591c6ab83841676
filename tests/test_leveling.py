from dataclasses import dataclass

import pytest

from eduplatform.factory.LevelingFactory import LevelingFactory
from eduplatform.model.enums import Level
from eduplatform.services.leveling import (
    BucketMasteryPolicy,
    LevelThresholds,
    OverallThresholdPolicy,
    level_for_percentage,
)
from eduplatform.services.scoring import BucketTally, DiagnosticScore, score_diagnostic


@dataclass
class Question:
    correct_answer: int
    difficulty: Level


DEFAULTS = LevelThresholds()


def score_of(beginner=(0, 0), intermediate=(0, 0), advanced=(0, 0)) -> DiagnosticScore:
    buckets = {
        Level.BEGINNER: BucketTally(*beginner),
        Level.INTERMEDIATE: BucketTally(*intermediate),
        Level.ADVANCED: BucketTally(*advanced),
    }
    return DiagnosticScore(
        buckets=buckets,
        total_correct=sum(b.correct for b in buckets.values()),
        total_questions=sum(b.total for b in buckets.values()),
    )


@pytest.mark.parametrize(
    "percentage, expected",
    [
        (0.0, Level.BEGINNER),
        (39.9, Level.BEGINNER),
        (40.0, Level.BEGINNER),
        (64.9, Level.BEGINNER),
        (65.0, Level.INTERMEDIATE),
        (84.9, Level.INTERMEDIATE),
        (85.0, Level.ADVANCED),
        (100.0, Level.ADVANCED),
    ],
)
def test_thresholds_resolve_ties_upwards(percentage, expected):
    assert level_for_percentage(percentage, DEFAULTS) == expected


def test_level_is_monotone_in_percentage():
    levels = [level_for_percentage(p / 10, DEFAULTS) for p in range(0, 1001)]

    ranks = [level.rank for level in levels]
    assert ranks == sorted(ranks)


def test_custom_thresholds():
    thresholds = LevelThresholds(beginner=30, intermediate=50, advanced=70)

    assert level_for_percentage(50, thresholds) == Level.INTERMEDIATE
    assert level_for_percentage(70, thresholds) == Level.ADVANCED


def test_overall_policy_places_full_marks_as_advanced():
    questions = [Question(i % 2 + 1, level) for level in Level for i in range(2)]
    score = score_diagnostic(questions, [1, 2, 1, 2, 1, 2])

    determination = OverallThresholdPolicy().determine(score, DEFAULTS)

    assert determination.level == Level.ADVANCED
    assert determination.overall_percentage == 100.0
    assert determination.thresholds == DEFAULTS


def test_overall_policy_with_no_questions_is_beginner():
    assert OverallThresholdPolicy().determine_level(score_of(), DEFAULTS) == Level.BEGINNER


def test_bucket_policy_picks_highest_mastered_bucket():
    policy = BucketMasteryPolicy(mastery_threshold=70)

    assert policy.determine_level(score_of((2, 2), (2, 2), (1, 2)), DEFAULTS) == Level.INTERMEDIATE
    assert policy.determine_level(score_of((2, 2), (1, 2), (2, 2)), DEFAULTS) == Level.ADVANCED
    assert policy.determine_level(score_of((2, 2), (1, 2), (1, 2)), DEFAULTS) == Level.BEGINNER


def test_bucket_policy_threshold_is_inclusive():
    policy = BucketMasteryPolicy(mastery_threshold=70)

    assert policy.determine_level(score_of(intermediate=(7, 10)), DEFAULTS) == Level.INTERMEDIATE


def test_bucket_policy_ignores_empty_buckets():
    policy = BucketMasteryPolicy()

    assert policy.determine_level(score_of(beginner=(3, 3)), DEFAULTS) == Level.BEGINNER


def test_factory_builds_configured_policies():
    assert isinstance(LevelingFactory.create(), OverallThresholdPolicy)
    assert isinstance(LevelingFactory.create("overall"), OverallThresholdPolicy)
    assert isinstance(LevelingFactory.create("bucket"), BucketMasteryPolicy)


def test_factory_rejects_unknown_policy():
    with pytest.raises(ValueError):
        LevelingFactory.create("median")


def test_factory_default_thresholds():
    assert LevelingFactory.default_thresholds() == LevelThresholds(40, 65, 85)
