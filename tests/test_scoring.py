from dataclasses import dataclass

import pytest

from eduplatform.model.enums import Level
from eduplatform.services.scoring import grade_assessment, is_correct, score_diagnostic


@dataclass
class Question:
    correct_answer: int
    difficulty: Level = Level.BEGINNER


def english_placement():
    return [
        Question(1, Level.BEGINNER),
        Question(2, Level.BEGINNER),
        Question(1, Level.INTERMEDIATE),
        Question(2, Level.INTERMEDIATE),
        Question(1, Level.ADVANCED),
        Question(2, Level.ADVANCED),
    ]


def test_all_correct_fills_every_bucket():
    score = score_diagnostic(english_placement(), [1, 2, 1, 2, 1, 2])

    assert score.total_correct == 6
    assert score.total_questions == 6
    assert score.overall_percentage == 100.0
    for level in Level:
        assert score.bucket(level).correct == 2
        assert score.bucket(level).total == 2


def test_partial_answers_score_by_bucket():
    score = score_diagnostic(english_placement(), [1, 2, 0, 2, 0, 0])

    assert score.bucket(Level.BEGINNER).percentage == 100.0
    assert score.bucket(Level.INTERMEDIATE).percentage == 50.0
    assert score.bucket(Level.ADVANCED).percentage == 0.0
    assert score.overall_percentage == pytest.approx(50.0)


def test_short_answer_list_counts_missing_as_wrong():
    score = score_diagnostic(english_placement(), [1, 2])

    assert score.total_correct == 2
    assert score.total_questions == 6
    assert score.bucket(Level.ADVANCED).total == 2
    assert score.bucket(Level.ADVANCED).correct == 0


def test_extra_answers_are_ignored():
    score = score_diagnostic(english_placement(), [1, 2, 1, 2, 1, 2, 3, 3])

    assert score.total_correct == 6


def test_empty_quiz_has_zero_percentage_and_three_buckets():
    score = score_diagnostic([], [])

    assert score.overall_percentage == 0.0
    assert set(score.buckets) == set(Level)
    assert all(bucket.total == 0 and bucket.percentage == 0.0 for bucket in score.buckets.values())


def test_missing_difficulty_bucket_is_zero():
    questions = [Question(0, Level.BEGINNER), Question(0, Level.BEGINNER)]
    score = score_diagnostic(questions, [0, 0])

    assert score.bucket(Level.INTERMEDIATE).total == 0
    assert score.bucket(Level.ADVANCED).percentage == 0.0


def test_string_difficulty_is_accepted():
    score = score_diagnostic([Question(0, "advanced")], [0])

    assert score.bucket(Level.ADVANCED).correct == 1


@pytest.mark.parametrize("answer", [None, True, False, -1, 7])
def test_invalid_answers_never_match(answer):
    assert not is_correct([answer], 0, 0 if answer is not True else 1)


def test_grade_assessment_counts_matches():
    questions = [Question(1), Question(3), Question(1), Question(1), Question(1)]
    grade = grade_assessment(questions, [1, 3, 1, 1, 0])

    assert grade.correct == 4
    assert grade.total == 5
    assert grade.score == 80.0


def test_grade_assessment_without_questions():
    grade = grade_assessment([], [1, 2])

    assert grade.total == 0
    assert grade.score == 0.0


def test_bucket_tallies_sum_to_totals():
    questions = english_placement() + [Question(0, Level.ADVANCED), Question(3, Level.BEGINNER)]
    answers = [1, 0, 1, 2, None, 2, 0, 3]

    score = score_diagnostic(questions, answers)

    assert sum(b.correct for b in score.buckets.values()) == score.total_correct == 6
    assert sum(b.total for b in score.buckets.values()) == score.total_questions == 8
    assert score.overall_percentage == pytest.approx(100 * 6 / 8)
