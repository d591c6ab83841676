from eduplatform.services.progress import LessonProgress


def test_new_progress_is_empty():
    progress = LessonProgress()

    assert progress.completed_lessons == ()
    assert progress.current_lesson == 0


def test_complete_records_lesson_and_advances_pointer():
    progress = LessonProgress().complete(0)

    assert progress.completed_lessons == (0,)
    assert progress.current_lesson == 1


def test_complete_is_idempotent():
    once = LessonProgress().complete(2)
    twice = once.complete(2)

    assert twice is once
    assert twice.completed_lessons == (2,)
    assert twice.current_lesson == 3


def test_completing_an_earlier_lesson_moves_pointer_back():
    progress = LessonProgress().complete(0).complete(2).complete(1)

    assert progress.completed_lessons == (0, 2, 1)
    assert progress.current_lesson == 2


def test_recompleting_does_not_move_pointer():
    progress = LessonProgress().complete(0).complete(1).complete(0)

    assert progress.current_lesson == 2


def test_from_stored_handles_missing_values():
    progress = LessonProgress.from_stored(None, None)

    assert progress == LessonProgress()
    assert LessonProgress.from_stored([0, 1], 2).is_completed(1)
