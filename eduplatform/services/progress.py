"""
Lesson progress of one enrollment.

Lessons are identified by their 0-based position in the course. The tracker
itself does not know how many lessons a course has; range checks belong to
the caller.
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class LessonProgress:
    completed_lessons: tuple[int, ...] = ()
    current_lesson: int = 0

    @classmethod
    def from_stored(cls, completed_lessons: Iterable[int] | None, current_lesson: int | None) -> "LessonProgress":
        return cls(
            completed_lessons=tuple(completed_lessons or ()),
            current_lesson=current_lesson or 0,
        )

    def is_completed(self, lesson_index: int) -> bool:
        return lesson_index in self.completed_lessons

    def complete(self, lesson_index: int) -> "LessonProgress":
        """
        Mark a lesson as completed and move the pointer past it.
        Completing an already completed lesson returns the progress unchanged.
        """
        if self.is_completed(lesson_index):
            return self
        return LessonProgress(
            completed_lessons=self.completed_lessons + (lesson_index,),
            current_lesson=lesson_index + 1,
        )
