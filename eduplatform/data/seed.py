"""
Demo data: one user per role, the "English for Beginners" course and an
English placement quiz.

Users are keyed by identity provider id; sign tokens with ``userId`` set to
one of the ids below to act as them.

Usage:
    python -m eduplatform.data.seed
"""

import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from eduplatform.model import (
    AssessmentQuestion,
    Badge,
    Course,
    CourseLesson,
    DiagnosticQuestion,
    DiagnosticQuiz,
    DiagnosticResult,
    Enrollment,
    Level,
    User,
    UserRole,
)
from eduplatform.utils.log import setup_logging

logger = logging.getLogger(__name__)

ADMIN_ID = "demo-admin"
TEACHER_ID = "demo-teacher"
STUDENT_ID = "demo-student"


@dataclass
class SeededData:
    admin: User
    teacher: User
    student: User
    course: Course
    diagnostic_quiz: DiagnosticQuiz


def _placement_questions() -> list[DiagnosticQuestion]:
    questions = [
        ('What is the past tense of "go"?', ["goed", "went", "gone", "goes"], 1, Level.BEGINNER),
        ('Which word is a synonym of "happy"?', ["sad", "angry", "joyful", "tired"], 2, Level.BEGINNER),
        (
            "What is a metaphor?",
            [
                "A comparison using like or as",
                "A direct comparison without using like or as",
                "A sound word",
                "A repeated word",
            ],
            1,
            Level.INTERMEDIATE,
        ),
        (
            "Which sentence uses correct grammar?",
            [
                "He don't like pizza",
                "He doesn't likes pizza",
                "He doesn't like pizza",
                "He not like pizza",
            ],
            2,
            Level.INTERMEDIATE,
        ),
        (
            "What is the subjunctive mood used for?",
            [
                "Expressing facts",
                "Expressing wishes or hypotheticals",
                "Asking questions",
                "Making commands",
            ],
            1,
            Level.ADVANCED,
        ),
        (
            'Identify the gerund in: "Swimming is my favorite activity"',
            ["is", "my", "Swimming", "activity"],
            2,
            Level.ADVANCED,
        ),
    ]
    return [
        DiagnosticQuestion(
            position=index, question=text, options=options, correct_answer=answer, difficulty=difficulty
        )
        for index, (text, options, answer, difficulty) in enumerate(questions)
    ]


def _beginner_lessons() -> list[CourseLesson]:
    lessons = [
        (
            "Introduction to English",
            "<h2>Welcome to English!</h2><p>In this lesson, we will learn the basics of the English "
            "language, including the alphabet, basic greetings, and common phrases.</p>"
            "<h3>The English Alphabet</h3><p>The English alphabet has 26 letters: A, B, C, D, E, F, G, "
            "H, I, J, K, L, M, N, O, P, Q, R, S, T, U, V, W, X, Y, Z</p><h3>Basic Greetings</h3>"
            "<ul><li>Hello</li><li>Good morning</li><li>Good afternoon</li><li>Good evening</li>"
            "<li>How are you?</li></ul>",
        ),
        (
            "Basic Grammar",
            "<h2>English Grammar Basics</h2><p>Grammar is the structure of language. Let's learn some "
            "basic grammar rules.</p><h3>Parts of Speech</h3><ul>"
            "<li><strong>Nouns:</strong> Person, place, or thing (e.g., cat, London, happiness)</li>"
            "<li><strong>Verbs:</strong> Action words (e.g., run, eat, think)</li>"
            "<li><strong>Adjectives:</strong> Describing words (e.g., beautiful, tall, happy)</li>"
            "<li><strong>Adverbs:</strong> Describe verbs (e.g., quickly, slowly, carefully)</li></ul>"
            "<h3>Simple Sentences</h3><p>A simple sentence has a subject and a verb:</p>"
            "<ul><li>I am a student.</li><li>She likes pizza.</li><li>They play soccer.</li></ul>",
        ),
        (
            "Common Vocabulary",
            "<h2>Building Your Vocabulary</h2><p>Let's learn some common English words and phrases.</p>"
            "<h3>Numbers</h3><p>One, two, three, four, five, six, seven, eight, nine, ten</p>"
            "<h3>Colors</h3><p>Red, blue, green, yellow, orange, purple, pink, black, white, brown</p>"
            "<h3>Days of the Week</h3><p>Monday, Tuesday, Wednesday, Thursday, Friday, Saturday, Sunday</p>"
            "<h3>Common Phrases</h3><ul><li>Thank you</li><li>You're welcome</li><li>Excuse me</li>"
            "<li>I'm sorry</li><li>Please</li></ul>",
        ),
    ]
    return [
        CourseLesson(position=index, title=title, content=content, order=index)
        for index, (title, content) in enumerate(lessons)
    ]


def _beginner_assessment() -> list[AssessmentQuestion]:
    questions = [
        ("How do you greet someone in the morning?", ["Good night", "Good morning", "Good bye", "See you later"], 1),
        ("Which is a noun?", ["run", "quickly", "beautiful", "dog"], 3),
        ("What color is the sky on a clear day?", ["red", "blue", "green", "yellow"], 1),
        ('Complete: "I ___ a student"', ["is", "am", "are", "be"], 1),
        ("What day comes after Monday?", ["Sunday", "Tuesday", "Wednesday", "Friday"], 1),
    ]
    return [
        AssessmentQuestion(position=index, question=text, options=options, correct_answer=answer)
        for index, (text, options, answer) in enumerate(questions)
    ]


async def seed_demo_data(session: AsyncSession) -> SeededData:
    """
    Replace all data with the demo set.

    Args:
        session: Async database session; committed on success

    Returns:
        The created users, course and quiz
    """
    # Children first so foreign keys never dangle
    for model in (Badge, Enrollment, DiagnosticResult, DiagnosticQuestion, DiagnosticQuiz,
                  AssessmentQuestion, CourseLesson, Course, User):
        await session.execute(delete(model))
    logger.info("Cleared existing data")

    admin = User(id=ADMIN_ID, name="Admin User", email="admin@eduplatform.com", role=UserRole.ADMIN)
    teacher = User(id=TEACHER_ID, name="John Teacher", email="teacher@eduplatform.com", role=UserRole.TEACHER)
    student = User(id=STUDENT_ID, name="Jane Student", email="student@eduplatform.com", role=UserRole.STUDENT)
    session.add_all([admin, teacher, student])

    diagnostic_quiz = DiagnosticQuiz(
        title="English Placement Test",
        category="English",
        description="Find the course level that fits you.",
        teacher_id=TEACHER_ID,
        questions=_placement_questions(),
    )
    course = Course(
        title="English for Beginners",
        description="Learn the basics of English language including grammar, vocabulary, "
                    "and simple conversations.",
        level=Level.BEGINNER,
        category="English",
        teacher_id=TEACHER_ID,
        passing_score=70,
        lessons=_beginner_lessons(),
        assessment_questions=_beginner_assessment(),
    )
    session.add_all([diagnostic_quiz, course])

    await session.commit()
    logger.info(f"Seeded users ({ADMIN_ID}, {TEACHER_ID}, {STUDENT_ID}), course {course.id} "
                f"and diagnostic quiz {diagnostic_quiz.id}")
    return SeededData(
        admin=admin, teacher=teacher, student=student, course=course, diagnostic_quiz=diagnostic_quiz
    )


async def main():
    from eduplatform.db.session import AsyncSessionLocal, close_db, init_db

    await init_db()
    try:
        async with AsyncSessionLocal() as session:
            await seed_demo_data(session)
    finally:
        await close_db()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
