import pytest
from sqlalchemy import delete, text

from eduplatform.data.seed import STUDENT_ID
from eduplatform.model import Course
from eduplatform.model.enums import UserRole
from eduplatform.repositories import BadgeRepository, CourseRepository, EnrollmentRepository
from eduplatform.schemas.user import CurrentUser
from eduplatform.services.enrollment_service import EnrollmentService
from eduplatform.utils.exceptions import ResourceNotFoundException

PASSING_ANSWERS = [1, 3, 1, 1, 0]
FAILING_ANSWERS = [0, 0, 0, 0, 0]


async def enroll(client, course_id, headers):
    response = await client.post("/api/v1/enrollments", json={"courseId": str(course_id)}, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]


async def test_enroll_creates_empty_progress(client, seeded, student_headers):
    enrollment = await enroll(client, seeded.course.id, student_headers)

    assert enrollment["course_id"] == str(seeded.course.id)
    assert enrollment["progress"] == {"completed_lessons": [], "current_lesson": 0}
    assert enrollment["completed"] is False
    assert enrollment["final_assessment_score"] is None
    assert enrollment["course"]["title"] == "English for Beginners"


async def test_duplicate_enrollment_conflicts(client, seeded, student_headers):
    await enroll(client, seeded.course.id, student_headers)

    response = await client.post(
        "/api/v1/enrollments", json={"course_id": str(seeded.course.id)}, headers=student_headers
    )

    assert response.status_code == 409
    mine = await client.get("/api/v1/enrollments/my-courses", headers=student_headers)
    assert len(mine.json()["data"]) == 1


async def test_only_students_enroll(client, seeded, teacher_headers):
    response = await client.post(
        "/api/v1/enrollments", json={"courseId": str(seeded.course.id)}, headers=teacher_headers
    )

    assert response.status_code == 403


async def test_enroll_in_unknown_course(client, seeded, student_headers):
    response = await client.post(
        "/api/v1/enrollments",
        json={"courseId": "00000000-0000-0000-0000-000000000000"},
        headers=student_headers,
    )

    assert response.status_code == 404


async def test_lesson_completion_is_idempotent(client, seeded, student_headers):
    enrollment = await enroll(client, seeded.course.id, student_headers)
    url = f"/api/v1/enrollments/{enrollment['id']}/progress"

    first = await client.put(url, json={"lessonId": 0}, headers=student_headers)
    second = await client.put(url, json={"lesson_id": 0}, headers=student_headers)

    assert first.status_code == 200
    assert second.json()["data"]["progress"] == {"completed_lessons": [0], "current_lesson": 1}


async def test_progress_follows_lesson_order(client, seeded, student_headers):
    enrollment = await enroll(client, seeded.course.id, student_headers)
    url = f"/api/v1/enrollments/{enrollment['id']}/progress"

    for lesson in (0, 2, 1):
        response = await client.put(url, json={"lessonId": lesson}, headers=student_headers)

    assert response.json()["data"]["progress"] == {"completed_lessons": [0, 2, 1], "current_lesson": 2}


async def test_lesson_outside_course_is_rejected(client, seeded, student_headers):
    enrollment = await enroll(client, seeded.course.id, student_headers)
    url = f"/api/v1/enrollments/{enrollment['id']}/progress"

    assert (await client.put(url, json={"lessonId": 3}, headers=student_headers)).status_code == 400
    assert (await client.put(url, json={"lessonId": -1}, headers=student_headers)).status_code == 400


async def test_progress_only_by_enrolled_student(client, seeded, student_headers, headers_for):
    enrollment = await enroll(client, seeded.course.id, student_headers)

    response = await client.put(
        f"/api/v1/enrollments/{enrollment['id']}/progress",
        json={"lessonId": 0},
        headers=headers_for("someone-else", "student"),
    )

    assert response.status_code == 403


async def test_passing_assessment_completes_course_and_issues_badge(client, seeded, student_headers):
    enrollment = await enroll(client, seeded.course.id, student_headers)

    response = await client.post(
        f"/api/v1/enrollments/{enrollment['id']}/assessment",
        json={"answers": PASSING_ANSWERS},
        headers=student_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["score"] == 80.0
    assert data["passed"] is True
    assert data["correct"] == 4 and data["total"] == 5
    assert data["enrollment"]["completed"] is True
    assert data["enrollment"]["completed_at"] is not None
    assert data["enrollment"]["final_assessment_answers"] == PASSING_ANSWERS
    assert data["badge"]["title"] == "English for Beginners Completion"
    assert data["badge"]["description"] == "Completed English for Beginners with 80% score"

    badges = await client.get("/api/v1/badges/my-badges", headers=student_headers)
    assert len(badges.json()["data"]) == 1


async def test_failing_assessment_issues_no_badge(client, seeded, student_headers):
    enrollment = await enroll(client, seeded.course.id, student_headers)

    response = await client.post(
        f"/api/v1/enrollments/{enrollment['id']}/assessment",
        json={"answers": FAILING_ANSWERS},
        headers=student_headers,
    )

    data = response.json()["data"]
    assert data["score"] == 0.0
    assert data["passed"] is False
    assert data["badge"] is None
    assert data["enrollment"]["completed"] is False
    assert data["enrollment"]["final_assessment_score"] == 0.0

    badges = await client.get("/api/v1/badges/my-badges", headers=student_headers)
    assert badges.json()["data"] == []


async def test_resubmission_keeps_single_badge_and_completion(client, seeded, student_headers):
    enrollment = await enroll(client, seeded.course.id, student_headers)
    url = f"/api/v1/enrollments/{enrollment['id']}/assessment"

    first = (await client.post(url, json={"answers": PASSING_ANSWERS}, headers=student_headers)).json()["data"]
    second = (await client.post(url, json={"answers": [1, 3, 1, 1, 1]}, headers=student_headers)).json()["data"]
    failed = (await client.post(url, json={"answers": FAILING_ANSWERS}, headers=student_headers)).json()["data"]

    assert second["score"] == 100.0
    assert second["badge"]["id"] == first["badge"]["id"]
    assert second["enrollment"]["completed_at"] == first["enrollment"]["completed_at"]

    assert failed["passed"] is False
    assert failed["badge"] is None
    assert failed["enrollment"]["completed"] is True
    assert failed["enrollment"]["final_assessment_score"] == 0.0

    badges = await client.get("/api/v1/badges/my-badges", headers=student_headers)
    assert len(badges.json()["data"]) == 1


async def test_assessment_only_by_enrolled_student(client, seeded, student_headers, teacher_headers):
    enrollment = await enroll(client, seeded.course.id, student_headers)

    response = await client.post(
        f"/api/v1/enrollments/{enrollment['id']}/assessment",
        json={"answers": PASSING_ANSWERS},
        headers=teacher_headers,
    )

    assert response.status_code == 403


async def test_enrollment_visibility(client, seeded, student_headers, teacher_headers, admin_headers, headers_for):
    enrollment = await enroll(client, seeded.course.id, student_headers)
    url = f"/api/v1/enrollments/{enrollment['id']}"

    assert (await client.get(url, headers=student_headers)).status_code == 200
    assert (await client.get(url, headers=teacher_headers)).status_code == 200
    assert (await client.get(url, headers=admin_headers)).status_code == 200
    assert (await client.get(url, headers=headers_for("someone-else", "student"))).status_code == 403


async def test_course_enrollments_for_teacher(client, seeded, student_headers, teacher_headers):
    await enroll(client, seeded.course.id, student_headers)
    url = f"/api/v1/enrollments/course/{seeded.course.id}"

    response = await client.get(url, headers=teacher_headers)
    enrollments = response.json()["data"]
    assert len(enrollments) == 1
    assert enrollments[0]["student"]["name"] == "Jane Student"

    assert (await client.get(url, headers=student_headers)).status_code == 403


async def test_enrollments_in_different_courses_are_independent(client, seeded, student_headers, teacher_headers):
    second_course = await client.post(
        "/api/v1/courses",
        json={"title": "English Idioms", "description": "Beyond the basics", "level": "intermediate",
              "category": "English", "lessons": [{"title": "Break the ice", "content": "..."}]},
        headers=teacher_headers,
    )

    first = await enroll(client, seeded.course.id, student_headers)
    second = await enroll(client, second_course.json()["data"]["id"], student_headers)

    assert first["id"] != second["id"]
    mine = await client.get("/api/v1/enrollments/my-courses", headers=student_headers)
    assert {e["course"]["title"] for e in mine.json()["data"]} == {"English for Beginners", "English Idioms"}


async def test_boolean_assessment_answers_are_rejected(client, seeded, student_headers):
    enrollment = await enroll(client, seeded.course.id, student_headers)

    response = await client.post(
        f"/api/v1/enrollments/{enrollment['id']}/assessment",
        json={"answers": [True] * 5},
        headers=student_headers,
    )

    assert response.status_code == 400
    stored = (await client.get(f"/api/v1/enrollments/{enrollment['id']}", headers=student_headers)).json()["data"]
    assert stored["final_assessment_score"] is None
    assert stored["final_assessment_answers"] is None
    assert stored["completed"] is False
    badges = await client.get("/api/v1/badges/my-badges", headers=student_headers)
    assert badges.json()["data"] == []


class CourseDeletedAfterLookup(CourseRepository):
    """Returns the course, then removes it before the caller can insert."""

    async def get_by_id(self, id):
        course = await super().get_by_id(id)
        await self.session.execute(delete(Course).where(Course.id == id))
        await self.session.commit()
        return course


async def test_enroll_in_course_deleted_meanwhile_is_not_found(session_factory, seeded):
    async with session_factory() as session:
        await session.execute(text("PRAGMA foreign_keys=ON"))
        await session.commit()

        service = EnrollmentService(
            EnrollmentRepository(session),
            CourseDeletedAfterLookup(session),
            BadgeRepository(session),
        )
        student = CurrentUser(id=STUDENT_ID, role=UserRole.STUDENT)

        with pytest.raises(ResourceNotFoundException):
            await service.enroll(student, seeded.course.id)

        assert await EnrollmentRepository(session).get_by_student(STUDENT_ID) == []
