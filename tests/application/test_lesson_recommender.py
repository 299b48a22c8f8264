import pytest

from prolingo.application.lesson_recommender import (
    Lesson,
    UserProgress,
    next_level,
    recommend_lessons,
    score_lesson,
)


@pytest.fixture
def progress():
    return UserProgress(
        level="A2",
        xp=1000,
        completed_lessons=["done"],
        strengths=["greetings"],
        weaknesses=["verbs", "food"],
    )


def test_next_level():
    assert next_level("A1") == "A2"
    assert next_level("C1") == "C2"
    assert next_level("C2") is None
    assert next_level("Z9") is None


def test_score_same_level_perfect_difficulty(progress):
    lesson = Lesson(id="l1", title="Basics", level="A2", difficulty=1.0)
    # 10 for level + (1 - |1.0 - 1.0|) * 5
    assert score_lesson(lesson, progress) == pytest.approx(15.0)


def test_score_next_level_and_topics(progress):
    lesson = Lesson(
        id="l2",
        title="Cooking",
        level="B1",
        difficulty=1.5,
        topics=("food", "verbs", "greetings"),
    )
    # 5 + 0.5 * 5 + 3 + 3 - 1
    assert score_lesson(lesson, progress) == pytest.approx(12.5)


def test_recommend_filters_and_ranks(progress):
    lessons = [
        Lesson(id="done", title="Done", level="A2", difficulty=1.0),
        Lesson(id="weak", title="Verbs", level="A2", difficulty=1.2, topics=("verbs",)),
        Lesson(id="plain", title="Plain", level="A2", difficulty=1.0),
        Lesson(id="next", title="Next", level="B1", difficulty=1.0),
        Lesson(id="far", title="Far", level="C1", difficulty=1.0),
        Lesson(id="draft", title="Draft", level="A2", difficulty=1.0, published=False),
    ]

    recommended = recommend_lessons(lessons, progress, count=3)

    assert [lesson.id for lesson in recommended] == ["weak", "plain", "next"]


def test_recommend_respects_count(progress):
    lessons = [Lesson(id=f"l{i}", title="x", level="A2", difficulty=1.0) for i in range(5)]
    assert len(recommend_lessons(lessons, progress, count=2)) == 2


def test_recommend_caps_candidates_by_difficulty(progress):
    # Only the ten easiest lessons are considered, like the original query limit.
    lessons = [
        Lesson(id=f"easy{i}", title="x", level="A2", difficulty=0.1 * i) for i in range(10)
    ]
    lessons.append(Lesson(id="hard_weak", title="x", level="A2", difficulty=5.0, topics=("verbs",)))

    recommended = recommend_lessons(lessons, progress, count=10)

    assert "hard_weak" not in {lesson.id for lesson in recommended}
