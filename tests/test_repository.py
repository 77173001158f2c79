# tests/test_repository.py
import pytest

from src.exceptions import StorageError
from src.models.evaluation import FeedbackAnalysis, ResponseType
from src.models.interview import Difficulty, InterviewSetup, InterviewStatus
from src.models.question import GeneratedQuestion


def _setup(**kwargs):
    values = {"title": "Practice", "job_role": "Data Scientist"}
    values.update(kwargs)
    return InterviewSetup(**values)


def test_create_interview_with_ordered_questions(repository, sample_questions):
    interview, questions = repository.create_interview_with_questions(
        _setup(industry="Finance", difficulty=Difficulty.BEGINNER), sample_questions
    )

    assert interview.status == InterviewStatus.IN_PROGRESS
    assert interview.completed_at is None
    assert interview.difficulty == Difficulty.BEGINNER
    assert [q.order_number for q in questions] == [1, 2, 3]
    assert [q.question_text for q in repository.list_questions(interview.id)] == [
        q.question_text for q in sample_questions
    ]


def test_failed_question_insert_rolls_back_interview(repository):
    # question_text is NOT NULL; the bypass below forces a database error mid-transaction
    bad = GeneratedQuestion.model_construct(question_text=None, question_type=None)

    with pytest.raises(StorageError):
        repository.create_interview_with_questions(_setup(), [bad])
    assert repository.list_interviews() == []


def test_list_interviews_filters_by_status(repository, sample_questions):
    first, _ = repository.create_interview_with_questions(_setup(title="One"), sample_questions)
    second, _ = repository.create_interview_with_questions(_setup(title="Two"), sample_questions)
    repository.update_interview_status(second.id, InterviewStatus.ABANDONED)

    assert {i.id for i in repository.list_interviews()} == {first.id, second.id}
    assert [i.id for i in repository.list_interviews(InterviewStatus.ABANDONED)] == [second.id]
    assert [i.id for i in repository.list_interviews(InterviewStatus.IN_PROGRESS)] == [first.id]


def test_update_status_of_missing_interview_returns_none(repository):
    assert repository.update_interview_status("missing", InterviewStatus.COMPLETED) is None


def test_feedback_upsert_keeps_one_row(repository, sample_questions):
    _, questions = repository.create_interview_with_questions(_setup(), sample_questions)
    response = repository.upsert_response(questions[0].id, ResponseType.TEXT, "answer", None)

    first = repository.upsert_feedback(
        response.id, FeedbackAnalysis(feedback_text="ok", strengths=["a"], confidence_score=0.4)
    )
    second = repository.upsert_feedback(
        response.id, FeedbackAnalysis(feedback_text="better", improvement_areas=["b"], confidence_score=0.8)
    )

    assert second.id == first.id
    assert second.feedback_text == "better"
    assert second.strengths == []
    assert second.improvement_areas == ["b"]
    assert repository.count_feedback(response.id) == 1


def test_answered_question_ids_and_results(repository, sample_questions):
    interview, questions = repository.create_interview_with_questions(_setup(), sample_questions)
    response = repository.upsert_response(questions[1].id, ResponseType.TEXT, "answer", None)
    repository.upsert_feedback(response.id, FeedbackAnalysis(feedback_text="ok", confidence_score=0.5))

    assert repository.answered_question_ids(interview.id) == {questions[1].id}

    results = repository.load_results(interview.id)
    assert [q.id for q in results] == [q.id for q in questions]
    assert [q.answered for q in results] == [False, True, False]
    assert results[1].responses[0].feedback[0].confidence_score == 0.5


def test_update_response_text(repository, sample_questions):
    _, questions = repository.create_interview_with_questions(_setup(), sample_questions)
    response = repository.upsert_response(questions[0].id, ResponseType.AUDIO, None, "http://m/a.webm")

    updated = repository.update_response_text(response.id, "transcribed")
    assert updated.response_text == "transcribed"
    assert updated.media_url == "http://m/a.webm"

    with pytest.raises(StorageError):
        repository.update_response_text("missing", "text")
