# tests/test_response_capture.py
import asyncio
import time

import pytest

from conftest import MEDIA_BASE_URL, FailingS3, FakeS3
from src.core.object_storage import ObjectStorage
from src.core.response_capture import ResponseCapture
from src.exceptions import ResponseValidationError, StorageError
from src.models.evaluation import ResponseSubmission, ResponseType
from src.models.interview import InterviewSetup


@pytest.fixture
def seeded(repository, sample_questions):
    interview, questions = repository.create_interview_with_questions(
        InterviewSetup(title="Practice", job_role="Software Engineer"), sample_questions
    )
    return interview, questions


def _submit(capture, interview, question, **kwargs):
    return asyncio.run(capture.submit(interview.id, question.id, ResponseSubmission(**kwargs)))


def test_text_answer_is_stored_literally(capture, seeded, fake_s3):
    interview, questions = seeded
    response = _submit(capture, interview, questions[0], response_type=ResponseType.TEXT, response_text="  My answer ")

    assert response.response_text == "  My answer "
    assert response.media_url is None
    assert fake_s3.calls == 0


@pytest.mark.parametrize("text", [None, "", "   \n\t"])
def test_blank_text_is_rejected_before_storage(capture, seeded, repository, text):
    interview, questions = seeded
    with pytest.raises(ResponseValidationError):
        _submit(capture, interview, questions[0], response_type=ResponseType.TEXT, response_text=text)
    assert repository.get_response_for_question(questions[0].id) is None


@pytest.mark.parametrize("response_type", [ResponseType.AUDIO, ResponseType.VIDEO])
def test_empty_recording_is_rejected_before_upload(capture, seeded, fake_s3, response_type):
    interview, questions = seeded
    with pytest.raises(ResponseValidationError):
        _submit(capture, interview, questions[0], response_type=response_type, media=b"")
    assert fake_s3.calls == 0


def test_oversized_recording_is_rejected(capture, seeded, fake_s3, settings):
    interview, questions = seeded
    with pytest.raises(ResponseValidationError):
        _submit(
            capture, interview, questions[0],
            response_type=ResponseType.AUDIO,
            media=b"x" * (settings.max_upload_bytes + 1),
        )
    assert fake_s3.calls == 0


def test_recording_is_uploaded_and_only_url_stored(capture, seeded, fake_s3):
    interview, questions = seeded
    question = questions[1]
    response = _submit(capture, interview, question, response_type=ResponseType.VIDEO, media=b"video-bytes")

    key = f"interviews/{interview.id}/question_{question.id}_video.webm"
    assert fake_s3.objects[("test-bucket", key)] == (b"video-bytes", "video/webm")
    assert response.media_url == f"{MEDIA_BASE_URL}/{key}"
    assert response.response_text is None


def test_second_answer_overwrites_first(capture, seeded, engine):
    interview, questions = seeded
    first = _submit(capture, interview, questions[0], response_type=ResponseType.TEXT, response_text="first")
    second = _submit(capture, interview, questions[0], response_type=ResponseType.AUDIO, media=b"audio")

    assert second.id == first.id
    assert second.response_type == ResponseType.AUDIO
    assert second.response_text is None
    assert second.media_url.endswith("_audio.webm")

    with engine.connect() as conn:
        count = conn.exec_driver_sql(
            "SELECT COUNT(*) FROM responses WHERE question_id = ?", (questions[0].id,)
        ).scalar()
    assert count == 1


def test_upload_failure_raises_storage_error(repository, seeded, settings):
    interview, questions = seeded
    capture = ResponseCapture(repository, ObjectStorage(client=FailingS3(), settings=settings), settings)

    with pytest.raises(StorageError):
        _submit(capture, interview, questions[0], response_type=ResponseType.AUDIO, media=b"audio")
    assert repository.get_response_for_question(questions[0].id) is None


def test_public_url_defaults_to_endpoint_and_bucket(fake_s3):
    from src.config.settings import Settings

    storage = ObjectStorage(
        client=fake_s3,
        settings=Settings(s3_endpoint="http://minio:9000/", s3_bucket="answers", s3_public_base_url=""),
    )
    assert storage.public_url("a/b.webm") == "http://minio:9000/answers/a/b.webm"


def test_recording_key_follows_content_type(capture, seeded, fake_s3):
    interview, questions = seeded
    question = questions[2]
    response = _submit(
        capture, interview, question,
        response_type=ResponseType.AUDIO,
        media=b"m4a-bytes",
        content_type="audio/mp4",
    )

    key = f"interviews/{interview.id}/question_{question.id}_audio.mp4"
    assert fake_s3.objects[("test-bucket", key)] == (b"m4a-bytes", "audio/mp4")
    assert response.media_url == f"{MEDIA_BASE_URL}/{key}"


@pytest.mark.parametrize(
    "content_type, extension",
    [
        ("audio/webm;codecs=opus", "webm"),
        ("audio/mpeg", "mpeg"),
        ("video/x-matroska", "matroska"),
        ("video/quicktime", "quicktime"),
        ("", "webm"),
        (None, "webm"),
        ("garbage", "webm"),
    ],
)
def test_media_extension(content_type, extension):
    assert ObjectStorage.media_extension(content_type) == extension


class SlowS3(FakeS3):
    def put_object(self, Bucket, Key, Body, ContentType=None, **kwargs):
        time.sleep(0.3)
        super().put_object(Bucket, Key, Body, ContentType, **kwargs)


def test_upload_does_not_block_the_event_loop(repository, seeded, settings):
    interview, questions = seeded
    s3 = SlowS3()
    capture = ResponseCapture(repository, ObjectStorage(client=s3, settings=settings), settings)

    async def scenario():
        gaps = []
        done = asyncio.Event()

        async def ticker():
            last = time.monotonic()
            while not done.is_set():
                await asyncio.sleep(0.02)
                now = time.monotonic()
                gaps.append(now - last)
                last = now

        tick = asyncio.create_task(ticker())
        await asyncio.sleep(0)
        response = await capture.submit(
            interview.id,
            questions[0].id,
            ResponseSubmission(response_type=ResponseType.AUDIO, media=b"audio"),
        )
        done.set()
        await tick
        return response, gaps

    response, gaps = asyncio.run(scenario())

    assert response.media_url.endswith("_audio.webm")
    assert s3.calls == 1
    assert len(gaps) >= 5
    assert max(gaps) < 0.2
