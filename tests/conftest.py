# tests/conftest.py
import os
import pathlib
import sys

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

# -------------------------------------------------------------------------------------------------
# Path & environment setup (must happen BEFORE importing the app)
# -------------------------------------------------------------------------------------------------

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:3000")
os.environ.setdefault("S3_BUCKET", "test-bucket")
os.environ.setdefault("S3_REGION", "us-east-1")
os.environ.setdefault("S3_ENDPOINT", "http://127.0.0.1:9000")
os.environ.setdefault("USE_GENERATION_BACKEND", "false")
os.environ.setdefault("GOOGLE_AI_API_KEY", "")

# -------------------------------------------------------------------------------------------------
# Import app & modules AFTER env vars
# -------------------------------------------------------------------------------------------------
from main import app
from src.api import dependencies as deps
from src.config.settings import Settings
from src.core.feedback_synthesizer import FeedbackSynthesizer
from src.core.interview_orchestrator import InterviewOrchestrator
from src.core.object_storage import ObjectStorage
from src.core.question_generator import QuestionGenerator
from src.core.response_capture import ResponseCapture
from src.core.results_aggregator import ResultsAggregator
from src.db.repository import InterviewRepository
from src.db.session import create_db_engine, create_session_factory, init_db
from src.models.evaluation import FeedbackAnalysis
from src.models.question import GeneratedQuestion, QuestionType

MEDIA_BASE_URL = "http://media.test/test-bucket"


# -------------------------------------------------------------------------------------------------
# ---- Fake S3 clients (no network) ----
class FakeS3:
    def __init__(self):
        self.objects = {}
        self.calls = 0

    def put_object(self, Bucket, Key, Body, ContentType=None, **kwargs):
        self.calls += 1
        self.objects[(Bucket, Key)] = (bytes(Body), ContentType)


class FailingS3:
    def __init__(self):
        self.calls = 0

    def put_object(self, Bucket, Key, Body, ContentType=None, **kwargs):
        self.calls += 1
        raise ClientError(
            {"Error": {"Code": "InternalError", "Message": "storage unavailable"}},
            "PutObject",
        )


# -------------------------------------------------------------------------------------------------
# ---- Fake generation backend ----
class FakeBackend:
    """Records calls and answers from canned values."""

    def __init__(self, questions=None, feedback=None, transcript="Transcribed answer"):
        self.questions = questions
        self.feedback = feedback or FeedbackAnalysis(
            feedback_text="Clear and specific.",
            strengths=["Specific examples"],
            improvement_areas=["Quantify impact"],
            confidence_score=0.9,
        )
        self.transcript = transcript
        self.analyze_calls = []
        self.transcribe_calls = []

    async def generate_questions(self, job_role, industry, difficulty, count):
        if self.questions is None:
            raise RuntimeError("no questions configured")
        return self.questions

    async def analyze_response(self, question, response, response_type, job_role):
        self.analyze_calls.append((question, response, response_type, job_role))
        return self.feedback

    async def transcribe_media(self, media_url, media_type):
        self.transcribe_calls.append((media_url, media_type))
        return self.transcript


class BrokenBackend:
    async def generate_questions(self, **kwargs):
        raise RuntimeError("backend down")

    async def analyze_response(self, **kwargs):
        raise RuntimeError("backend down")

    async def transcribe_media(self, **kwargs):
        raise RuntimeError("backend down")


# -------------------------------------------------------------------------------------------------
# Storage fixtures
# -------------------------------------------------------------------------------------------------
@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        s3_bucket="test-bucket",
        s3_public_base_url=MEDIA_BASE_URL,
        max_upload_bytes=1024,
        use_generation_backend=False,
        google_ai_api_key="",
        generation_timeout_seconds=1.0,
        default_question_count=7,
    )


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    eng = create_db_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def repository(engine):
    return InterviewRepository(create_session_factory(engine))


@pytest.fixture
def fake_s3():
    return FakeS3()


@pytest.fixture
def storage(fake_s3, settings):
    return ObjectStorage(client=fake_s3, settings=settings)


@pytest.fixture
def capture(repository, storage, settings):
    return ResponseCapture(repository, storage, settings)


@pytest.fixture
def sample_questions():
    return [
        GeneratedQuestion(question_text="Tell me about yourself.", question_type=QuestionType.GENERAL),
        GeneratedQuestion(question_text="Explain a hash map.", question_type=QuestionType.TECHNICAL),
        GeneratedQuestion(question_text="Describe a conflict you resolved.", question_type=QuestionType.BEHAVIORAL),
    ]


# -------------------------------------------------------------------------------------------------
# Orchestrator
# -------------------------------------------------------------------------------------------------
@pytest.fixture
def make_orchestrator(repository, fake_s3, settings):
    """Build an orchestrator over the test database with optional swaps."""

    def _make(backend=None, s3_client=None, question_backend=None, question_count=None):
        orchestrator_settings = settings
        if question_count is not None:
            orchestrator_settings = settings.model_copy(update={"default_question_count": question_count})
        storage = ObjectStorage(client=s3_client or fake_s3, settings=settings)
        return InterviewOrchestrator(
            repository=repository,
            question_generator=QuestionGenerator(question_backend, timeout_seconds=1.0),
            response_capture=ResponseCapture(repository, storage, settings),
            feedback_synthesizer=FeedbackSynthesizer(backend, timeout_seconds=1.0),
            results_aggregator=ResultsAggregator(),
            settings=orchestrator_settings,
        )

    return _make


@pytest.fixture
def orchestrator(make_orchestrator):
    return make_orchestrator()


# -------------------------------------------------------------------------------------------------
# TestClient
# -------------------------------------------------------------------------------------------------
@pytest.fixture
def client(orchestrator):
    app.dependency_overrides[deps.get_orchestrator] = lambda: orchestrator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(deps.get_orchestrator, None)
