"""
Response Capture for PrepPilot

Validates an answer, uploads recordings to object storage and upserts the
response row for the question. Latest answer wins.
"""

import logging

from src.config.settings import Settings, get_settings
from src.core.object_storage import ObjectStorage
from src.db.repository import InterviewRepository
from src.exceptions import ResponseValidationError
from src.models.evaluation import ResponseRecord, ResponseSubmission, ResponseType

logger = logging.getLogger(__name__)


class ResponseCapture:
    """Persists answers of any modality."""

    def __init__(
        self,
        repository: InterviewRepository,
        storage: ObjectStorage,
        settings: Settings | None = None,
    ):
        self.repository = repository
        self.storage = storage
        self.settings = settings or get_settings()

    def validate(self, submission: ResponseSubmission) -> None:
        """
        Check a submission before anything is stored.

        Raises:
            ResponseValidationError: Blank text, empty or oversized media
        """
        if submission.response_type == ResponseType.TEXT:
            if submission.response_text is None or not submission.response_text.strip():
                raise ResponseValidationError("A text answer cannot be empty")
            return

        if not submission.media:
            raise ResponseValidationError(
                f"An {submission.response_type.value} answer needs a non-empty recording"
            )
        if len(submission.media) > self.settings.max_upload_bytes:
            raise ResponseValidationError(
                f"Recording is {len(submission.media)} bytes, "
                f"the limit is {self.settings.max_upload_bytes}"
            )

    async def submit(
        self,
        interview_id: str,
        question_id: str,
        submission: ResponseSubmission,
    ) -> ResponseRecord:
        """
        Store an answer for a question.

        Recordings are uploaded first and only their URL is kept. A second
        answer to the same question overwrites the first in place.

        Raises:
            ResponseValidationError: Invalid submission (nothing stored)
            StorageError: Upload or database write failed
        """
        self.validate(submission)

        response_type = submission.response_type
        media_url = None
        response_text = submission.response_text

        if response_type.is_media:
            content_type = submission.content_type or response_type.default_content_type
            key = self.storage.media_key(
                interview_id, question_id, response_type.value, content_type
            )
            media_url = await self.storage.upload(key, submission.media, content_type)
            if response_text is not None and not response_text.strip():
                response_text = None

        response = self.repository.upsert_response(
            question_id=question_id,
            response_type=response_type,
            response_text=response_text,
            media_url=media_url,
        )
        logger.info(f"Captured {response_type.value} response {response.id} for question {question_id}")
        return response
