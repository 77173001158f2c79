import uuid

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship
from sqlalchemy.types import Enum as SAEnum

from src.db.session import Base
from src.models.evaluation import ResponseType
from src.models.interview import Difficulty, InterviewStatus
from src.models.question import QuestionType


def _uuid() -> str:
    return str(uuid.uuid4())


def _enum(enum_cls) -> SAEnum:
    # Store the lowercase values, not the member names
    return SAEnum(
        enum_cls,
        native_enum=False,
        values_callable=lambda members: [m.value for m in members],
        length=32,
    )


class Interview(Base):
    __tablename__ = "interviews"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(200), nullable=False)
    job_role = Column(String(200), nullable=False)
    industry = Column(String(200), nullable=True)
    difficulty = Column(_enum(Difficulty), nullable=True)
    status = Column(
        _enum(InterviewStatus),
        nullable=False,
        default=InterviewStatus.IN_PROGRESS,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    questions = relationship(
        "Question",
        back_populates="interview",
        cascade="all, delete-orphan",
        order_by="Question.order_number",
    )


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (
        UniqueConstraint("interview_id", "order_number", name="uq_questions_interview_order"),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    interview_id = Column(
        String(36),
        ForeignKey("interviews.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question_text = Column(Text, nullable=False)
    question_type = Column(_enum(QuestionType), nullable=True)
    order_number = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    interview = relationship("Interview", back_populates="questions")
    responses = relationship("Response", back_populates="question", cascade="all, delete-orphan")


class Response(Base):
    __tablename__ = "responses"

    id = Column(String(36), primary_key=True, default=_uuid)
    # Latest answer wins: one response per question
    question_id = Column(
        String(36),
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    response_type = Column(_enum(ResponseType), nullable=False)
    response_text = Column(Text, nullable=True)
    media_url = Column(String(1024), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    question = relationship("Question", back_populates="responses")
    feedback = relationship("Feedback", back_populates="response", cascade="all, delete-orphan")


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=_uuid)
    response_id = Column(
        String(36),
        ForeignKey("responses.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    feedback_text = Column(Text, nullable=False)
    improvement_areas = Column(JSON, nullable=True, default=list)
    strengths = Column(JSON, nullable=True, default=list)
    confidence_score = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    response = relationship("Response", back_populates="feedback")
