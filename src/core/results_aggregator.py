"""
Results Aggregator for PrepPilot

Generates the interview results view with:
- Overall score (mean feedback confidence as a percentage)
- Score band
- De-duplicated strengths and improvement areas
- Per-question breakdown

Read-only: nothing here touches storage.
"""

import logging

from src.models.interview import InterviewRecord
from src.models.report import (
    InterviewResults,
    QuestionWithResponses,
    ResultsSummary,
    ScoreBand,
)

logger = logging.getLogger(__name__)


class ResultsAggregator:
    """Aggregates persisted feedback into results."""

    def summarize(self, questions: list[QuestionWithResponses]) -> ResultsSummary:
        """
        Compute the overall score and merged feedback lists.

        Feedback without a confidence score is left out of the mean but
        still contributes strengths and improvement areas.
        """
        scores: list[float] = []
        strengths: list[str] = []
        improvement_areas: list[str] = []

        for question in questions:
            for response in question.responses:
                for feedback in response.feedback:
                    if feedback.confidence_score is not None:
                        scores.append(feedback.confidence_score)
                    strengths.extend(feedback.strengths)
                    improvement_areas.extend(feedback.improvement_areas)

        overall_score = 0.0
        if scores:
            overall_score = round(sum(scores) / len(scores) * 100, 2)

        return ResultsSummary(
            overall_score=overall_score,
            strengths=list(dict.fromkeys(strengths)),
            improvement_areas=list(dict.fromkeys(improvement_areas)),
            scored_feedback_count=len(scores),
        )

    @staticmethod
    def score_band(score: float) -> ScoreBand:
        if score >= 80:
            return ScoreBand.STRONG
        if score >= 60:
            return ScoreBand.FAIR
        return ScoreBand.NEEDS_WORK

    def generate(
        self,
        interview: InterviewRecord,
        questions: list[QuestionWithResponses],
    ) -> InterviewResults:
        """
        Build the complete results view.

        Args:
            interview: The interview the questions belong to
            questions: Questions in order, with responses and feedback

        Returns:
            InterviewResults
        """
        summary = self.summarize(questions)
        answered = sum(1 for q in questions if q.answered)

        logger.info(
            f"Results for interview {interview.id}: score {summary.overall_score} "
            f"over {summary.scored_feedback_count} scored answers, {answered}/{len(questions)} answered"
        )

        return InterviewResults(
            interview=interview,
            summary=summary,
            score_band=self.score_band(summary.overall_score),
            total_questions=len(questions),
            answered_questions=answered,
            questions=questions,
        )
