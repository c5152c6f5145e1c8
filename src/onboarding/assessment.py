"""
Emotional Assessment - Response Aggregator.

Records one 1-5 rating per fixed question. Questions can be skipped, which
leaves the slot unset but still counts the question as visited.

No scoring happens here: the ratings are handed off as-is.
"""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


MIN_RATING = 1
MAX_RATING = 5


class InvalidResponseError(ValueError):
    """Question index or rating outside the allowed range."""


# =============================================================================
# Question Bank
# =============================================================================

@dataclass(frozen=True)
class AssessmentQuestion:
    """One fixed wellness question. Labels map ratings 1..5 in order."""
    key: str
    question: str
    subtitle: str | None = None
    rating_labels: tuple[str, ...] = ("1", "2", "3", "4", "5")

    def label_for(self, rating: int) -> str:
        if not MIN_RATING <= rating <= MAX_RATING:
            raise InvalidResponseError(f"Rating must be {MIN_RATING}-{MAX_RATING}, got {rating}")
        return self.rating_labels[rating - 1]


ASSESSMENT_QUESTIONS: tuple[AssessmentQuestion, ...] = (
    AssessmentQuestion(
        key="stress",
        question="How often does stress control your life?",
        subtitle="There's no right or wrong answer",
        rating_labels=("Very Low", "Low", "Moderate", "High", "Very High"),
    ),
    AssessmentQuestion(
        key="sleep",
        question="How would you rate your sleep quality?",
        subtitle="Sleep has a big effect on how you feel day to day",
        rating_labels=("Very Poor", "Poor", "Fair", "Good", "Excellent"),
    ),
    AssessmentQuestion(
        key="mood",
        question="How has your mood been affecting your relationships?",
        subtitle="Think about the last couple of weeks",
        rating_labels=("Very Sad", "Sad", "Neutral", "Happy", "Very Happy"),
    ),
    AssessmentQuestion(
        key="energy",
        question="Are low energy levels holding you back from your goals?",
        subtitle=None,
        rating_labels=("Exhausted", "Tired", "Neutral", "Energetic", "Very Energetic"),
    ),
    AssessmentQuestion(
        key="life_satisfaction",
        question="How satisfied are you with your life currently?",
        subtitle=None,
        rating_labels=("Very Unsatisfied", "Unsatisfied", "Neutral", "Satisfied", "Very Satisfied"),
    ),
)

QUESTION_COUNT = len(ASSESSMENT_QUESTIONS)


# =============================================================================
# Responses
# =============================================================================

@dataclass
class AssessmentResponses:
    """
    Per-question ratings plus which questions the user has been through.

    `responses[i]` is None until rated. `visited[i]` becomes True once the
    question is rated or skipped. `current_question` is the pointer the
    presentation layer shows; it stops at the last question.
    """
    responses: list[int | None] = field(default_factory=lambda: [None] * QUESTION_COUNT)
    visited: list[bool] = field(default_factory=lambda: [False] * QUESTION_COUNT)
    current_question: int = 0

    def __post_init__(self):
        if len(self.responses) != QUESTION_COUNT or len(self.visited) != QUESTION_COUNT:
            raise InvalidResponseError(
                f"Expected {QUESTION_COUNT} slots, got {len(self.responses)} responses "
                f"and {len(self.visited)} visited flags"
            )
        for i, rating in enumerate(self.responses):
            if rating is not None:
                _check_rating(rating)
                self.visited[i] = True
        _check_index(self.current_question)

    def set_response(self, question_index: int, rating: int) -> None:
        """Overwrite the rating for one question."""
        _check_index(question_index)
        _check_rating(rating)
        self.responses[question_index] = rating
        self.visited[question_index] = True

    def answer(self, rating: int) -> None:
        """Rate the current question and move to the next one."""
        self.set_response(self.current_question, rating)
        self._move_pointer()

    def skip(self, question_index: int | None = None) -> None:
        """
        Skip a question (the current one by default).

        The slot is left unset, the question counts as visited, and the
        pointer moves past it.
        """
        index = self.current_question if question_index is None else question_index
        _check_index(index)
        self.responses[index] = None
        self.visited[index] = True
        logger.debug(f"Assessment question {index} skipped")
        if index == self.current_question:
            self._move_pointer()

    def is_question_answered(self, question_index: int) -> bool:
        _check_index(question_index)
        return self.responses[question_index] is not None

    def all_answered(self) -> bool:
        """True when every question has a rating in 1..5."""
        return all(r is not None and MIN_RATING <= r <= MAX_RATING for r in self.responses)

    def all_visited(self) -> bool:
        return all(self.visited)

    @property
    def is_finished(self) -> bool:
        """Every question was either rated or skipped."""
        return self.all_visited()

    def skipped_questions(self) -> list[int]:
        return [
            i for i, (rating, visited) in enumerate(zip(self.responses, self.visited))
            if visited and rating is None
        ]

    def unanswered_questions(self) -> list[int]:
        """Questions neither rated nor skipped."""
        return [i for i, visited in enumerate(self.visited) if not visited]

    def _move_pointer(self) -> None:
        if self.current_question < QUESTION_COUNT - 1:
            self.current_question += 1

    def to_dict(self) -> dict:
        return {
            "responses": list(self.responses),
            "visited": list(self.visited),
            "current_question": self.current_question,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AssessmentResponses":
        return cls(
            responses=list(data.get("responses", [None] * QUESTION_COUNT)),
            visited=list(data.get("visited", [False] * QUESTION_COUNT)),
            current_question=data.get("current_question", 0),
        )


def _check_index(question_index: int) -> None:
    if not 0 <= question_index < QUESTION_COUNT:
        raise InvalidResponseError(
            f"Question index must be 0-{QUESTION_COUNT - 1}, got {question_index}"
        )


def _check_rating(rating: int) -> None:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidResponseError(f"Rating must be an integer, got {rating!r}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidResponseError(f"Rating must be {MIN_RATING}-{MAX_RATING}, got {rating}")
