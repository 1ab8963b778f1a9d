"""
Quiz Manager
============

Question sequencing and scoring for the cybersecurity quiz.
"""

import logging
from typing import List, Optional
from dataclasses import dataclass

from ..content.data_loader import QuizQuestion

logger = logging.getLogger(__name__)

MIN_ANSWER = 1
MAX_ANSWER = 4
EXCELLENT_SCORE = 8
GOOD_SCORE = 5


@dataclass
class QuizAnswerResult:
    """Outcome of submitting one answer."""
    valid: bool
    message: str
    correct: bool = False
    complete: bool = False
    score: int = 0
    total: int = 0


class QuizManager:
    """Runs one quiz over a fixed question bank."""

    def __init__(self, questions: List[QuizQuestion]):
        self.questions = list(questions)
        self.is_active = False
        self.question_index = 0
        self.score = 0

    def start(self):
        """Start a new quiz from the first question."""
        self.is_active = True
        self.question_index = 0
        self.score = 0
        logger.debug(f"Quiz started with {len(self.questions)} questions")

    def stop(self):
        self.is_active = False
        self.question_index = 0
        self.score = 0

    @property
    def total(self) -> int:
        return len(self.questions)

    def current_prompt(self, user_name: str) -> Optional[str]:
        """Format the current question, or None when none remain."""
        if self.question_index >= self.total:
            return None

        question = self.questions[self.question_index]
        prompt = f"{user_name}, here's question {self.question_index + 1} of {self.total}:\n{question.question}\n"
        for i, option in enumerate(question.options, start=1):
            prompt += f"{i}. {option}\n"
        prompt += f"Please answer with the number ({MIN_ANSWER}-{MAX_ANSWER}) of your choice."
        return prompt

    def submit_answer(self, text: str, user_name: str) -> QuizAnswerResult:
        """Score an answer and advance to the next question."""
        try:
            answer = int(text.strip())
        except ValueError:
            answer = None

        if answer is None or not MIN_ANSWER <= answer <= MAX_ANSWER or self.question_index >= self.total:
            return QuizAnswerResult(
                valid=False,
                message=f"Please enter a number between {MIN_ANSWER} and {MAX_ANSWER}, {user_name}.",
                score=self.score,
                total=self.total
            )

        question = self.questions[self.question_index]
        correct = answer - 1 == question.correct_answer_index
        if correct:
            self.score += 1
            message = f"Correct, {user_name}! {question.explanation}"
        else:
            right = question.options[question.correct_answer_index]
            message = (f"Sorry, {user_name}, that's incorrect. The correct answer was: {right}. "
                       f"{question.explanation}")

        self.question_index += 1
        message += f"\nYour current score: {self.score}/{self.question_index}."

        return QuizAnswerResult(
            valid=True,
            message=message,
            correct=correct,
            complete=self.question_index >= self.total,
            score=self.score,
            total=self.total
        )

    def final_score(self, user_name: str) -> str:
        """End the quiz and report the final score band."""
        self.is_active = False
        message = f"{user_name}, quiz complete! Your final score: {self.score}/{self.total}.\n"

        if self.score >= EXCELLENT_SCORE:
            message += "Excellent work! You're a cybersecurity pro!"
        elif self.score >= GOOD_SCORE:
            message += "Good job! Keep learning to boost your cybersecurity skills!"
        else:
            message += "Nice try! Review topics like passwords, phishing, and privacy to improve your score next time!"

        logger.info("Quiz completed", extra={"score": self.score, "total": self.total})
        return message
