"""
Unit Tests for Session Managers
===============================

Quiz scoring, task parsing and reminders, and the bounded activity log.
"""

from datetime import datetime

import pytest

from cyberchat.content import QuizQuestion
from cyberchat.managers import ActivityLogger, QuizManager, TaskManager

NOW = datetime(2025, 6, 1, 8, 30)


def make_questions(count):
    return [
        QuizQuestion(question=f"Question {i}?", options=["a", "b", "c", "d"],
                     correct_answer_index=0, explanation=f"Because {i}.")
        for i in range(count)
    ]


@pytest.fixture
def tasks():
    return TaskManager(clock=lambda: NOW)


class TestQuizManager:
    """Test quiz prompts, scoring and score bands."""

    def test_prompt_format(self):
        quiz = QuizManager(make_questions(2))
        quiz.start()

        assert quiz.current_prompt("Ann") == (
            "Ann, here's question 1 of 2:\nQuestion 0?\n1. a\n2. b\n3. c\n4. d\n"
            "Please answer with the number (1-4) of your choice."
        )

    @pytest.mark.parametrize("answer", ["0", "5", "two", ""])
    def test_invalid_answers(self, answer):
        quiz = QuizManager(make_questions(2))
        quiz.start()
        result = quiz.submit_answer(answer, "Ann")

        assert not result.valid
        assert quiz.question_index == 0

    def test_wrong_answer_names_correct_option(self):
        quiz = QuizManager(make_questions(2))
        quiz.start()
        result = quiz.submit_answer("2", "Ann")

        assert result.valid and not result.correct
        assert result.message == ("Sorry, Ann, that's incorrect. The correct answer was: a. Because 0."
                                  "\nYour current score: 0/1.")

    def test_completion_and_bands(self):
        quiz = QuizManager(make_questions(10))
        quiz.start()
        for i in range(10):
            result = quiz.submit_answer("1" if i < 6 else "2", "Ann")

        assert result.complete
        final = quiz.final_score("Ann")
        assert final.startswith("Ann, quiz complete! Your final score: 6/10.\n")
        assert "Good job!" in final
        assert not quiz.is_active
        assert quiz.current_prompt("Ann") is None

    def test_low_score_band(self):
        quiz = QuizManager(make_questions(3))
        quiz.start()
        for _ in range(3):
            quiz.submit_answer("4", "Ann")
        assert "Nice try!" in quiz.final_score("Ann")


class TestTaskManager:
    """Test task creation, reminders and index operations."""

    def test_remind_me_to(self, tasks):
        result = tasks.add("Remind me to rotate keys")

        assert result.success
        assert result.title == "rotate keys"
        assert tasks.tasks[0].description == "rotate keys"
        assert tasks.awaiting_reminder

    def test_title_and_description(self, tasks):
        result = tasks.add("add task - Update password: change my email password")

        assert result.title == "Update password"
        assert tasks.tasks[0].description == "change my email password"

    def test_set_reminder_phrase(self, tasks):
        result = tasks.add("set a reminder to call the bank")
        assert result.title == "call the bank"

    def test_missing_description(self, tasks):
        result = tasks.add("add task -")

        assert not result.success
        assert tasks.tasks == []

    @pytest.mark.parametrize("timeframe,expected", [
        ("in 3 days", datetime(2025, 6, 4, 8, 30)),
        ("tomorrow", datetime(2025, 6, 2, 8, 30)),
        ("in a while", datetime(2025, 6, 2, 8, 30)),
        ("2025-06-30 12:00", datetime(2025, 6, 30, 12, 0)),
        ("2025-07-01", datetime(2025, 7, 1)),
        ("someday", None),
        ("in 5000000 days", None),
        ("in 99999999999 days", None),
    ])
    def test_parse_timeframe(self, tasks, timeframe, expected):
        assert tasks.parse_timeframe(timeframe) == expected

    def test_reminder_with_date(self, tasks):
        tasks.add("remind me to renew certificate")
        reply = tasks.handle_reminder_response("yes 2025-06-30 12:00", "Ann")

        assert reply.success and reply.resolved
        assert reply.message == "Got it! I'll remind you on 2025-06-30 12:00 for 'renew certificate', Ann."
        assert not tasks.awaiting_reminder

    def test_reminder_without_pending_task(self, tasks):
        reply = tasks.handle_reminder_response("yes tomorrow", "Ann")

        assert not reply.success
        assert reply.resolved

    def test_list_format(self, tasks):
        tasks.add("add task - Backup: weekly")
        tasks.handle_reminder_response("yes tomorrow", "Ann")

        assert tasks.list("Ann") == (
            "Your tasks:\n"
            "1. Backup - weekly [Pending] (Reminder: 2025-06-02 08:30)\n"
            "   Options: delete task -1 or complete task -1\n"
        )

    def test_empty_list(self, tasks):
        assert tasks.list("Ann").startswith("Ann, you have no tasks yet.")

    def test_delete_shifts_pending_index(self, tasks):
        tasks.add("task: first")
        tasks.add("task: second")

        result = tasks.delete(1, "Ann")
        assert result.success and result.title == "first"

        reply = tasks.handle_reminder_response("no", "Ann")
        assert "'second'" in reply.message

    def test_delete_pending_task_clears_it(self, tasks):
        tasks.add("task: only")
        tasks.delete(1, "Ann")
        assert not tasks.awaiting_reminder

    def test_invalid_indices(self, tasks):
        assert not tasks.delete(1, "Ann").success
        assert not tasks.complete(0, "Ann").success

    @pytest.mark.parametrize("text,prefix,expected", [
        ("delete task -2", "delete task -", 2),
        ("delete task 3", "delete task", 3),
        ("complete task - 4", "complete task", 4),
        ("delete task x", "delete task", None),
        ("view tasks", "delete task", None),
    ])
    def test_parse_task_index(self, text, prefix, expected):
        assert TaskManager.parse_task_index(text, prefix) == expected


class TestActivityLogger:
    """Test bounded logging and rendering."""

    def test_render(self):
        log = ActivityLogger(clock=lambda: NOW)
        log.append("start quiz", "Started a quiz")

        assert log.render("Ann") == "Activity Log:\n2025-06-01 08:30:00: start quiz - Started a quiz\n"

    def test_empty(self):
        assert ActivityLogger().render("Ann") == "Ann, no activities logged yet."

    def test_bounded(self):
        log = ActivityLogger(max_entries=2, clock=lambda: NOW)
        for i in range(4):
            log.append(f"input {i}", "action")

        assert len(log) == 2
        assert [e.user_input for e in log.recent()] == ["input 2", "input 3"]

        log.clear()
        assert len(log) == 0
