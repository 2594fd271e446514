"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work.

Each test points SPEAKFLOW_DATA_DIR at its own tmp_path, so nothing touches
the real ~/.speakflow.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import os
import shlex
import subprocess
import sys
from pathlib import Path

import pytest

from speakflow.domains.grammar import GRAMMAR_QUESTIONS

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


def run_cli_command(command: str, data_dir: Path, input: str = "", timeout: int = 30) -> tuple[int, str, str]:
    """
    Run a CLI command and return exit code, stdout, stderr.

    Args:
        command: The command to run (after 'python -m speakflow.cli')
        data_dir: Snapshot directory for this run
        input: Text fed to interactive prompts
        timeout: Maximum time to wait

    Returns:
        Tuple of (exit_code, stdout, stderr)
    """
    env = {
        **os.environ,
        "SPEAKFLOW_DATA_DIR": str(data_dir),
        "PYTHONIOENCODING": "utf-8",
        "COLUMNS": "200",
    }

    result = subprocess.run(
        [sys.executable, "-m", "speakflow.cli", *shlex.split(command)],
        cwd=PROJECT_ROOT,
        env=env,
        input=input,
        capture_output=True,
        text=True,
        encoding="utf-8",
        timeout=timeout,
    )

    return result.returncode, result.stdout, result.stderr


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "speakflow"


@pytest.fixture
def seeded(data_dir):
    """Data directory with every domain seeded."""
    for domain in ("vocabulary", "wordbank", "grammar"):
        code, _, stderr = run_cli_command(f"seed {domain}", data_dir)
        assert code == 0, f"Seed {domain} failed: {stderr}"
    return data_dir


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self, data_dir):
        """Main help should display without errors."""
        code, stdout, stderr = run_cli_command("--help", data_dir)

        assert code == 0, f"Help failed: {stderr}"
        assert "speakflow" in stdout.lower()
        assert "Commands" in stdout

    @pytest.mark.parametrize("command", ["seed", "due", "stats", "quiz", "review", "weak", "reset"])
    def test_command_help(self, data_dir, command):
        """Every command help should work."""
        code, stdout, stderr = run_cli_command(f"{command} --help", data_dir)

        assert code == 0, f"{command} help failed: {stderr}"


class TestCLISeed:
    def test_seed_adds_samples(self, data_dir):
        code, stdout, stderr = run_cli_command("seed wordbank", data_dir)

        assert code == 0, f"Seed failed: {stderr}"
        assert "Added 31 items" in stdout
        assert (data_dir / "wordbank.json").exists()

    def test_seed_twice_keeps_progress(self, seeded):
        code, stdout, _ = run_cli_command("seed wordbank", seeded)

        assert code == 0
        assert "Added 0 items" in stdout

    def test_unknown_domain(self, data_dir):
        code, stdout, _ = run_cli_command("seed kanji", data_dir)

        assert code == 2
        assert "Unknown domain" in stdout


class TestCLIStats:
    def test_stats_runs(self, seeded):
        code, stdout, stderr = run_cli_command("stats wordbank", seeded)

        assert code == 0, f"Stats failed with: {stderr}"
        assert "Total" in stdout
        assert "31" in stdout

    def test_due_lists_items(self, seeded):
        code, stdout, stderr = run_cli_command("due vocabulary", seeded)

        assert code == 0, f"Due failed with: {stderr}"
        assert "10 due" in stdout

    def test_due_on_empty_domain(self, data_dir):
        code, stdout, _ = run_cli_command("due grammar", data_dir)

        assert code == 0
        assert "Nothing due" in stdout


class TestCLIQuiz:
    def test_multiple_choice_quiz(self, seeded):
        code, stdout, stderr = run_cli_command("quiz wordbank --count 3", seeded, input="1\n1\n1\n")

        assert code == 0, f"Quiz failed with: {stderr}"
        assert "Question 3/3" in stdout
        assert "Quiz complete" in stdout

    def test_filtered_quiz(self, seeded):
        code, stdout, stderr = run_cli_command(
            "quiz wordbank --category travel --count 2", seeded, input="2\n2\n"
        )

        assert code == 0, f"Quiz failed with: {stderr}"
        assert "Quiz complete" in stdout

    def test_grammar_quiz_takes_typed_answers(self, seeded):
        code, stdout, stderr = run_cli_command(
            "quiz grammar --category tense --count 2", seeded, input="an\nan\n"
        )

        assert code == 0, f"Quiz failed with: {stderr}"
        assert "Quiz complete" in stdout
        assert (seeded / "grammar-progress.json").exists()

    def test_wrong_grammar_answer_shows_explanation(self, seeded):
        code, stdout, stderr = run_cli_command(
            "quiz grammar --category tense --count 2", seeded, input="zzz\nzzz\n"
        )

        assert code == 0, f"Quiz failed with: {stderr}"
        shown = " ".join(stdout.split())
        explanations = [q.explanation for q in GRAMMAR_QUESTIONS if q.category == "tense"]
        assert sum(" ".join(e.split()) in shown for e in explanations) == 2

    def test_grammar_multiple_choice_takes_numbers(self, seeded):
        code, stdout, stderr = run_cli_command(
            "quiz grammar --level intermediate --count 6", seeded, input="1\n" * 6
        )

        assert code == 0, f"Quiz failed with: {stderr}"
        assert "Which is more polite?" in stdout
        assert "Could you help me?" in stdout
        assert "Quiz complete" in stdout

    def test_quiz_without_items(self, data_dir):
        code, stdout, _ = run_cli_command("quiz wordbank", data_dir)

        assert code == 1
        assert "Not enough items" in stdout

    def test_quiz_filter_too_narrow(self, seeded):
        code, stdout, _ = run_cli_command("quiz wordbank --level C1", seeded)

        assert code == 1
        assert "level=C1" in stdout


class TestCLIReview:
    def test_flashcard_review(self, seeded):
        code, stdout, stderr = run_cli_command("review vocabulary --limit 2", seeded, input="\n3\n\n1\n")

        assert code == 0, f"Review failed with: {stderr}"
        assert "Review complete" in stdout
        assert "Remembered: 1" in stdout

    def test_review_nothing_due(self, data_dir):
        code, stdout, _ = run_cli_command("review vocabulary", data_dir)

        assert code == 0
        assert "Nothing due" in stdout


class TestCLIWeakAndReset:
    def test_weak_without_history(self, data_dir):
        code, stdout, _ = run_cli_command("weak", data_dir)

        assert code == 0
        assert "No weak grammar topics" in stdout

    def test_weak_after_wrong_answers(self, seeded):
        run_cli_command("quiz grammar --category tense --count 2", seeded, input="zzz\nzzz\n")

        code, stdout, stderr = run_cli_command("weak", seeded)

        assert code == 0, f"Weak failed with: {stderr}"
        assert "Weak grammar topics" in stdout

    def test_reset_with_yes(self, seeded):
        code, stdout, _ = run_cli_command("reset wordbank --yes", seeded)

        assert code == 0
        assert "Reset Word Bank" in stdout
        assert not (seeded / "wordbank.json").exists()

    def test_reset_declined(self, seeded):
        code, _, _ = run_cli_command("reset wordbank", seeded, input="n\n")

        assert code == 1
        assert (seeded / "wordbank.json").exists()
