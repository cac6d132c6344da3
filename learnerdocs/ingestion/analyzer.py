"""Best-effort structured analysis of test-like documents."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from ..config import ProcessingConfig
from .classifier import should_analyze
from .models import Analysis, QuestionResult

logger = logging.getLogger(__name__)

QUESTION_PATTERNS = (
    re.compile(r"question\s*\d+", re.IGNORECASE),
    re.compile(r"\d+\.\s"),
    re.compile(r"what\s+is", re.IGNORECASE),
    re.compile(r"how\s+many", re.IGNORECASE),
    re.compile(r"if\s+you", re.IGNORECASE),
)
ARITHMETIC_EXPRESSION = re.compile(r"\d+\s*[+\-×÷]\s*\d+")
ANSWER_LOOKAHEAD = 4
CHECK_MARK = "✓"

_LABEL_PREFIX = re.compile(r"^(?:student|your|correct)?\s*(?:answer)?\s*[:\-]?\s*", re.IGNORECASE)

# (area, markers, recommendation), in report order.
PROBLEM_AREAS: Tuple[Tuple[str, Tuple[str, ...], str], ...] = (
    ("addition", ("+", "add", "sum"), "Practice basic addition with regrouping/carrying"),
    ("subtraction", ("-", "subtract", "minus"), "Work on subtraction with borrowing"),
    (
        "multiplication",
        ("×", "*", "multiply", "times"),
        "Review multiplication tables and word problems",
    ),
    ("division", ("÷", "/", "divide"), "Practice division facts and remainders"),
    ("fractions", ("fraction", "½", "¼"), "Work on fraction basics and equivalents"),
)

SUBJECT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "math": (
        "math",
        "mathematics",
        "addition",
        "subtraction",
        "multiply",
        "multiplication",
        "division",
        "fraction",
        "equation",
        "sum",
    ),
    "science": ("science", "planet", "experiment", "biology", "chemistry", "physics", "energy"),
    "reading": ("reading", "story", "vocabulary", "spelling", "grammar", "comprehension"),
    "history": ("history", "century", "empire", "president", "ancient"),
    "geography": ("geography", "continent", "country", "capital", "river", "map"),
}


def _is_question(line: str) -> bool:
    return any(pattern.search(line) for pattern in QUESTION_PATTERNS)


def _label_value(line: str) -> str:
    if ":" in line:
        return line.split(":", 1)[1].strip()
    return _LABEL_PREFIX.sub("", line, count=1).strip()


def _find_answers(lines: List[str], index: int) -> Tuple[str, str]:
    student_answer = ""
    correct_answer = ""
    for line in lines[index + 1 : index + 1 + ANSWER_LOOKAHEAD]:
        if _is_question(line):
            break
        lowered = line.lower()
        if "student" in lowered or "your" in lowered:
            student_answer = _label_value(line)
        elif "correct" in lowered or "answer" in lowered:
            correct_answer = _label_value(line)
    return student_answer, correct_answer


def _is_correct(student_answer: str, correct_answer: str) -> bool:
    if student_answer.strip().lower() == correct_answer.strip().lower():
        return True
    if CHECK_MARK in correct_answer:
        return True
    return correct_answer in student_answer and len(correct_answer) > 2


def detect_problem_areas(text: str) -> List[str]:
    lowered = text.lower()
    return [area for area, markers, _ in PROBLEM_AREAS if any(marker in lowered for marker in markers)]


def recommendations_for(problem_areas: List[str]) -> List[str]:
    return [advice for area, _, advice in PROBLEM_AREAS if area in problem_areas]


def _mentions(lowered: str, keywords: Tuple[str, ...]) -> bool:
    return any(re.search(rf"\b{re.escape(keyword)}\b", lowered) for keyword in keywords)


def guess_subject(text: str) -> Optional[str]:
    """Return ``math`` when any problem area or math keyword is present.

    Otherwise the first subject in ``SUBJECT_KEYWORDS`` order with a keyword
    hit wins, or None.
    """

    lowered = text.lower()
    if detect_problem_areas(text):
        return "math"
    for subject, keywords in SUBJECT_KEYWORDS.items():
        if _mentions(lowered, keywords):
            return subject
    return None


def analyze_test_content(text: str, learner_name: str) -> Analysis:
    """Derive question counts, grading and problem areas from ``text``."""

    lines = [line.strip() for line in text.split("\n") if line.strip()]
    correct: List[QuestionResult] = []
    incorrect: List[QuestionResult] = []
    total_questions = 0

    for index, line in enumerate(lines):
        if not _is_question(line):
            continue
        total_questions += 1
        student_answer, correct_answer = _find_answers(lines, index)
        if not (student_answer and correct_answer):
            continue
        result = QuestionResult(
            question=line,
            student_answer=student_answer,
            correct_answer=correct_answer.replace(CHECK_MARK, "").strip(),
        )
        if _is_correct(student_answer, correct_answer):
            correct.append(result)
        else:
            incorrect.append(result)

    if total_questions == 0:
        total_questions = max(len(ARITHMETIC_EXPRESSION.findall(text)), text.count("?"))

    problem_areas = detect_problem_areas(text)
    total_questions = max(total_questions, len(correct) + len(incorrect))
    accuracy = int(len(correct) * 100 / total_questions + 0.5) if total_questions else 0

    return Analysis(
        learner_name=learner_name,
        subject=guess_subject(text),
        total_questions=total_questions,
        correct_answers=len(correct),
        incorrect_answers=len(incorrect),
        accuracy=accuracy,
        problem_areas=problem_areas,
        correct=correct,
        incorrect=incorrect,
        recommendations=recommendations_for(problem_areas),
        raw_text_length=len(text),
    )


def run_analysis(
    filename: str,
    text: str,
    learner_name: str,
    config: Optional[ProcessingConfig] = None,
) -> Optional[Analysis]:
    """Analyze the document when the classifier triggers; never raises."""

    if not should_analyze(filename, text, config):
        return None

    try:
        return analyze_test_content(text, learner_name)
    except Exception as exc:
        logger.warning("Analysis failed for %s, continuing with an empty result: %s", filename, exc)
        return Analysis(learner_name=learner_name, raw_text_length=len(text))


__all__ = [
    "analyze_test_content",
    "detect_problem_areas",
    "guess_subject",
    "recommendations_for",
    "run_analysis",
]
