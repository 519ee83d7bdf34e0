"""Heuristic task and note suggestions.

These are keyword rules, not model inference. Each generator sleeps for a
configured latency to behave like a remote call, and is otherwise
deterministic for a given input.
"""

import asyncio
import re
from typing import Iterable, List, Optional, Protocol

from pydantic import BaseModel, Field

from .config import get_server_settings

HIGH_PRIORITY = 1
MEDIUM_PRIORITY = 2
LOW_PRIORITY = 3

PRIORITY_LABELS = {HIGH_PRIORITY: "High", MEDIUM_PRIORITY: "Medium", LOW_PRIORITY: "Low"}

# (keywords, priority, score); first matching tier wins
_PRIORITY_TIERS = [
    (("urgent", "asap", "emergency", "critical"), HIGH_PRIORITY, 0.9),
    (("meeting", "deadline", "due", "call"), HIGH_PRIORITY, 0.7),
    (("research", "plan", "think", "consider"), LOW_PRIORITY, 0.3),
]

# (keywords, minutes); first matching tier wins
_DURATION_TIERS = [
    (("quick", "brief", "check"), 15),
    (("review", "analyze", "write"), 60),
    (("project", "develop", "create"), 120),
]

_TASK_TAGS = [
    (("meeting", "call"), "meeting"),
    (("email", "message"), "communication"),
    (("code", "develop", "bug"), "development"),
    (("design", "ui", "ux"), "design"),
    (("research", "learn"), "research"),
    (("buy", "purchase", "order"), "shopping"),
]

_NOTE_TOPICS = [
    (("meeting", "discussion"), "meeting", "Add action items and follow-up tasks from the meeting"),
    (("project", "task"), "project", "Consider creating a todo list for project milestones"),
    (("idea", "brainstorm"), "brainstorming", "Explore related concepts and potential applications"),
    (("research", "study"), "research", "Add sources and references to support your research"),
    (("code", "programming"), "development", "Include code examples and technical specifications"),
]

_SUMMARY_KEYWORDS = ("important", "key", "main", "conclusion", "result", "decision")

ACTIVE_TASK_WARNING_THRESHOLD = 10


class TaskLike(Protocol):
    title: str
    completed: bool


class TaskSuggestion(BaseModel):
    priority: int = MEDIUM_PRIORITY
    score: float = 0.5
    tags: List[str] = Field(default_factory=list)
    estimated_duration: int = 30
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class NoteInsights(BaseModel):
    suggestions: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    sentiment: str = "brief"
    suggested_tags: List[str] = Field(default_factory=list)


def priority_label(priority: int) -> str:
    return PRIORITY_LABELS.get(priority, "Normal")


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


async def _simulate_latency(seconds: float) -> None:
    if seconds > 0:
        await asyncio.sleep(seconds)


def _split_sentences(text: str) -> List[str]:
    return [sentence for sentence in re.split(r"[.!?]+", text) if sentence.strip()]


def analyze_task(title: str, existing_tasks: Iterable[TaskLike]) -> TaskSuggestion:
    """Keyword scoring for a new task against the user's existing ones."""
    text = title.lower()
    existing_tasks = list(existing_tasks)
    suggestion = TaskSuggestion()

    for keywords, priority, score in _PRIORITY_TIERS:
        if _contains_any(text, keywords):
            suggestion.priority = priority
            suggestion.score = score
            break

    for keywords, minutes in _DURATION_TIERS:
        if _contains_any(text, keywords):
            suggestion.estimated_duration = minutes
            break

    suggestion.tags = [tag for keywords, tag in _TASK_TAGS if _contains_any(text, keywords)]

    first_word = text.split(" ")[0]
    similar = [
        task
        for task in existing_tasks
        if first_word in task.title.lower() or task.title.lower().split(" ")[0] in text
    ]
    if similar:
        suggestion.insights.append(f"Found {len(similar)} similar task(s) in your list")
        suggestion.recommendations.append("Consider grouping related tasks together")

    active = [task for task in existing_tasks if not task.completed]
    if len(active) > ACTIVE_TASK_WARNING_THRESHOLD:
        suggestion.insights.append("You have a high number of active tasks")
        suggestion.recommendations.append(
            "Consider completing some existing tasks before adding more"
        )

    return suggestion


def analyze_note(content: str) -> NoteInsights:
    """Length, topic and structure rules over a note's plain text."""
    text = content.lower()
    word_count = len(text.split())
    insights = NoteInsights(sentiment="informative" if word_count > 50 else "brief")

    if word_count < 50:
        insights.suggestions.append(
            "Consider expanding your ideas with more details and examples"
        )
        insights.improvements.append(
            "Add more context to make your notes more comprehensive"
        )
    if word_count > 500:
        insights.suggestions.append(
            "Consider breaking this into multiple notes for better organization"
        )
        insights.improvements.append(
            "Use headings and bullet points to improve readability"
        )

    for keywords, topic, suggestion in _NOTE_TOPICS:
        if _contains_any(text, keywords):
            insights.topics.append(topic)
            insights.suggestions.append(suggestion)

    sentences = _split_sentences(text)
    if sentences and word_count / len(sentences) > 25:
        insights.improvements.append("Consider shorter sentences for better readability")

    if "\n" not in text and word_count > 100:
        insights.improvements.append("Use paragraphs to organize your thoughts better")

    if word_count > 200 and not re.search(r"^(#|\*|-|\d+\.)", text, re.MULTILINE):
        insights.improvements.append(
            "Add headings or bullet points to structure your content"
        )

    if not insights.suggestions:
        insights.suggestions.extend(
            [
                "Your note looks good! Consider adding tags for better organization",
                "Think about connecting this note to related topics or projects",
            ]
        )

    insights.suggested_tags = insights.topics[:5]
    return insights


def summarize(content: str) -> str:
    """Extractive summary: the first sentence plus one key or closing sentence."""
    if len(content.split()) < 20:
        return "Brief note with key points"

    sentences = _split_sentences(content)
    if len(sentences) <= 2:
        return ". ".join(sentences).strip() + "."

    key_sentences = [
        sentence
        for sentence in sentences
        if _contains_any(sentence.lower(), _SUMMARY_KEYWORDS)
    ]
    summary = [sentences[0], key_sentences[0] if key_sentences else sentences[-1]]
    return ". ".join(summary).strip() + "."


async def suggest_for_task(
    title: str,
    existing_tasks: Iterable[TaskLike],
    latency: Optional[float] = None,
) -> TaskSuggestion:
    if latency is None:
        latency = get_server_settings().task_suggestion_latency
    await _simulate_latency(latency)
    return analyze_task(title, existing_tasks)


async def suggest_for_note(content: str, latency: Optional[float] = None) -> NoteInsights:
    if latency is None:
        latency = get_server_settings().note_suggestion_latency
    await _simulate_latency(latency)
    return analyze_note(content)


async def summarize_note(content: str, latency: Optional[float] = None) -> str:
    if latency is None:
        latency = get_server_settings().note_summary_latency
    await _simulate_latency(latency)
    return summarize(content)
