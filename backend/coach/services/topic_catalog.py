from types import MappingProxyType
from typing import List, Optional, Tuple

from ..models.schemas import Topic

_OPENER = "Welcome! Introduce yourself and state your topic."

TOPICS: Tuple[Topic, ...] = (
    Topic(id="job-interview", name="Job Interview", description="Practice common interview questions"),
    Topic(id="presentation", name="Presentation", description="Improve your public speaking skills"),
    Topic(id="debate", name="Debate", description="Sharpen your argumentation skills"),
    Topic(id="sales-pitch", name="Sales Pitch", description="Refine your sales presentation"),
    Topic(id="storytelling", name="Storytelling", description="Master the art of narrative"),
)

# Fallback content; the live session asks the relay instead.
PROMPTS = MappingProxyType({
    "job-interview": (
        _OPENER,
        "Tell me about your previous work experience.",
        "What are your strengths and weaknesses?",
        "Why do you want this job?",
        "Where do you see yourself in 5 years?",
    ),
    "presentation": (
        _OPENER,
        "Outline the main points of your presentation.",
        "Explain the key benefits or findings.",
        "Address potential questions or objections.",
        "Summarize your main message.",
    ),
    "debate": (
        _OPENER,
        "Present your main argument.",
        "Provide evidence to support your position.",
        "Address counterarguments.",
        "Conclude your debate points.",
    ),
    "sales-pitch": (
        _OPENER,
        "Describe the problem you're solving.",
        "Explain your solution and its benefits.",
        "Discuss pricing and value proposition.",
        "Call to action - what should they do next?",
    ),
    "storytelling": (
        _OPENER,
        "Set the scene for your story.",
        "Introduce the main characters or elements.",
        "Build up to the climax.",
        "Provide a satisfying conclusion.",
    ),
})

_BY_ID = MappingProxyType({t.id: t for t in TOPICS})


def list_topics() -> List[Topic]:
    return list(TOPICS)


def find_topic(topic_id: str) -> Optional[Topic]:
    return _BY_ID.get(topic_id)


def guidance_prompts(topic_id: str) -> Tuple[str, ...]:
    return PROMPTS.get(topic_id, ())
