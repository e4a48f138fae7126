import pytest

from coach.services.topic_catalog import PROMPTS, find_topic, guidance_prompts, list_topics


def test_list_topics_is_fixed_and_ordered():
    topics = list_topics()
    assert [t.id for t in topics] == ["job-interview", "presentation", "debate", "sales-pitch", "storytelling"]
    assert topics[3].name == "Sales Pitch"


def test_find_topic():
    assert find_topic("presentation").description == "Improve your public speaking skills"
    assert find_topic("cooking") is None


def test_topics_are_immutable():
    topic = find_topic("debate")
    with pytest.raises(Exception):
        topic.name = "Argument"
    with pytest.raises(TypeError):
        PROMPTS["debate"] = ()
    list_topics().clear()
    assert len(list_topics()) == 5


def test_guidance_prompts():
    prompts = guidance_prompts("sales-pitch")
    assert len(prompts) == 5
    assert prompts[0] == "Welcome! Introduce yourself and state your topic."
    assert prompts[-1] == "Call to action - what should they do next?"
    assert guidance_prompts("cooking") == ()
