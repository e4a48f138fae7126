from typing import List, Optional

from pydantic import BaseModel, ConfigDict

class Topic(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str

class PromptRequest(BaseModel):
    transcription: Optional[str] = None
    topic: Optional[str] = None

class PromptResponse(BaseModel):
    prompt: str

class ErrorResponse(BaseModel):
    error: str

class TopicPromptsResponse(BaseModel):
    topic: Topic
    prompts: List[str]
