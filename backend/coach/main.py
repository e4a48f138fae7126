import logging
from typing import List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaError
from starlette.concurrency import run_in_threadpool

from .config import settings
from .models.schemas import ErrorResponse, PromptRequest, PromptResponse, Topic, TopicPromptsResponse
from .services.errors import CoachError, ValidationError
from .services.prompt_openai import OpenAIPromptService, mask_key
from .services.prompt_relay import PromptRelay
from .services.topic_catalog import find_topic, guidance_prompts, list_topics

app = FastAPI(title="AI Interview Coach")

# Logging
logger = logging.getLogger("coach")
if not logger.handlers:
    handler = logging.StreamHandler()
    fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Globals / Singletons
PROMPT_SERVICE = OpenAIPromptService(
    api_key=settings.OPENAI_API_KEY,
    model=settings.OPENAI_MODEL,
    api_url=settings.OPENAI_API_URL,
    timeout=settings.OPENAI_TIMEOUT,
)
RELAY = PromptRelay(PROMPT_SERVICE)

_ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}

@app.on_event("startup")
def check_prompt_service():
    logger.info(
        "Starting up backend. model=%s api_key=%s",
        settings.OPENAI_MODEL,
        mask_key(settings.OPENAI_API_KEY),
    )
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set; every prompt request will fail. See backend/.env")

async def _read_prompt_request(request: Request) -> PromptRequest:
    try:
        body = await request.json()
    except ValueError:
        logger.warning("relay.body.unparseable")
        return PromptRequest()
    if not isinstance(body, dict):
        return PromptRequest()
    try:
        return PromptRequest(**body)
    except SchemaError as e:
        logger.warning("relay.body.invalid err=%s", e)
        return PromptRequest()

@app.post("/generate-prompt", response_model=PromptResponse, responses=_ERROR_RESPONSES)
@app.post("/api/generate-prompt", response_model=PromptResponse, responses=_ERROR_RESPONSES)
async def generate_prompt(request: Request):
    req = await _read_prompt_request(request)
    try:
        prompt = await run_in_threadpool(RELAY.generate_prompt, req.transcription, req.topic)
    except ValidationError as e:
        logger.info("relay.rejected reason=%s", e.message)
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except CoachError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    return PromptResponse(prompt=prompt)

@app.get("/api/topics", response_model=List[Topic])
async def get_topics():
    return list_topics()

@app.get("/api/topics/{topic_id}", response_model=Topic, responses={404: {"model": ErrorResponse}})
async def get_topic(topic_id: str):
    topic = find_topic(topic_id)
    if topic is None:
        return JSONResponse(status_code=404, content={"error": "Topic not found"})
    return topic

@app.get("/api/topics/{topic_id}/prompts", response_model=TopicPromptsResponse, responses={404: {"model": ErrorResponse}})
async def get_topic_prompts(topic_id: str):
    topic = find_topic(topic_id)
    if topic is None:
        return JSONResponse(status_code=404, content={"error": "Topic not found"})
    return TopicPromptsResponse(topic=topic, prompts=list(guidance_prompts(topic_id)))

@app.get("/api/health")
async def health():
    """Lightweight diagnostics. The key is masked in the response."""
    return {
        "status": "ok",
        "prompt_service": {
            "configured": PROMPT_SERVICE.configured,
            "model": PROMPT_SERVICE.model,
            "api_key_masked": mask_key(PROMPT_SERVICE.api_key),
        },
    }
