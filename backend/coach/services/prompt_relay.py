import logging

from .errors import ServiceError, ValidationError

SYSTEM_INSTRUCTION = (
    "You are an AI coach helping users improve their communication skills "
    "through video recording sessions."
)

USER_TEMPLATE = (
    'Based on the user\'s speech transcription: "{transcription}", and the topic: "{topic}", '
    "generate a helpful, relevant prompt for the user to continue their response or improve "
    "their communication. Keep it concise and actionable."
)

FALLBACK_PROMPT = "Continue speaking naturally."
MAX_TOKENS = 100


class PromptRelay:
    """Turns one transcript increment into one coaching prompt.

    The transcript and topic are embedded into the instruction verbatim.
    A single downstream call is made per invocation; any failure there is
    reported as ServiceError with a generic message.
    """

    def __init__(self, service):
        self.service = service
        self.logger = logging.getLogger("coach")

    def build_instruction(self, transcription: str, topic: str) -> str:
        return USER_TEMPLATE.format(transcription=transcription, topic=topic)

    def generate_prompt(self, transcription: str, topic: str) -> str:
        if not transcription or not topic:
            raise ValidationError()
        self.logger.info("relay.request topic=%s chars=%d", topic, len(transcription))
        try:
            out = self.service.complete(
                SYSTEM_INSTRUCTION,
                self.build_instruction(transcription, topic),
                max_tokens=MAX_TOKENS,
            )
        except Exception as e:
            self.logger.exception("relay.failed topic=%s err=%s", topic, e)
            raise ServiceError() from e
        prompt = (out or "").strip()
        if not prompt:
            self.logger.info("relay.empty_completion topic=%s -> fallback", topic)
            return FALLBACK_PROMPT
        return prompt
