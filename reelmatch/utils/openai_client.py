"""OpenAI API client for making requests to the OpenAI service."""

import openai

from reelmatch.config.settings import settings
from reelmatch.utils.logger import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a film expert that recommends movies. "
    "Respond with a JSON array of movie titles and nothing else."
)


def get_openai_client():
    """Configure and return the OpenAI Python client instance."""
    return openai.OpenAI(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_API_BASE_URL,
        max_retries=0,
    )


def get_openai_chat_completion(model, messages, **kwargs):
    """Get chat completion from OpenAI API in a single attempt. Accepts extra payload params via kwargs."""
    client = get_openai_client()
    try:
        return client.chat.completions.create(
            model=model, messages=messages, **kwargs
        )
    except Exception as e:
        logger.error("OpenAI API request failed: %s", repr(e), exc_info=True)
        raise


def complete_prompt(prompt: str) -> str:
    """Send a rendered prompt and return the raw completion text ('' when the model returns no content)."""
    response = get_openai_chat_completion(
        settings.OPENAI_MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        temperature=settings.OPENAI_TEMPERATURE,
        max_tokens=settings.OPENAI_MAX_TOKENS,
    )
    content = response.choices[0].message.content
    return (content or "").strip()
