import logging
from typing import Optional
from google.genai import types, Client

from saveit.core import config

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = (
    "Generate a concise 1-2 sentence summary and 3-5 relevant tags (comma-separated) "
    "for the following content. Format: \"Summary: [summary]\nTags: [tags]\"\n\n"
    "Content: {content}"
)

async def generate_summary(content: str, api_key: Optional[str] = None, model: Optional[str] = None) -> str:
    """
    Asks Gemini for a short summary plus tags for a piece of saved content.
    Only the first SUMMARY_INPUT_LIMIT characters are sent.
    """
    client = Client(api_key=api_key or config.GEMINI_API_KEY)

    response = await client.aio.models.generate_content(
        model=model or config.GEMINI_MODEL,
        config=types.GenerateContentConfig(
            temperature=0.4,
            max_output_tokens=200,
        ),
        contents=SUMMARY_PROMPT.format(content=content[:config.SUMMARY_INPUT_LIMIT]),
    )

    if not response.text:
        raise RuntimeError("Gemini returned an empty response")
    return response.text.strip()

def parse_summary(text: str) -> dict:
    """Splits the "Summary: ...\\nTags: ..." reply into its parts."""
    summary, tags = "", []
    for line in text.splitlines():
        head, _, rest = line.partition(":")
        key = head.strip().lower()
        if key == "summary":
            summary = rest.strip()
        elif key == "tags":
            tags = [t.strip() for t in rest.split(",") if t.strip()]
    return {"summary": summary or text.strip(), "tags": tags}
