"""Optional translation pass via the MyMemory API."""

import logging

import httpx

from bilingual_reader.constants import (
    TRANSLATE_LANGPAIR,
    TRANSLATE_TIMEOUT,
    TRANSLATE_URL,
)

logger = logging.getLogger(__name__)


class TranslationError(Exception):
    """Translation service unreachable or returned no translation."""


async def translate(
    text: str,
    langpair: str = TRANSLATE_LANGPAIR,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Translate text, e.g. langpair "ko|en" for Korean → English.

    Raises TranslationError on transport/HTTP failure or a response without
    responseData.translatedText.
    """
    params = {"q": text, "langpair": langpair}
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=TRANSLATE_TIMEOUT) as own_client:
                response = await own_client.get(TRANSLATE_URL, params=params)
        else:
            response = await client.get(TRANSLATE_URL, params=params)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise TranslationError(f"Translation request failed: {e}") from e

    translated = (data.get("responseData") or {}).get("translatedText") if isinstance(data, dict) else None
    if not translated:
        raise TranslationError("Translation failed: empty response")
    return translated


async def with_translation(
    text: str,
    langpair: str = TRANSLATE_LANGPAIR,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Return the original text followed by its translation.

    Falls back to the original text alone when translation fails.
    """
    try:
        translated = await translate(text, langpair=langpair, client=client)
    except TranslationError as e:
        logger.warning("%s — speaking original text only", e)
        return text
    return f"{text}\n\n{translated}"
