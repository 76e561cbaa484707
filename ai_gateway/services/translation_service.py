"""
Translation Service - Glossary-aware translation through a language model

Two glossary strategies are supported:
- 'substitution': glossary terms are replaced locally, then the text is
  translated in one model call
- 'chunked': the glossary is split into chunks and each chunk drives one
  model call whose output feeds the next
"""

import logging
from typing import List, Optional

from ai_gateway.core.exceptions import ProviderError, TranslationError
from ai_gateway.processors.glossary_processor import (
    DEFAULT_CHUNK_SIZE,
    load_glossary,
    load_glossary_chunks,
    substitute_terms,
)
from ai_gateway.utils.pdf_utils import InputSource, read_input_buffer

logger = logging.getLogger(__name__)

STRATEGY_SUBSTITUTION = 'substitution'
STRATEGY_CHUNKED = 'chunked'
GLOSSARY_STRATEGIES = (STRATEGY_SUBSTITUTION, STRATEGY_CHUNKED)

LITERAL_TRANSLATION_TEMPLATE = """Translate the following text from {sourceLang} to {targetLang}. Provide only the translation, without any additional text:

{text}"""

GLOSSARY_CHUNK_TEMPLATE = """You are a professional translator. Translate the following text from {sourceLang} to {targetLang}.
Use the provided glossary chunk for consistent terminology. Each line of the glossary contains all information about a term, separated by '|':

Glossary Chunk:
{glossaryChunk}

Text to translate:
{text}

Translation:"""


class TranslationService:
    """Service for translating text with an optional glossary"""

    def __init__(
        self,
        llm,
        strategy: str = STRATEGY_CHUNKED,
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ):
        if strategy not in GLOSSARY_STRATEGIES:
            raise ValueError(f"Unknown glossary strategy: {strategy}")
        self.llm = llm
        self.strategy = strategy
        self.chunk_size = chunk_size

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        glossary: Optional[InputSource] = None,
        glossary_filename: Optional[str] = None
    ) -> str:
        """
        Translate text, applying the glossary when one is supplied

        Args:
            text: Text to translate
            source_lang: Source language code
            target_lang: Target language code
            glossary: Glossary spreadsheet bytes or a path to it
            glossary_filename: Upload name of the glossary, used to pick the reader

        Returns:
            Trimmed translation

        Raises:
            UnsupportedInputError: If the glossary is neither bytes nor a file path
            LoadError: If the glossary cannot be loaded
            TranslationError: If a model call fails
        """
        if glossary is None:
            return await self._translate_literal(text, source_lang, target_lang)

        data = await read_input_buffer(glossary)
        if self.strategy == STRATEGY_SUBSTITUTION:
            parsed = load_glossary(data, glossary_filename)
            substituted = substitute_terms(text, target_lang, parsed)
            return await self._translate_literal(substituted, source_lang, target_lang)

        chunks = load_glossary_chunks(data, glossary_filename, self.chunk_size)
        return await self.translate_with_chunks(text, chunks, source_lang, target_lang)

    async def translate_with_chunks(
        self,
        text: str,
        chunks: List[str],
        source_lang: str,
        target_lang: str
    ) -> str:
        """
        Fold the text through one model call per glossary chunk

        Each call depends on the previous call's output, so the calls must
        stay sequential.
        """
        translated = text
        for index, chunk in enumerate(chunks, start=1):
            logger.debug(f"Applying glossary chunk {index}/{len(chunks)}")
            prompt = GLOSSARY_CHUNK_TEMPLATE.format(
                sourceLang=source_lang,
                targetLang=target_lang,
                glossaryChunk=chunk,
                text=translated
            )
            translated = await self._complete(prompt)
        return translated.strip()

    async def _translate_literal(self, text: str, source_lang: str, target_lang: str) -> str:
        prompt = LITERAL_TRANSLATION_TEMPLATE.format(
            sourceLang=source_lang,
            targetLang=target_lang,
            text=text
        )
        result = await self._complete(prompt)
        return result.strip()

    async def _complete(self, prompt: str) -> str:
        try:
            return await self.llm.complete(prompt)
        except TranslationError:
            raise
        except ProviderError as e:
            raise TranslationError(str(e)) from e
