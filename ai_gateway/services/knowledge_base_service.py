"""
Knowledge Base Service - Question answering over a PDF

The document text is split into passages, the passages most relevant to the
question are selected, and the answer is built with a refine chain: an
initial answer from the first passage, then one refinement per further
passage.
"""

import logging
from typing import List, Optional, Union

import httpx

from ai_gateway.core.exceptions import LoadError
from ai_gateway.processors.query_processor import query_processor
from ai_gateway.utils.pdf_utils import InputSource, extract_pdf_text, get_pdf_buffer

logger = logging.getLogger(__name__)

INITIAL_ANSWER_TEMPLATE = """Context information is below.
---------------------
{context}
---------------------
Given the context information and no prior knowledge, answer the question: {question}"""

REFINE_ANSWER_TEMPLATE = """The original question is as follows: {question}
We have provided an existing answer: {existing_answer}
We have the opportunity to refine the existing answer (only if needed) with some more context below.
------------
{context}
------------
Given the new context, refine the original answer to better answer the question.
If the context isn't useful, return the original answer."""


def normalize_question(question: Union[str, List[str]]) -> str:
    """Join several questions into one"""
    if isinstance(question, list):
        return "\n".join(q.strip() for q in question if q and q.strip())
    return question.strip()


class KnowledgeBaseService:
    """Service for answering questions about a PDF"""

    def __init__(
        self,
        llm,
        passage_size: int = 4000,
        max_passages: int = 4,
        fetch_timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.llm = llm
        self.passage_size = passage_size
        self.max_passages = max_passages
        self.fetch_timeout = fetch_timeout
        self._transport = transport

    async def load_document(self, file: Optional[InputSource], pdf_url: Optional[str]) -> bytes:
        """Resolve the PDF from an upload, a local path or a URL"""
        return await get_pdf_buffer(file, pdf_url, timeout=self.fetch_timeout, transport=self._transport)

    def prepare_passages(self, pdf_bytes: bytes, question: str) -> List[str]:
        """
        Extract and rank the passages used as context

        Raises:
            LoadError: If the PDF is unreadable or has no text
        """
        text = extract_pdf_text(pdf_bytes)
        if not text:
            raise LoadError("No text could be extracted from the PDF")

        passages = query_processor.split_passages(text, self.passage_size)
        return query_processor.rank_passages(passages, question, self.max_passages)

    async def answer(self, question: str, passages: List[str]) -> str:
        """Run the refine chain over the passages in order"""
        answer = ""
        for index, passage in enumerate(passages):
            if index == 0:
                prompt = INITIAL_ANSWER_TEMPLATE.format(context=passage, question=question)
            else:
                prompt = REFINE_ANSWER_TEMPLATE.format(
                    question=question,
                    existing_answer=answer,
                    context=passage
                )
            answer = (await self.llm.complete(prompt)).strip()

        logger.info(f"Answered question from {len(passages)} passage(s)")
        return answer

    async def analyze_pdf(self, question: Union[str, List[str]], pdf_bytes: bytes) -> str:
        question_text = normalize_question(question)
        passages = self.prepare_passages(pdf_bytes, question_text)
        return await self.answer(question_text, passages)
