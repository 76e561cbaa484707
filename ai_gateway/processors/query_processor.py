"""
Query Processor - Passage splitting and relevance ranking for document Q&A
"""

import re
import logging
from typing import List

logger = logging.getLogger(__name__)


# Pre-compiled patterns for performance
WORD_PATTERN = re.compile(r'\w+', re.UNICODE)
WHITESPACE_PATTERN = re.compile(r'[ \t]+')
MULTIPLE_NEWLINES_PATTERN = re.compile(r'\n{3,}')
PARAGRAPH_SPLIT_PATTERN = re.compile(r'\n\s*\n')

STOPWORDS = frozenset({
    'a', 'an', 'and', 'are', 'as', 'at', 'be', 'by', 'does', 'do', 'for', 'from',
    'how', 'in', 'is', 'it', 'of', 'on', 'or', 'the', 'this', 'that', 'to',
    'was', 'what', 'when', 'where', 'which', 'who', 'why', 'with',
})


class QueryProcessor:
    """Splits document text into passages and ranks them against a question"""

    def normalize_text(self, text: str) -> str:
        """Normalize text for processing"""
        if not text:
            return ""

        text = WHITESPACE_PATTERN.sub(' ', text.strip())
        text = MULTIPLE_NEWLINES_PATTERN.sub('\n\n', text)
        return text

    def keywords(self, text: str) -> set:
        return {
            word for word in WORD_PATTERN.findall(text.lower())
            if word not in STOPWORDS and len(word) > 1
        }

    def split_passages(self, text: str, max_size: int) -> List[str]:
        """Pack paragraphs into passages of at most max_size characters"""
        text = self.normalize_text(text)
        if not text:
            return []

        passages = []
        current = ""
        for paragraph in PARAGRAPH_SPLIT_PATTERN.split(text):
            paragraph = paragraph.strip()
            if not paragraph:
                continue

            # Oversized paragraphs are cut hard
            while len(paragraph) > max_size:
                if current:
                    passages.append(current)
                    current = ""
                passages.append(paragraph[:max_size])
                paragraph = paragraph[max_size:]

            if current and len(current) + len(paragraph) + 2 > max_size:
                passages.append(current)
                current = paragraph
            else:
                current = f"{current}\n\n{paragraph}" if current else paragraph

        if current:
            passages.append(current)
        return passages

    def relevance_score(self, passage: str, question: str) -> float:
        """Share of the question's keywords present in the passage"""
        question_words = self.keywords(question)
        if not question_words:
            return 0.0
        return len(question_words & self.keywords(passage)) / len(question_words)

    def rank_passages(self, passages: List[str], question: str, limit: int) -> List[str]:
        """Return the most relevant passages, keeping document order among ties"""
        scored = [
            (self.relevance_score(passage, question), index, passage)
            for index, passage in enumerate(passages)
        ]
        scored.sort(key=lambda item: (-item[0], item[1]))
        return [passage for _, _, passage in scored[:limit]]


# Global instance
query_processor = QueryProcessor()
