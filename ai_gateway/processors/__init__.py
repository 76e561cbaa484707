"""
Data Processors Package
"""

from .glossary_processor import Glossary, GlossaryEntry, load_glossary, load_glossary_chunks, substitute_terms
from .query_processor import QueryProcessor, query_processor

__all__ = [
    'Glossary',
    'GlossaryEntry',
    'load_glossary',
    'load_glossary_chunks',
    'substitute_terms',
    'QueryProcessor',
    'query_processor',
]
