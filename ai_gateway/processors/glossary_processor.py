"""
Glossary processing module for terminology-aware translation.

Handles:
- Loading bilingual glossary spreadsheets (first sheet, header row, term in column 0)
- Mapping column positions to language codes
- Deterministic term substitution (longest match first, naive plurals)
- Flattening and chunking a glossary for prompt-sized model calls
"""
import html
import io
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Pattern

import pandas as pd

from ai_gateway.core.exceptions import LoadError

logger = logging.getLogger(__name__)


# Spreadsheet column position -> language code. Position 0 is the term.
COLUMN_LANGUAGE_CODES: Dict[int, str] = {
    16: 'es',
    17: 'fr',
    18: 'pt',
    19: 'de',
    20: 'it',
    21: 'nl',
    22: 'zh',
    23: 'ja',
    24: 'ko',
}

GLOSSARY_FIELD_SEPARATOR = ' | '
DEFAULT_CHUNK_SIZE = 10000

_CELL_NEWLINES = re.compile(r'[\r\n]+')


@dataclass
class GlossaryEntry:
    """A term and its translations keyed by language code"""
    term: str
    translations: Dict[str, str] = field(default_factory=dict)

    def translation_for(self, language: str) -> Optional[str]:
        if language in self.translations:
            return self.translations[language]
        language_lower = language.lower()
        for code, translation in self.translations.items():
            if code.lower() == language_lower:
                return translation
        return None


@dataclass
class Glossary:
    """Case-insensitive term -> GlossaryEntry mapping"""
    entries: Dict[str, GlossaryEntry] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[GlossaryEntry]:
        return iter(self.entries.values())

    def __contains__(self, term: str) -> bool:
        return term.lower() in self.entries

    def add(self, term: str, translations: Dict[str, str]) -> None:
        """Add a term, merging translations into an existing entry with the same key"""
        key = term.lower()
        if key in self.entries:
            self.entries[key].translations.update(translations)
        else:
            self.entries[key] = GlossaryEntry(term, dict(translations))

    def get(self, term: str) -> Optional[GlossaryEntry]:
        return self.entries.get(term.lower())

    def terms(self) -> List[str]:
        return [entry.term for entry in self.entries.values()]


@dataclass
class GlossaryTable:
    """Raw first-sheet contents as strings"""
    headers: List[str]
    rows: List[List[str]]


def language_code_for(position: int, header: str) -> str:
    """Map a column position to its language code, falling back to the header text"""
    return COLUMN_LANGUAGE_CODES.get(position, header)


def read_glossary_table(data: bytes, filename: Optional[str] = None) -> GlossaryTable:
    """
    Parse spreadsheet bytes into headers and string rows

    Args:
        data: Raw file contents
        filename: Upload name; .csv selects the CSV reader, .xls the legacy Excel reader

    Raises:
        LoadError: If the bytes are not a supported spreadsheet
    """
    if not data:
        raise LoadError("Glossary file is empty")

    buffer = io.BytesIO(data)
    try:
        if filename and filename.lower().endswith('.csv'):
            df = pd.read_csv(buffer, dtype=str, keep_default_na=False)
        elif filename and filename.lower().endswith('.xls'):
            df = pd.read_excel(buffer, sheet_name=0, dtype=str, keep_default_na=False, engine='xlrd')
        else:
            df = pd.read_excel(buffer, sheet_name=0, dtype=str, keep_default_na=False)
    except Exception as e:
        logger.error(f"Glossary parse error: {str(e)}")
        raise LoadError(f"Unable to read glossary spreadsheet: {e}") from e

    headers = [str(col).strip() for col in df.columns]
    rows = [
        [_CELL_NEWLINES.sub(' ', str(value)).strip() for value in row]
        for row in df.fillna('').values.tolist()
    ]
    return GlossaryTable(headers=headers, rows=rows)


def build_glossary(table: GlossaryTable) -> Glossary:
    """Build a Glossary from a parsed table, skipping rows without a term"""
    glossary = Glossary()

    for row in table.rows:
        term = row[0] if row else ''
        if not term:
            continue

        translations = {}
        for position, value in enumerate(row[1:], start=1):
            if not value:
                continue
            header = table.headers[position] if position < len(table.headers) else str(position)
            translations[language_code_for(position, header)] = value

        glossary.add(term, translations)

    logger.info(f"Loaded glossary with {len(glossary)} terms")
    return glossary


def load_glossary(data: bytes, filename: Optional[str] = None) -> Glossary:
    """Load a glossary spreadsheet into a term -> translations mapping"""
    return build_glossary(read_glossary_table(data, filename))


def build_term_pattern(terms: Iterable[str]) -> Optional[Pattern]:
    """
    Compile one case-insensitive pattern over all terms

    Terms are escaped and ordered longest first so a short term never
    shadows a longer overlapping one. Group 1 is the term, group 2 an
    optional trailing plural 's'. Lookarounds instead of \\b keep terms
    that start or end in punctuation (e.g. C++) matchable.
    """
    unique_terms = {term for term in terms if term}
    if not unique_terms:
        return None

    ordered = sorted(unique_terms, key=lambda term: (-len(term), term.lower()))
    alternation = '|'.join(re.escape(term) for term in ordered)
    return re.compile(rf'(?<!\w)({alternation})(s?)(?!\w)', re.IGNORECASE)


def substitute_terms(
    text: str,
    target_lang: str,
    glossary: Glossary,
    pattern: Optional[Pattern] = None
) -> str:
    """
    Replace glossary terms in text with their target-language translation

    Terms without a translation for target_lang are left as written.
    """
    if not text or not len(glossary):
        return text

    pattern = pattern or build_term_pattern(glossary.terms())
    if pattern is None:
        return text

    def replace(match: re.Match) -> str:
        entry = glossary.get(match.group(1))
        translation = entry.translation_for(target_lang) if entry else None
        if not translation:
            return match.group(0)

        translation = html.unescape(translation)
        if match.group(2) and not translation.lower().endswith('s'):
            translation += 's'
        return translation

    return pattern.sub(replace, text)


def flatten_glossary_rows(rows: Iterable[List[str]]) -> str:
    """Serialize rows as one line per entry, populated fields joined by ' | '"""
    lines = []
    for row in rows:
        values = [value for value in row if value]
        if not values:
            logger.warning("Skipping empty glossary entry")
            continue
        lines.append(GLOSSARY_FIELD_SEPARATOR.join(values))
    return '\n'.join(lines)


def chunk_glossary(glossary_text: str, max_chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[str]:
    """
    Split flattened glossary text into line-aligned chunks

    Lines are accumulated until the next one (plus its newline) would push the
    chunk past max_chunk_size. A line longer than the budget becomes its own
    chunk; lines are never split.
    """
    if max_chunk_size <= 0:
        raise ValueError("max_chunk_size must be positive")

    chunks: List[str] = []
    current: List[str] = []
    current_size = 0

    for line in glossary_text.split('\n'):
        if not line.strip():
            continue

        line_size = len(line) + 1
        if current and current_size + line_size > max_chunk_size:
            chunks.append('\n'.join(current))
            current, current_size = [], 0

        current.append(line)
        current_size += line_size

    if current:
        chunks.append('\n'.join(current))

    return chunks


def load_glossary_chunks(
    data: bytes,
    filename: Optional[str] = None,
    max_chunk_size: int = DEFAULT_CHUNK_SIZE
) -> List[str]:
    """
    Load a glossary spreadsheet straight into prompt-sized chunks

    Raises:
        LoadError: If the spreadsheet is unreadable or holds no entries
    """
    table = read_glossary_table(data, filename)
    glossary_text = flatten_glossary_rows(table.rows)
    if not glossary_text:
        raise LoadError("Invalid glossary format")

    chunks = chunk_glossary(glossary_text, max_chunk_size)
    logger.info(f"Glossary split into {len(chunks)} chunk(s)")
    return chunks
