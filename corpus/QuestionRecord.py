# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Updated: 2026-10-19
# Description: QuestionRecord
# -----------------------------------------------------------------------------
import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlparse

from utility.errors import MalformedEmbedding, MalformedRecord
from utility.logging_utils import get_logger

logger = get_logger(__name__)

# CSV column names of the stored corpus
COL_ID = "Interview ID"
COL_RAW_TEXT = "Question (including Followups)"
COL_ANSWER = "Solution Given"
COL_COMPANY = "Company"
COL_ROLE = "Role"
COL_CANONICAL = "Formatted Question"
COL_EMBEDDING = "Embedding"

CORPUS_COLUMNS = [
    COL_ID,
    COL_RAW_TEXT,
    COL_ANSWER,
    COL_COMPANY,
    COL_ROLE,
    COL_CANONICAL,
    COL_EMBEDDING,
]


def is_url(text: Optional[str]) -> bool:
    """True when the whole text is a single absolute http(s) URL."""
    if not text:
        return False
    candidate = text.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False
    try:
        parsed = urlparse(candidate)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_embedding(raw: str, row_index: Optional[int] = None) -> Optional[List[float]]:
    """
    Decode a stored embedding cell.
    Empty cell -> None, "[]" -> [] (processed URL row), otherwise a list of floats.
    """
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedEmbedding(f"embedding is not valid JSON: {e}", row_index) from e

    if not isinstance(value, list):
        raise MalformedEmbedding(f"embedding must be a JSON array, got {type(value).__name__}", row_index)

    out: List[float] = []
    for v in value:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise MalformedEmbedding(f"embedding holds a non-numeric value: {v!r}", row_index)
        f = float(v)
        if not math.isfinite(f):
            raise MalformedEmbedding("embedding holds a non-finite value", row_index)
        out.append(f)
    return out


def _verbatim(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def _cell(row: Mapping[str, Any], column: str) -> str:
    return _verbatim(row.get(column)).strip()


Cells = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class QuestionRecord:
    """
    One row of the corpus.

    Rows that cannot form a question (missing id, text, company or role) are
    still records: `malformed` holds the reason and `source_row` the original
    cells, which are written back untouched. Columns this project does not
    know travel in `extra`.
    """
    id: str
    raw_text: str
    company: str
    role: str
    answer: Optional[str] = None
    canonical_text: Optional[str] = None
    embedding: Optional[List[float]] = None
    extra: Cells = field(default=(), repr=False)
    malformed: Optional[str] = None
    source_row: Cells = field(default=(), repr=False)

    @property
    def question_url(self) -> Optional[str]:
        return self.raw_text.strip() if is_url(self.raw_text) else None

    @property
    def is_url_question(self) -> bool:
        return self.question_url is not None

    @property
    def is_malformed(self) -> bool:
        return self.malformed is not None

    @property
    def display_text(self) -> str:
        return self.canonical_text or self.raw_text

    @property
    def has_embedding(self) -> bool:
        """True when the record carries a usable (non-empty) vector."""
        return bool(self.embedding)

    @property
    def is_processed(self) -> bool:
        # an empty vector only marks a finished URL row
        if self.is_malformed or self.canonical_text is None or self.embedding is None:
            return False
        return self.has_embedding or self.is_url_question

    @staticmethod
    def from_row(row: Mapping[str, Any], row_index: Optional[int] = None) -> "QuestionRecord":
        cells = {str(k): _verbatim(v) for k, v in row.items()}
        record_id = _cell(row, COL_ID)
        raw_text = _cell(row, COL_RAW_TEXT)
        company = _cell(row, COL_COMPANY)
        role = _cell(row, COL_ROLE)

        missing = [
            name for name, value in (
                (COL_ID, record_id),
                (COL_RAW_TEXT, raw_text),
                (COL_COMPANY, company),
                (COL_ROLE, role),
            ) if not value
        ]
        if missing:
            problem = MalformedRecord(f"missing required columns {missing}", row_index)
            logger.warning("Keeping malformed corpus row unchanged: %s", problem)
            return QuestionRecord(
                id=record_id,
                raw_text=raw_text,
                company=company,
                role=role,
                malformed=str(problem),
                source_row=tuple(cells.items()),
            )

        try:
            embedding = parse_embedding(_cell(row, COL_EMBEDDING), row_index)
        except MalformedEmbedding as e:
            logger.warning("Stored embedding for id='%s' discarded: %s", record_id, e)
            embedding = None

        if embedding == [] and not is_url(raw_text):
            logger.warning("Empty embedding on non-URL question id='%s'; will re-embed", record_id)
            embedding = None

        return QuestionRecord(
            id=record_id,
            raw_text=raw_text,
            company=company,
            role=role,
            answer=_cell(row, COL_ANSWER) or None,
            canonical_text=_cell(row, COL_CANONICAL) or None,
            embedding=embedding,
            extra=tuple((k, v) for k, v in cells.items() if k not in CORPUS_COLUMNS),
        )

    def to_row(self) -> Dict[str, str]:
        if self.is_malformed:
            return dict(self.source_row)
        row = {
            COL_ID: self.id,
            COL_RAW_TEXT: self.raw_text,
            COL_ANSWER: self.answer or "",
            COL_COMPANY: self.company,
            COL_ROLE: self.role,
            COL_CANONICAL: self.canonical_text or "",
            COL_EMBEDDING: "" if self.embedding is None else json.dumps(self.embedding),
        }
        row.update(self.extra)
        return row
