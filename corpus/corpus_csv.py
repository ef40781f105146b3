# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Updated: 2026-10-19
# Description: corpus_csv.py
# -----------------------------------------------------------------------------
import io
from typing import Dict, List, Sequence

import pandas as pd

from corpus.QuestionRecord import CORPUS_COLUMNS, QuestionRecord
from utility.logging_utils import get_logger

logger = get_logger(__name__)

# raised while decoding or parsing corpus bytes; stores wrap these as StoreUnavailable
UNREADABLE_CORPUS_ERRORS = (UnicodeDecodeError, pd.errors.ParserError)


def _overflow_into_last(width: int):
    """Keep rows with too many fields by folding the surplus into the last column."""

    def handle(bad_line: List[str]) -> List[str]:
        logger.warning("Corpus row has %d fields, header has %d; folding surplus", len(bad_line), width)
        if width <= 1:
            return [",".join(bad_line)]
        return bad_line[: width - 1] + [",".join(bad_line[width - 1:])]

    return handle


def records_from_csv(text: str) -> List[QuestionRecord]:
    """
    Parse the corpus CSV into records, in file order.
    Every data row becomes a record, malformed ones included, so a full
    snapshot written back keeps them. Blank lines are ignored.
    """
    if not text or not text.strip():
        return []

    width = len(pd.read_csv(io.StringIO(text), dtype=str, nrows=0).columns)
    df = pd.read_csv(
        io.StringIO(text),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
        engine="python",
        on_bad_lines=_overflow_into_last(width),
    )

    records = [
        QuestionRecord.from_row(row, row_index=row_index)
        for row_index, row in enumerate(df.to_dict(orient="records"))
    ]
    malformed = sum(1 for r in records if r.is_malformed)
    logger.info("Parsed corpus CSV: %d records (%d malformed, kept as-is)", len(records), malformed)
    return records


def records_to_csv(records: Sequence[QuestionRecord]) -> str:
    rows: List[Dict[str, str]] = [r.to_row() for r in records]
    columns = list(CORPUS_COLUMNS)
    for row in rows:
        for name in row:
            if name not in columns:
                columns.append(name)
    df = pd.DataFrame(rows, columns=columns).fillna("")
    return df.to_csv(index=False)
