# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Updated: 2026-10-19
# Description: process router
# -----------------------------------------------------------------------------
import json
import logging
import queue
import threading
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

import settings
from api.dependencies import get_batch_processor
from services.IQBatchProcessor import IQBatchProcessor
from utility.errors import ProcessingInProgress

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/process", tags=["process"])

_DONE = object()


@router.post("")
def post_process(
    force: bool = Query(False, description="Re-embed every non-URL question"),
    processor: IQBatchProcessor = Depends(get_batch_processor),
) -> StreamingResponse:
    """
    Run the enrichment pipeline over the stored corpus and stream progress as
    newline-delimited JSON: {"status": "..."} per line.
    """
    try:
        processor.acquire_run()
    except ProcessingInProgress as e:
        logger.warning("POST /process -> 409 (run already active)")
        raise HTTPException(status_code=409, detail=str(e))

    logger.info("POST /process (start) force=%s", force)

    # bounded: a slow client slows the batch loop instead of losing messages
    messages: "queue.Queue[object]" = queue.Queue(maxsize=settings.PROGRESS_QUEUE_SIZE)
    abandoned = threading.Event()

    def _put(item: object) -> None:
        while not abandoned.is_set():
            try:
                messages.put(item, timeout=0.5)
                return
            except queue.Full:
                continue

    def _worker() -> None:
        try:
            report = processor.process_store(progress=_put, force=force, reserved=True)
            logger.info("POST /process (done) %s", report.summary())
        except Exception as e:
            logger.exception("POST /process failed: %s", e)
            _put(f"Error: {e}")
        finally:
            _put(_DONE)

    def _stream() -> Iterator[str]:
        try:
            while True:
                item = messages.get()
                if item is _DONE:
                    return
                yield json.dumps({"status": item}) + "\n"
        finally:
            abandoned.set()

    try:
        threading.Thread(target=_worker, name="iq-process", daemon=True).start()
    except RuntimeError:
        processor.release_run()
        raise
    return StreamingResponse(_stream(), media_type="application/x-ndjson")
