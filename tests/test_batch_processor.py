# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-01
# Description: test_batch_processor.py
# -----------------------------------------------------------------------------
import threading

import pytest

from corpus.LocalIQCorpusStore import LocalIQCorpusStore
from fakes import FakeCanonicalizer, FakeEmbedder, InMemoryCorpusStore, make_record
from services.IQBatchProcessor import IQBatchProcessor
from utility.errors import ProcessingInProgress, StoreUnavailable


def _processor(store, embedder=None, canonicalizer=None, batch_size=2, sleeps=None, **kwargs):
    return IQBatchProcessor(
        store=store,
        canonicalizer=canonicalizer or FakeCanonicalizer(),
        embedder=embedder or FakeEmbedder(),
        batch_size=batch_size,
        pause_seconds=1.0,
        sleep=(sleeps.append if sleeps is not None else (lambda s: None)),
        **kwargs,
    )


def _fresh(n):
    return [make_record(str(i), raw_text=f"Question number {i}") for i in range(1, n + 1)]


def test_run_canonicalises_and_embeds_every_record():
    store = InMemoryCorpusStore()
    out = _processor(store).run(_fresh(3))

    assert [r.id for r in out] == ["1", "2", "3"]
    for r in out:
        assert r.canonical_text == f"Core: Question number {r.id}"
        assert r.has_embedding
    assert store.records == out


def test_second_run_is_idempotent_and_makes_no_provider_calls():
    store = InMemoryCorpusStore()
    first = _processor(store).run(_fresh(3))

    embedder, canonicalizer = FakeEmbedder(), FakeCanonicalizer()
    second = _processor(store, embedder, canonicalizer).run(first)

    assert second == first
    assert embedder.calls == []
    assert canonicalizer.calls == []


def test_checkpoint_after_every_batch_includes_untouched_tail():
    store = InMemoryCorpusStore()
    records = _fresh(5)
    _processor(store, batch_size=2).run(records)

    assert len(store.writes) == 3
    first = store.writes[0]
    assert [r.id for r in first] == ["1", "2", "3", "4", "5"]
    assert [r.is_processed for r in first] == [True, True, False, False, False]
    assert first[2:] == records[2:]
    assert all(r.is_processed for r in store.writes[-1])


def test_interrupted_run_resumes_without_redoing_finished_batches():
    store = InMemoryCorpusStore(_fresh(5), fail_on_write=2)
    with pytest.raises(StoreUnavailable):
        _processor(store, batch_size=2).process_store()

    # only the first checkpoint landed
    assert [r.is_processed for r in store.records] == [True, True, False, False, False]

    store.fail_on_write = None
    embedder = FakeEmbedder()
    report = _processor(store, embedder, batch_size=2).process_store()

    assert sorted(embedder.calls) == ["Core: Question number 3", "Core: Question number 4", "Core: Question number 5"]
    assert report.skipped == 2
    assert report.processed == 3
    assert all(r.is_processed for r in store.records)


def test_one_failing_record_does_not_affect_the_others():
    records = _fresh(3)
    embedder = FakeEmbedder(fail_on={"Core: Question number 2"})
    report = _processor(InMemoryCorpusStore(), embedder, batch_size=5).run_with_report(records)

    out = {r.id: r for r in report.records}
    assert out["1"].is_processed and out["3"].is_processed
    assert out["2"] == records[1]
    assert report.failed == 1
    assert report.processed == 2


def test_canonicaliser_failure_falls_back_to_raw_text():
    records = _fresh(1)
    canonicalizer = FakeCanonicalizer(fail_on={"Question number 1"})
    embedder = FakeEmbedder()
    out = _processor(InMemoryCorpusStore(), embedder, canonicalizer).run(records)

    assert out[0].canonical_text == "Question number 1"
    assert out[0].has_embedding
    assert embedder.calls == ["Question number 1"]


def test_url_question_is_marked_processed_without_provider_calls():
    url = make_record("u", raw_text="https://leetcode.com/problems/two-sum")
    embedder, canonicalizer = FakeEmbedder(), FakeCanonicalizer()
    out = _processor(InMemoryCorpusStore(), embedder, canonicalizer).run([url])

    assert out[0].canonical_text == url.raw_text
    assert out[0].embedding == []
    assert out[0].is_processed
    assert embedder.calls == [] and canonicalizer.calls == []


def test_existing_canonical_text_is_reused():
    record = make_record("1", raw_text="long rambling question", canonical_text="What is X?")
    canonicalizer = FakeCanonicalizer()
    embedder = FakeEmbedder()
    out = _processor(InMemoryCorpusStore(), embedder, canonicalizer).run([record])

    assert canonicalizer.calls == []
    assert embedder.calls == ["What is X?"]
    assert out[0].canonical_text == "What is X?"


def test_dimension_mismatch_against_corpus_fails_the_record():
    done = make_record("1", canonical_text="What is X?", embedding=[1.0, 0.0])
    fresh = make_record("2", raw_text="Question two")
    # FakeEmbedder produces 3-dimensional vectors
    report = _processor(InMemoryCorpusStore()).run_with_report([done, fresh])

    assert report.failed == 1
    assert report.records[1] == fresh


def test_force_re_embeds_everything_except_urls():
    done = make_record("1", canonical_text="What is X?", embedding=[1.0, 0.0])
    url = make_record("u", raw_text="https://example.com/q", canonical_text="https://example.com/q", embedding=[])
    embedder = FakeEmbedder()
    report = _processor(InMemoryCorpusStore(), embedder).run_with_report([done, url], force=True)

    assert embedder.calls == ["What is X?"]
    assert len(report.records[0].embedding) == 3
    assert report.records[1] == url
    assert report.skipped == 1


def test_progress_messages_in_order():
    messages = []
    _processor(InMemoryCorpusStore(), batch_size=2).run(_fresh(3), progress=messages.append)

    assert messages == [
        "Found 3 questions to process",
        "Processing batch 1/2 (1-2 of 3 questions)",
        "Formatting and generating embedding for ID 1",
        "Formatting and generating embedding for ID 2",
        "Progress: 2/3 questions processed (1 remaining)",
        "Processing batch 2/2 (3-3 of 3 questions)",
        "Formatting and generating embedding for ID 3",
        "Progress: 3/3 questions processed (0 remaining)",
        "All questions processed successfully!",
    ]


def test_failing_sink_does_not_stop_the_run():
    def sink(message):
        raise RuntimeError("client went away")

    out = _processor(InMemoryCorpusStore()).run(_fresh(2), progress=sink)
    assert all(r.is_processed for r in out)


def test_pause_only_between_batches():
    sleeps = []
    _processor(InMemoryCorpusStore(), batch_size=2, sleeps=sleeps).run(_fresh(5))
    assert sleeps == [1.0, 1.0]


def test_empty_corpus():
    messages = []
    store = InMemoryCorpusStore()
    out = _processor(store).run([], progress=messages.append)

    assert out == []
    assert store.writes == []
    assert messages == ["Found 0 questions to process", "All questions processed successfully!"]


def test_store_read_failure_propagates():
    with pytest.raises(StoreUnavailable):
        _processor(InMemoryCorpusStore(fail_on_read=True)).process_store()


def test_concurrent_run_is_rejected():
    release = threading.Event()
    started = threading.Event()

    class BlockingEmbedder(FakeEmbedder):
        def embed(self, text):
            started.set()
            release.wait(5)
            return super().embed(text)

    processor = _processor(InMemoryCorpusStore(), BlockingEmbedder())
    worker = threading.Thread(target=processor.run, args=(_fresh(1),))
    worker.start()
    try:
        assert started.wait(5)
        assert processor.is_running
        with pytest.raises(ProcessingInProgress):
            processor.run(_fresh(1))
    finally:
        release.set()
        worker.join(5)

    assert not processor.is_running


def test_held_run_slot_rejects_process_store_until_released():
    processor = _processor(InMemoryCorpusStore(_fresh(1)))
    processor.acquire_run()
    with pytest.raises(ProcessingInProgress):
        processor.acquire_run()
    with pytest.raises(ProcessingInProgress):
        processor.process_store()

    report = processor.process_store(reserved=True)
    assert report.processed == 1
    assert not processor.is_running


def test_reserved_slot_is_released_when_the_store_read_fails():
    processor = _processor(InMemoryCorpusStore(fail_on_read=True))
    processor.acquire_run()
    with pytest.raises(StoreUnavailable):
        processor.process_store(reserved=True)
    assert not processor.is_running


def test_invalid_batch_size():
    with pytest.raises(ValueError):
        _processor(InMemoryCorpusStore(), batch_size=0)


def test_malformed_rows_and_unknown_columns_survive_a_run(tmp_path):
    path = tmp_path / "corpus.csv"
    path.write_text(
        "Interview ID,Question (including Followups),Company,Role,Notes\n"
        "1,Explain tries,Google,SWE,first round\n"
        "2,Explain arrays,Google,,phone screen\n"
        "3,Explain heaps,Meta,SWE,\n",
        encoding="utf-8",
    )
    messages = []
    embedder = FakeEmbedder()
    report = _processor(LocalIQCorpusStore(path), embedder, batch_size=2).process_store(
        progress=messages.append
    )

    assert report.processed == 2
    assert report.skipped == 1
    assert sorted(embedder.calls) == ["Core: Explain heaps", "Core: Explain tries"]
    assert any(m.startswith("Skipping malformed row") for m in messages)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 4
    assert lines[0].endswith(",Notes")
    assert "Explain arrays" in lines[2] and "phone screen" in lines[2]
    assert lines[1].endswith(",first round")

    stored = LocalIQCorpusStore(path).read_all()
    assert [r.id for r in stored] == ["1", "2", "3"]
    assert stored[0].is_processed and stored[2].is_processed
    assert stored[1].is_malformed


def test_plain_question_with_empty_embedding_is_re_embedded():
    record = make_record("1", canonical_text="What is X?", embedding=[])
    embedder = FakeEmbedder()
    report = _processor(InMemoryCorpusStore(), embedder).run_with_report([record])

    assert embedder.calls == ["What is X?"]
    assert report.processed == 1
    assert report.records[0].has_embedding
