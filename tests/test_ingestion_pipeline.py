# tests/test_ingestion_pipeline.py
"""
Tests for repochat.ingest.pipeline.

Key tests verify that:
1. Every attempted file ends up with exactly one artifact
2. Oversized content is truncated with the marker before the call
3. Read, completion and write failures do not stop the run
4. Progress and transcript messages are emitted in order
"""

import pytest

from repochat.core.models import ArtifactStatus, Sender
from repochat.exceptions import FileReadError
from repochat.ingest.pipeline import (
    INTER_FILE_DELAY,
    MAX_CONTENT_CHARS,
    TRUNCATION_MARKER,
    IngestionEventKind,
    IngestionPipeline,
    truncate_content,
)
from repochat.ingest.source import InMemorySourceFile
from repochat.llm.base import CompletionResult


class UnreadableFile:
    def __init__(self, path: str):
        self.path = path

    def read(self) -> str:
        raise FileReadError(self.path, "not valid utf-8 text (invalid start byte)")


def _run(pipeline, files, session_id="repo-1"):
    return list(pipeline.run(session_id, files))


def _kinds(events):
    return [e.kind for e in events]


class TestTruncateContent:
    def test_at_limit_untouched(self):
        content = "x" * 10
        assert truncate_content(content, limit=10) == (content, False)

    def test_over_limit_marked(self):
        text, truncated = truncate_content("x" * 11, limit=10)

        assert truncated
        assert text == "x" * 10 + TRUNCATION_MARKER

    def test_defaults(self):
        assert MAX_CONTENT_CHARS == 700_000
        assert TRUNCATION_MARKER == "\n... (file truncated due to size)"
        assert INTER_FILE_DELAY == 0.2


class TestRun:
    def test_small_and_oversized_file(self, pipeline, completion, store):
        files = [
            InMemorySourceFile("a.js", "a" * 500),
            InMemorySourceFile("b.js", "b" * 800_000),
        ]

        events = _run(pipeline, files)

        assert len(completion.prompts) == 2
        assert ("a" * 500) in completion.prompts[0]
        assert TRUNCATION_MARKER not in completion.prompts[0]
        assert ("b" * 700_000 + TRUNCATION_MARKER) in completion.prompts[1]
        assert ("b" * 700_001) not in completion.prompts[1]

        assert [a.original_path for a in store.get_all_summaries("repo-1")] == ["a.js", "b.js"]

        report = events[-1].report
        assert report.attempted == 2
        assert report.summarized == 2
        assert report.truncated == 1
        assert report.stored == 2
        assert report.consistent

    def test_event_sequence(self, pipeline):
        events = _run(pipeline, [InMemorySourceFile("a.py", "x")])

        assert _kinds(events) == [
            IngestionEventKind.FILE_STARTED,
            IngestionEventKind.FILE_SUMMARIZED,
            IngestionEventKind.COMPLETED,
        ]
        assert [e.step_complete for e in events] == [False, True, True]

    def test_messages(self, pipeline):
        events = _run(pipeline, [InMemorySourceFile("src/a.py", "x")])
        messages = [m for e in events for m in e.messages]

        assert [(m.sender, m.text) for m in messages] == [
            (Sender.SYSTEM, "Analyzing: src/a.py"),
            (Sender.AI, "Summary for src/a.py:\nA short summary."),
            (Sender.SYSTEM, "Processed 1 files. Found 1 summaries in storage."),
            (Sender.AI, "All 1 files processed. You can now ask questions about the codebase."),
        ]

    def test_progress(self, pipeline):
        events = _run(pipeline, [InMemorySourceFile("a.py", "x"), InMemorySourceFile("b.py", "y")])

        started = [e.progress for e in events if e.kind is IngestionEventKind.FILE_STARTED]
        assert [(p.current, p.total, p.status) for p in started] == [
            (1, 2, "Processing file 1/2: a.py"),
            (2, 2, "Processing file 2/2: b.py"),
        ]
        assert events[-1].progress.status == "Processed 2 files. Ready to query!"

    def test_prompt_names_the_file(self, pipeline, completion):
        _run(pipeline, [InMemorySourceFile("lib/parser.py", "def parse(): ...")])

        assert 'the file named "lib/parser.py"' in completion.prompts[0]
        assert completion.prompts[0].endswith("CODE:\ndef parse(): ...")

    def test_no_files(self, pipeline, completion):
        events = _run(pipeline, [])

        assert _kinds(events) == [IngestionEventKind.NO_FILES]
        assert events[0].step_complete
        assert events[0].messages[0].text == "No processable files found after filtering."
        assert events[0].report.attempted == 0
        assert completion.prompts == []

    def test_delay_only_between_files(self, pipeline, sleeper):
        _run(pipeline, [InMemorySourceFile(p, "x") for p in ("a", "b", "c")])

        assert sleeper.calls == [0.2, 0.2]

    def test_zero_delay_never_sleeps(self, completion, store, sleeper):
        pipeline = IngestionPipeline(completion=completion, store=store, inter_file_delay=0, sleep=sleeper)

        _run(pipeline, [InMemorySourceFile("a", "x"), InMemorySourceFile("b", "y")])

        assert sleeper.calls == []

    def test_summaries_are_visible_before_completion(self, pipeline, store):
        files = [InMemorySourceFile("a.py", "x"), InMemorySourceFile("b.py", "y")]
        seen = []

        for event in pipeline.run("repo-1", files):
            if event.kind is IngestionEventKind.FILE_STARTED and event.path == "b.py":
                seen = [a.original_path for a in store.get_all_summaries("repo-1")]

        assert seen == ["a.py"]


class TestFailures:
    def test_unreadable_file_continues(self, pipeline, completion, store):
        files = [UnreadableFile("logo.png"), InMemorySourceFile("a.py", "x")]

        events = _run(pipeline, files)

        failed = [e for e in events if e.kind is IngestionEventKind.FILE_FAILED]
        assert len(failed) == 1
        assert failed[0].step_complete
        assert failed[0].messages[0].text.startswith("Error processing logo.png: not valid utf-8")
        assert len(completion.prompts) == 1
        assert store.get_summary("repo-1", "logo.png") is None

        report = events[-1].report
        assert report.failed == 1
        assert report.stored == 1
        assert not report.consistent

    def test_completion_failure_is_stored_as_failed_artifact(self, pipeline, completion, store):
        completion.respond_to('"bad.py"', CompletionResult.transport_error("timed out"))
        files = [InMemorySourceFile("bad.py", "x"), InMemorySourceFile("good.py", "y")]

        events = _run(pipeline, files)

        artifact = store.get_summary("repo-1", "bad.py")
        assert artifact.status is ArtifactStatus.FAILED
        assert artifact.summary_text == "Error communicating with AI: timed out"
        assert store.get_summary("repo-1", "good.py").ok

        summarized = [e for e in events if e.kind is IngestionEventKind.FILE_SUMMARIZED]
        assert summarized[0].messages[0].text == "Summary for bad.py:\nError communicating with AI: timed out"

        report = events[-1].report
        assert report.summarized == 1
        assert report.failed == 1
        assert report.stored == 2
        assert report.consistent

    def test_blocked_content_is_stored(self, pipeline, completion, store):
        completion.respond_to('"secret.py"', CompletionResult.blocked_by("SAFETY"))

        _run(pipeline, [InMemorySourceFile("secret.py", "x")])

        assert store.get_summary("repo-1", "secret.py").summary_text == "Content blocked by API: SAFETY"

    def test_write_failure_continues(self, pipeline, engine, store):
        engine.fail_put_keys.add("repo-1::a.py")
        files = [InMemorySourceFile("a.py", "x"), InMemorySourceFile("b.py", "y")]

        events = _run(pipeline, files)

        kinds = _kinds(events)
        assert kinds.count(IngestionEventKind.FILE_FAILED) == 1
        failed = next(e for e in events if e.kind is IngestionEventKind.FILE_FAILED)
        assert failed.path == "a.py"
        assert "disk full" in failed.messages[0].text
        assert [a.original_path for a in store.get_all_summaries("repo-1")] == ["b.py"]
        assert events[-1].report.stored == 1

    def test_unverified_write_warns(self, pipeline, engine):
        engine.drop_keys.add("repo-1::a.py")

        events = _run(pipeline, [InMemorySourceFile("a.py", "x")])

        warning = next(e for e in events if e.kind is IngestionEventKind.VERIFICATION_WARNING)
        assert warning.step_complete
        assert warning.messages[0].text == "Warning: Summary for a.py could not be verified in storage."
        assert events[-1].report.unverified == 1
        assert events[-1].messages[0].text == "Processed 1 files. Found 0 summaries in storage."

    def test_truncation_event_precedes_summary(self, completion, store, sleeper):
        pipeline = IngestionPipeline(completion=completion, store=store, max_content_chars=5, sleep=sleeper)

        events = _run(pipeline, [InMemorySourceFile("big.txt", "0123456789")])

        assert _kinds(events)[:3] == [
            IngestionEventKind.FILE_STARTED,
            IngestionEventKind.FILE_TRUNCATED,
            IngestionEventKind.FILE_SUMMARIZED,
        ]
        assert events[1].messages[0].text == "File big.txt was truncated for API analysis due to its size."
        assert not events[1].step_complete
        assert completion.prompts[0].endswith("01234" + TRUNCATION_MARKER)
