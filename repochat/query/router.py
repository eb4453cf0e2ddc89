# repochat/query/router.py
"""
QueryRouter - answers a question from the stored summaries of one session.

Flow:
1. Load all artifacts for the session (none -> fixed NO_DATA answer, no call)
2. Render the bounded context block
3. Classify intent and pick the prompt template
4. Dispatch to the completion service and classify the outcome
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from repochat.core.config.schema import QuerySettings
from repochat.core.models import AnswerStatus, QueryAnswer, QueryIntent
from repochat.llm.base import CompletionService
from repochat.logging.logger import get_logger
from repochat.logging.tags import QUERY
from repochat.query.context import MAX_CONTEXT_CHARS, build_context
from repochat.query.prompts import build_query_prompt
from repochat.query.routing import IntentClassifier
from repochat.storage.artifacts import ArtifactStore

logger = get_logger(__name__)

NO_DATA_RESPONSE = "No repository data available. Please upload and process a repository first."


@dataclass(frozen=True)
class RoutedPrompt:
    intent: QueryIntent
    prompt: str
    artifact_count: int


class QueryRouter:
    """
    Stateless query processor over an ArtifactStore.

    Usage:
        router = QueryRouter(completion=client, store=store)
        answer = router.answer("repo-abc", "What is this repo about?")
        print(answer.text)
    """

    def __init__(
        self,
        *,
        completion: CompletionService,
        store: ArtifactStore,
        classifier: Optional[IntentClassifier] = None,
        max_context_chars: int = MAX_CONTEXT_CHARS,
        include_failed_summaries: bool = False,
    ) -> None:
        self._completion = completion
        self._store = store
        self._classifier = classifier or IntentClassifier()
        self.max_context_chars = max_context_chars
        self.include_failed_summaries = include_failed_summaries

    @classmethod
    def from_settings(
        cls,
        settings: QuerySettings,
        *,
        completion: CompletionService,
        store: ArtifactStore,
    ) -> "QueryRouter":
        return cls(
            completion=completion,
            store=store,
            max_context_chars=settings.max_context_chars,
            include_failed_summaries=settings.include_failed_summaries,
        )

    def build_prompt(self, session_id: str, query: str) -> Optional[RoutedPrompt]:
        """
        Classify a query and render its prompt.

        Returns None when the session has no stored artifacts.
        """
        artifacts = self._store.get_all_summaries(session_id)
        if not artifacts:
            return None

        usable = artifacts if self.include_failed_summaries else [a for a in artifacts if a.ok]
        if len(usable) < len(artifacts):
            logger.info(
                f"{QUERY} Excluding {len(artifacts) - len(usable)} failed summaries from context"
            )

        context = build_context(usable, self.max_context_chars)
        intent = self._classifier.classify(query)
        prompt = build_query_prompt(
            intent,
            context=context,
            query=query,
            file_count=len(artifacts),
        )
        return RoutedPrompt(intent=intent, prompt=prompt, artifact_count=len(artifacts))

    def answer(self, session_id: str, query: str) -> QueryAnswer:
        routed = self.build_prompt(session_id, query)
        if routed is None:
            logger.info(f"{QUERY} No summaries stored for {session_id}")
            return QueryAnswer(text=NO_DATA_RESPONSE, status=AnswerStatus.NO_DATA)

        logger.info(
            f"{QUERY} Routing query as {routed.intent.value} over {routed.artifact_count} summaries"
        )

        result = self._completion.complete(routed.prompt)
        if result.ok:
            status = AnswerStatus.ANSWERED
        elif result.blocked:
            status = AnswerStatus.BLOCKED
        else:
            status = AnswerStatus.FAILED

        return QueryAnswer(
            text=result.display_text,
            status=status,
            intent=routed.intent,
            artifact_count=routed.artifact_count,
        )
