# repochat/query/prompts.py
"""Prompt templates for answering questions about an ingested repository."""

from __future__ import annotations

from repochat.core.models import QueryIntent

FILE_COUNT_TEMPLATE = """The repository contains {file_count} files, as determined by the number of file summaries stored. Below are the detailed summaries of these files for additional context, if needed.

Repository File Summaries:
{context}

User Query: {query}"""

REPO_OVERVIEW_TEMPLATE = """You are an AI assistant analyzing a codebase. Below are detailed summaries of the files in the current repository. Based on these summaries, provide a high-level overview (3-5 sentences) of the repository's purpose, main functionality, and key components. Highlight the overall architecture, primary features, and any notable technologies or patterns used. If possible, infer the type of application or system this repository represents.

Repository File Summaries:
{context}

User Query: {query}"""

GENERAL_TEMPLATE = """You are an AI assistant analyzing a codebase. Below are detailed summaries of the files in the current repository to provide context for answering the user's query. Use this information to give accurate, codebase-specific responses, including references to specific files, functions, or components where relevant. If the query is broad, leverage the summaries to infer relationships or provide insights about the codebase structure.

Repository File Summaries:
{context}

User Query: {query}"""

TEMPLATES = {
    QueryIntent.FILE_COUNT: FILE_COUNT_TEMPLATE,
    QueryIntent.REPO_OVERVIEW: REPO_OVERVIEW_TEMPLATE,
    QueryIntent.GENERAL: GENERAL_TEMPLATE,
}


def build_query_prompt(intent: QueryIntent, *, context: str, query: str, file_count: int) -> str:
    return TEMPLATES[intent].format(context=context, query=query, file_count=file_count)
