# repochat/ingest/prompts.py
"""Summarization prompt for one source file."""

from __future__ import annotations

SUMMARIZE_FILE_TEMPLATE = """Analyze the following code from the file named "{file_name}". Provide a detailed summary (4-6 sentences) that includes:
- The main purpose of the file.
- Key functions, classes, or components defined (if any).
- Notable dependencies or imports used.
- How the file interacts with other parts of the codebase (e.g., data flow, API calls, or UI rendering).
- Any unique patterns, configurations, or notable implementations.
Output format should be plain text, clear, and structured for easy reading.

CODE:
{content}"""


def build_summary_prompt(file_name: str, content: str) -> str:
    return SUMMARIZE_FILE_TEMPLATE.format(file_name=file_name, content=content)
