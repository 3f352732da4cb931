"""
CLI module - unified command-line interface.

Provides entry points for the chat, RAG, analytics and text scenarios.
"""

from llm_scenarios.cli.commands import (
    main,
    repl,
    run_chat_cli,
    run_rag_cli,
    run_analytics_cli,
    run_text_cli,
)

__all__ = [
    "main",
    "repl",
    "run_chat_cli",
    "run_rag_cli",
    "run_analytics_cli",
    "run_text_cli",
]
