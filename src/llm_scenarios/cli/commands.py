"""
CLI commands - interactive loops for the four scenarios.

Each command follows a consistent pattern:
1. Load environment (.env) and configure logging
2. Build providers from config (or fakes with --mock)
3. Read-eval-print until "exit" or a blank line
4. Return exit code

Configuration errors are fatal before any remote call. Errors raised while
handling one input are logged and the loop continues with the next one.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from dotenv import load_dotenv

from llm_scenarios.config import AppConfig, completion_only_from_env
from llm_scenarios.core import ChatMessage, ConfigurationError, LLMScenarioError
from llm_scenarios.observability import (
    SCENARIO_MOCK,
    SCENARIO_NAME,
    get_tracer,
    init_phoenix,
    shutdown_phoenix,
)

logger = logging.getLogger(__name__)

EXIT_WORD = "exit"

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _load_env() -> None:
    """Load environment variables from .env file."""
    load_dotenv()


def _configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def repl(
    prompt: str,
    handler: Callable[[str], str],
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> int:
    """
    Read-eval-print loop.

    Stops on "exit", blank input or EOF. Returns the number of inputs handled.
    """
    handled = 0
    while True:
        try:
            line = input_fn(prompt)
        except EOFError:
            break

        line = line.strip()
        if not line or line.lower() == EXIT_WORD:
            break

        try:
            output_fn(handler(line))
        except LLMScenarioError as e:
            logger.error(f"{type(e).__name__}: {e}")
            output_fn(f"Error: {e}")
        handled += 1

    output_fn("Goodbye!")
    return handled


# ---------------------------------------------------------------------------
# PROVIDER WIRING
# ---------------------------------------------------------------------------


def _mock_reply(messages: Sequence[ChatMessage]) -> str:
    user = next((m.content for m in messages if m.role == "user"), "")
    return f"[mock] Received {len(user)} characters of prompt."


def _build_completion(use_mock: bool):
    from llm_scenarios.completion import MockCompletion, get_completion_provider

    if use_mock:
        return MockCompletion(_mock_reply)
    return get_completion_provider(completion_only_from_env())


def _build_orchestrator(use_mock: bool):
    from llm_scenarios.completion import MockCompletion, get_completion_provider
    from llm_scenarios.embeddings import get_embedding_provider
    from llm_scenarios.rag import RAGOrchestrator
    from llm_scenarios.retrieval import get_vector_index

    if use_mock:
        embeddings = get_embedding_provider(use_mock=True)
        index = get_vector_index(dimensions=embeddings.dimensions, use_memory=True)
        return RAGOrchestrator(embeddings, index, MockCompletion(_mock_reply))

    config = AppConfig.from_env()
    embeddings = get_embedding_provider(
        config.embedding, dimensions=config.embedding_dimensions
    )
    # The index is declared with whatever the embedding model actually returns
    index = get_vector_index(config.vector_index, dimensions=embeddings.dimensions)
    completion = get_completion_provider(config.completion)
    return RAGOrchestrator(embeddings, index, completion)


# ---------------------------------------------------------------------------
# SCENARIOS
# ---------------------------------------------------------------------------


def run_chat_cli(args: argparse.Namespace, input_fn: InputFn = input, output_fn: OutputFn = print) -> int:
    """Minimal chat: one completion per question."""
    from llm_scenarios.chat import ChatAssistant

    assistant = ChatAssistant(_build_completion(args.mock))

    output_fn("=" * 60)
    output_fn("CHAT (type 'exit' or press Enter on an empty line to quit)")
    output_fn("=" * 60)
    repl("\nYou: ", assistant.ask, input_fn, output_fn)
    return 0


def run_rag_cli(args: argparse.Namespace, input_fn: InputFn = input, output_fn: OutputFn = print) -> int:
    """RAG: ingest the sample documents, then answer questions from them."""
    from llm_scenarios.rag import seed_index

    orchestrator = _build_orchestrator(args.mock)

    output_fn("=" * 60)
    output_fn("RETRIEVAL-AUGMENTED GENERATION")
    output_fn("=" * 60)

    try:
        if args.skip_ingest:
            orchestrator.setup()
        else:
            count = seed_index(orchestrator)
            output_fn(f"Indexed {count} sample documents.")

        # repl() handles per-question errors itself
        repl(
            "\nQuestion: ",
            lambda question: orchestrator.query(question, top_k=args.top_k),
            input_fn,
            output_fn,
        )
    except LLMScenarioError as e:
        logger.error(f"Index setup failed: {e}")
        return 1
    finally:
        orchestrator.close()
    return 0


def _format_statistics(stats) -> str:
    if stats.is_empty:
        return "No statistics could be extracted from the response."
    lines = []
    if stats.row_count is not None:
        lines.append(f"Rows: {stats.row_count}")
    for col in stats.columns:
        lines.append(
            f"  {col.column}: mean={col.mean} median={col.median} min={col.min} max={col.max}"
        )
    for note in stats.notes:
        lines.append(f"  - {note}")
    return "\n".join(lines)


def run_analytics_cli(args: argparse.Namespace, input_fn: InputFn = input, output_fn: OutputFn = print) -> int:
    """Analytics: questions about a CSV file ('insights' and 'stats' are shortcuts)."""
    from llm_scenarios.analytics import (
        DataAnalyst,
        describe_dataset,
        get_sample_sales_data,
        load_csv,
    )

    if args.csv:
        try:
            rows = load_csv(args.csv)
        except OSError as e:
            logger.error(f"Cannot read {args.csv}: {e}")
            return 1
    else:
        rows = get_sample_sales_data()

    analyst = DataAnalyst(_build_completion(args.mock))

    def handle(question: str) -> str:
        if question.lower() == "insights":
            return analyst.generate_insights(rows)
        if question.lower() == "stats":
            return _format_statistics(analyst.calculate_statistics(rows))
        return analyst.ask(rows, question)

    output_fn("=" * 60)
    output_fn("DATA ANALYTICS")
    output_fn("=" * 60)
    output_fn(describe_dataset(rows))
    output_fn("\nAsk a question, or type 'insights' or 'stats'.")
    repl("\nQuestion: ", handle, input_fn, output_fn)
    return 0


def run_text_cli(args: argparse.Namespace, input_fn: InputFn = input, output_fn: OutputFn = print) -> int:
    """Text processing: summary, category, keywords and sentiment for each input."""
    from llm_scenarios.text_processing import TextProcessor

    processor = TextProcessor(_build_completion(args.mock))

    def handle(text: str) -> str:
        analysis = processor.process(text)
        return "\n".join([
            f"Summary: {analysis.summary}",
            f"Category: {analysis.category}",
            f"Keywords: {', '.join(analysis.keywords) or '-'}",
            f"Sentiment: {analysis.sentiment.sentiment} "
            f"({analysis.sentiment.confidence:.0%}) {analysis.sentiment.explanation}",
        ])

    output_fn("=" * 60)
    output_fn("TEXT PROCESSING")
    output_fn("=" * 60)
    repl("\nText: ", handle, input_fn, output_fn)
    return 0


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    # Also accepted after the subcommand; SUPPRESS keeps a flag given
    # before it from being reset
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--mock",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Use in-memory fakes instead of remote services",
    )
    common.add_argument(
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Debug logging",
    )

    parser = argparse.ArgumentParser(
        prog="llm-scenarios",
        description="Walkthrough scenarios for hosted LLM and vector search APIs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  chat        Minimal chat completion
  rag         Retrieval-augmented generation over sample documents
  analytics   Ask questions about CSV data
  text        Summarize, categorize, extract keywords, analyze sentiment

Examples:
  llm-scenarios chat
  llm-scenarios rag --top-k 5
  llm-scenarios analytics --csv sales.csv
  llm-scenarios text --mock          # no network, no configuration needed

Environment:
  PHOENIX_ENABLED=true traces every run and OpenAI call to Arize Phoenix
        """,
    )
    parser.add_argument("--mock", action="store_true", help="Use in-memory fakes instead of remote services")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("chat", parents=[common], help="Minimal chat completion")

    rag = sub.add_parser("rag", parents=[common], help="Retrieval-augmented generation")
    rag.add_argument("--top-k", type=int, default=3, help="Documents retrieved per question")
    rag.add_argument("--skip-ingest", action="store_true", help="Do not ingest the sample documents")

    analytics = sub.add_parser("analytics", parents=[common], help="CSV data analytics")
    analytics.add_argument("--csv", help="Path to a CSV file (default: built-in sales sample)")

    sub.add_parser("text", parents=[common], help="Text summarization and categorization")
    return parser


COMMANDS = {
    "chat": "run_chat_cli",
    "rag": "run_rag_cli",
    "analytics": "run_analytics_cli",
    "text": "run_text_cli",
}


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main CLI entry point with subcommands.

    Usage:
        llm-scenarios chat
        llm-scenarios rag [--top-k N] [--skip-ingest]
        llm-scenarios analytics [--csv PATH]
        llm-scenarios text

    Every command also takes --mock and --verbose.
    """
    _load_env()
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "rag" and args.top_k <= 0:
        logger.error("--top-k must be positive")
        return 2

    init_phoenix()
    handler = getattr(sys.modules[__name__], COMMANDS[args.command])
    try:
        with get_tracer().start_span(
            f"scenario.{args.command}",
            attributes={SCENARIO_NAME: args.command, SCENARIO_MOCK: args.mock},
        ):
            return handler(args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    finally:
        shutdown_phoenix()


if __name__ == "__main__":
    sys.exit(main())
