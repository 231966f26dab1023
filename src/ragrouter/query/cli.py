"""
Command-line interface for the RagRouter chatbot.
"""

import argparse
import logging
import os
import sys
import uuid

from ..utils.config import ASSISTANT_MODES, ConfigurationError, RagRouterConfig
from ..utils.logging import enable_request_logging, setup_logging
from .assistant import RagAssistant

logger = logging.getLogger(__name__)


def run_chat_session(assistant: RagAssistant, show_debug: bool = False) -> None:
    """
    Runs an interactive chat session in the terminal.
    """
    session_id = str(uuid.uuid4())
    print("--- Chat Session Started ---")
    print(f"Session ID: {session_id}")
    print("Type 'exit' to end the session.\n")

    while True:
        try:
            user_input = input("You: ")
            if user_input.lower().strip() == "exit":
                assistant.clear_session(session_id)
                print("Session ended and memory cleared. Goodbye!")
                break
            if not user_input.strip():
                continue

            response = assistant.ask(user_input, session_id)
            print(f"\nAssistant: {response.answer}")
            if show_debug:
                print("\n--- Routing ---")
                print(response.debug_info)

            print("\n" + "=" * 50 + "\n")

        except (KeyboardInterrupt, EOFError):
            assistant.clear_session(session_id)
            print("\nSession interrupted. Goodbye!")
            break
        except Exception as e:
            logger.error(f"An unexpected error occurred: {e}", exc_info=True)
            print(f"Sorry, an error occurred ({type(e).__name__}: {e}).")


def main(argv=None):
    """Main entry point for the CLI script."""
    parser = argparse.ArgumentParser(
        description="Run the RagRouter chatbot in your terminal."
    )
    parser.add_argument(
        "--mode",
        choices=ASSISTANT_MODES,
        help="Assistant mode (default: from config or 'router').",
    )
    parser.add_argument(
        "--documents-dir",
        help="Directory holding rag.pdf and finance.pdf.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print which retrievers the router selected after each answer.",
    )
    parser.add_argument("--config", help="Path to configuration file (.env)")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose (DEBUG) logging."
    )

    args = parser.parse_args(argv)

    # Command-line values take precedence over the environment
    if args.mode:
        os.environ["RAGROUTER_MODE"] = args.mode
    if args.documents_dir:
        os.environ["RAGROUTER_DOCUMENTS_DIR"] = args.documents_dir

    config = RagRouterConfig(args.config)
    setup_logging(logging.DEBUG if args.verbose else config.log_level)
    if config.log_requests:
        enable_request_logging()

    try:
        assistant = RagAssistant.from_config(config)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to initialize the chatbot: {e}", exc_info=True)
        sys.exit(1)

    run_chat_session(assistant, show_debug=args.debug)


if __name__ == "__main__":
    main()
