#!/usr/bin/env python3
"""
Main entry point for RagRouter.

    python -m ragrouter chat [options]   # terminal chat
    python -m ragrouter web [options]    # FastAPI + Gradio web interface
"""

import sys


def main(argv=None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    command = argv.pop(0) if argv and not argv[0].startswith("-") else "chat"

    if command == "chat":
        from .query.cli import main as chat_main

        chat_main(argv)
    elif command == "web":
        from .web.cli import main as web_main

        web_main(argv)
    else:
        print(f"Unknown command '{command}'. Use 'chat' or 'web'.", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
