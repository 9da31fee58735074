"""CLI entry point: python -m emojiclicker.mcp [game_module]"""

from __future__ import annotations

import sys


def main() -> None:
    module_path = sys.argv[1] if len(sys.argv) > 1 else "emojiclicker.content"

    # Redirect stdout to stderr during module loading in case define_game() prints
    real_stdout = sys.stdout
    sys.stdout = sys.stderr
    try:
        from emojiclicker.cli import load_game

        catalog = load_game(module_path)
    finally:
        sys.stdout = real_stdout

    from emojiclicker.mcp.server import create_server

    server = create_server(catalog)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
