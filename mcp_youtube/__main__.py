"""Package entry point for ``python -m mcp_youtube``.

WHY: MCP clients launch servers as a command line. ``python -m
mcp_youtube`` starts the stdio server without needing the console script
on PATH.

HOW: Delegates to the CLI's main(). With no subcommand the CLI serves
over stdio.
"""

from mcp_youtube.cli import main

if __name__ == "__main__":
    main()
