# =============================================================================
# main.py  —  Entry Point for the Cloudflare KV MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the `cloudflare-kv-mcp` script)
#
# WHAT HAPPENS:
#   1. Loads a local .env file into the environment (if there is one)
#   2. Reads the Cloudflare settings (core/config.py)
#   3. Builds the FastMCP server with the four KV tools (tools/mcp_server.py)
#   4. Serves MCP over stdin/stdout until the client goes away
#
# EXIT CODES:
#   0  the client disconnected, or Ctrl-C
#   1  the server could not start; the cause is logged to stderr first
#
# MCP CLIENT CONFIG EXAMPLE (e.g. a desktop agent's server list):
#   {
#     "command": "uv",
#     "args": ["run", "python", "main.py"],
#     "env": {
#       "CLOUDFLARE_ACCOUNT_ID": "...",
#       "CLOUDFLARE_API_TOKEN": "...",
#       "CLOUDFLARE_KV_NAMESPACE_ID": "..."
#     }
#   }
# =============================================================================

import logging
import sys

from dotenv import load_dotenv


def main() -> None:
    # Load .env BEFORE reading the config.  Variables that are already set in
    # the real environment win over the file (override=False is the default).
    load_dotenv()

    try:
        from tools.mcp_server import run_server

        run_server()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        logging.getLogger(__name__).exception("Fatal error running server: %s", exc)
        sys.exit(1)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
