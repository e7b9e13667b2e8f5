# =============================================================================
# main.py  -  Entry Point for the Coupon MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the installed `coupon-mcp-server`)
#
# WHAT HAPPENS:
#   1. Loads .env (LOG_LEVEL, LOG_COLOR, COUPON_HTTP_TIMEOUT)
#   2. Configures logging to stderr
#   3. Serves the five coupon tools over the stdio transport
#
# The process exits with status 1 only if the transport itself cannot be
# set up; failures of individual tool calls never stop the server.
# =============================================================================

from dotenv import load_dotenv

# Must run before coupon_mcp.server is imported: the module-level server
# reads settings on import.
load_dotenv()

from coupon_mcp.server import run_stdio, setup_logging
from coupon_proxy.settings import get_settings


def main() -> None:
    setup_logging(get_settings().log_level)
    run_stdio()


if __name__ == "__main__":
    main()
