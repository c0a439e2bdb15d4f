#!/usr/bin/env python3
"""
HTTP/SSE transport entrypoint for the Lime Softening MCP Server.
Imports the FastMCP instance from server.py and runs it over HTTP.
"""

import sys
import os

# Add the current directory to the Python path
sys.path.insert(0, os.path.dirname(__file__))

try:
    from server import mcp
    from utils import config
except ImportError as e:
    print(f"Failed to import FastMCP instance: {e}", file=sys.stderr)
    sys.exit(1)

if __name__ == "__main__":
    mcp.settings.host = config.HTTP_HOST
    mcp.settings.port = config.HTTP_PORT
    print("Starting Lime Softening MCP Server with HTTP transport...", file=sys.stderr)

    # streamable-http is preferred, sse is the legacy fallback
    try:
        mcp.run(transport="streamable-http")
    except Exception as e:
        print(f"Failed to start HTTP server: {e}", file=sys.stderr)
        print("Falling back to SSE transport...", file=sys.stderr)
        try:
            mcp.run(transport="sse")
        except Exception as e2:
            print(f"Failed to start SSE server: {e2}", file=sys.stderr)
            sys.exit(1)
