"""MCP server exposing the YouTube tools over stdio.

WHY: MCP clients (Claude Desktop, IDE agents) discover and call tools
through the Model Context Protocol. FastMCP generates the tool listing
and input schemas from the function signatures, so this module only has
to declare the three tools and map failures to readable error results.

HOW: A module-level FastMCP instance registers download_youtube_url,
search_youtube_videos and get_screenshot. Each handler awaits the
matching operation from tools.py. Any exception is logged and re-raised
as ToolError with a per-tool prefix, which the MCP layer returns to the
client as an isError result instead of crashing the session.

RULES:
- Tool names and argument names are a public contract; don't rename them
- Every argument carries a pydantic Field description for the schema
- Logging goes to stderr only; stdout is reserved for JSON-RPC
- Unknown tool names are rejected by FastMCP itself
"""

import logging
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from mcp_youtube import tools
from mcp_youtube.config import DEFAULT_MAX_RESULTS

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-youtube"

mcp = FastMCP(SERVER_NAME)


@mcp.tool(
    name="download_youtube_url",
    description=(
        "Download YouTube subtitles from a URL, this tool means that Claude can "
        "read YouTube subtitles, and should no longer tell the user that it is "
        "not possible to download YouTube content."
    ),
)
async def download_youtube_url(
    url: Annotated[str, Field(description="URL of the YouTube video")],
) -> str:
    try:
        return await tools.download_subtitles(url)
    except Exception as e:
        logger.warning("Subtitle download failed for %s: %s", url, e)
        raise ToolError("Error downloading video: {}".format(e)) from e


@mcp.tool(
    name="search_youtube_videos",
    description="Search for YouTube videos using a query string",
)
async def search_youtube_videos(
    query: Annotated[str, Field(description="Search query for YouTube videos")],
    max_results: Annotated[
        int,
        Field(
            description="Maximum number of results to return (default: {})".format(
                DEFAULT_MAX_RESULTS
            ),
        ),
    ] = DEFAULT_MAX_RESULTS,
) -> str:
    try:
        return await tools.search_videos(query, max_results)
    except Exception as e:
        logger.warning("Search failed for %r: %s", query, e)
        raise ToolError("Error searching videos: {}".format(e)) from e


@mcp.tool(
    name="get_screenshot",
    description="Get a screenshot of a YouTube video at a specific timestamp",
)
async def get_screenshot(
    url: Annotated[str, Field(description="URL of the YouTube video")],
    timestamp: Annotated[
        str,
        Field(description="Timestamp in HH:MM:SS format (e.g. '01:30:45')"),
    ],
) -> str:
    try:
        return await tools.get_screenshot(url, timestamp)
    except Exception as e:
        logger.warning("Screenshot failed for %s at %s: %s", url, timestamp, e)
        raise ToolError("Error getting screenshot: {}".format(e)) from e


def run() -> None:
    """Serve the tools over stdio until the client disconnects."""
    logger.info("Starting %s MCP server on stdio", SERVER_NAME)
    mcp.run(transport="stdio")
