"""
interfaces/mcp_server.py
──────────────────────────────────────────────────────────────────────────────
NACE MCP Server — exposes the classification lookups as MCP tools.

Run with:
    fastmcp run nace_mcp/interfaces/mcp_server.py:mcp
    python -m nace_mcp.interfaces.mcp_server
    nace-mcp                      (installed console script)

Set MCP_TRANSPORT=streamable-http (plus MCP_HOST / MCP_PORT) for HTTP mode.
Logs go to stderr so they never mix with stdio protocol frames.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from nace_mcp.config.settings import get_settings
from nace_mcp.domain.exceptions import InvalidInputError, NACEError, NotFoundError
from nace_mcp.services.container import get_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(server):
    """Build the classification index before the first request is served."""
    engine = get_engine()
    logger.info("NACE index ready | entries=%d", len(engine.index))
    yield {}


mcp = FastMCP(
    name="nace-mcp",
    lifespan=lifespan,
    instructions=(
        "Lookup server for the NACE Rev. 2.1 statistical classification of "
        "economic activities (sections, divisions, groups, classes). "
        "Use nace_browse to walk the hierarchy, nace_search for label "
        "substrings, and nace_suggest to classify a free-text activity."
    ),
)


def _handle_error(e: Exception) -> None:
    """Convert domain errors into MCP ToolErrors."""
    if isinstance(e, (NotFoundError, InvalidInputError)):
        raise ToolError(str(e))
    if isinstance(e, NACEError):
        raise ToolError(f"NACE lookup failed: {e}")
    raise e


# ==================== Lookup Tools ====================


@mcp.tool(
    description=(
        "Returns full details for a single NACE Rev. 2.1 code: code, label, "
        "level (section/division/group/class), and parent code. "
        "Accepts e.g. 'A', '01', '01.1', '01.11'."
    ),
    tags={"lookup"},
)
def nace_get(code: str) -> dict:
    """Get one entry by code."""
    try:
        return get_engine().get(code).model_dump(mode="json")
    except Exception as e:
        _handle_error(e)


@mcp.tool(
    description=(
        "Returns direct children of a NACE code (code + label only). "
        "Omit parent_code to get all 22 top-level sections. Max 50 results."
    ),
    tags={"lookup"},
)
def nace_browse(parent_code: str = "") -> list[dict]:
    """List children of a code, or the sections when parent_code is empty."""
    try:
        items = get_engine().browse(parent_code or None)
        return [i.model_dump(mode="json") for i in items]
    except Exception as e:
        _handle_error(e)


# ==================== Matching Tools ====================


@mcp.tool(
    description=(
        "Case-insensitive substring search across all NACE Rev. 2.1 activity "
        "labels. Returns up to 10 matches with code, label, and level."
    ),
    tags={"search"},
)
def nace_search(query: str) -> list[dict]:
    """Substring search over labels."""
    try:
        hits = get_engine().search(query)
        return [h.model_dump(mode="json") for h in hits]
    except Exception as e:
        _handle_error(e)


@mcp.tool(
    description=(
        "Fuzzy-match a free-text activity description to NACE Rev. 2.1 codes. "
        "Tokenizes the input, scores by matched terms, and returns the top 5 "
        "candidates with a reason. Ideal for AI agents classifying business "
        "activities."
    ),
    tags={"search"},
)
def nace_suggest(activity_description: str) -> list[dict] | str:
    """Suggest codes for a free-text description."""
    try:
        response = get_engine().suggest(activity_description)
        if not response.has_tokens:
            return response.message
        return [s.model_dump(mode="json") for s in response.results]
    except Exception as e:
        _handle_error(e)


# ==================== Entry Point ====================


def main():
    """Run the MCP server. Set MCP_TRANSPORT=streamable-http for HTTP mode."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    if settings.mcp_transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(
            transport=settings.mcp_transport,
            host=settings.mcp_host,
            port=settings.mcp_port,
        )


if __name__ == "__main__":
    main()
