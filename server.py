"""
MCP Server for lime-soda softening design calculations.

This server provides stoichiometric lime and soda ash dosing, finished water
projection, sludge production, Langelier Saturation Index and CCPP, plus
optional operational advice from a remote language model.
"""

import logging

from mcp.server.fastmcp import FastMCP

from utils import config

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(config.LOG_FILE),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger("lime-softening-mcp")

# Initialize the MCP server
mcp = FastMCP("lime-softening-calculator")

from tools.lime_softening import calculate_lime_soda_softening, generate_softening_advice

mcp.tool()(calculate_lime_soda_softening)   # Tool 1: Doses, finished water, sludge, LSI/CCPP
mcp.tool()(generate_softening_advice)       # Tool 2: Operational advice for the same design

if __name__ == "__main__":
    logger.info("Starting Lime Softening MCP server...")
    logger.info("Registered 2 tools:")
    logger.info("  1. calculate_lime_soda_softening: Lime/soda ash dosing and finished water stability")
    logger.info("  2. generate_softening_advice: Operational advice from the advice service")
    if config.get_api_key() is None:
        logger.warning("No GEMINI_API_KEY/API_KEY set; generate_softening_advice will report key_required")
    else:
        logger.info(f"Advice model: {config.ADVICE_MODEL}")

    mcp.run()
