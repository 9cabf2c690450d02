#!/usr/bin/env python
"""
Entry point for running the Clarify server.

This script sets up the Python path and runs the enrichment API.
"""

import sys
from pathlib import Path

# Add src directory to Python path
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

# Check for required dependencies
try:
    from dotenv import load_dotenv
    import uvicorn
except ImportError as e:
    print(f"""
Error: Missing required dependencies

{e}

Please make sure you have activated your virtual environment and installed the project:

    pip install -e .

Then try running again:
    python run.py
""")
    sys.exit(1)

# Load environment variables
load_dotenv()

from clarify.config import ServerConfig
from clarify.logging_config import configure_logging

config = ServerConfig.from_env()

# Configure logging before importing application modules
configure_logging(level=config.log_level, format_style=config.log_format)

from clarify.main import app


def main():
    """Run the Clarify server."""
    print(f"Clarify starting on http://{config.host}:{config.port}")
    print(f"API docs available at http://{config.host}:{config.port}/docs")

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()
