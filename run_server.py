"""
Cleaner App API Runner
Run this as a separate process: python run_server.py
"""

import logging
import os
import sys
from pathlib import Path

import uvicorn

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")  # noqa: S104 - bind inside container
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"🚀 Starting Cleaner App API on {host}:{port}...")
    try:
        uvicorn.run("cleaner_app.main:app", host=host, port=port)
    except KeyboardInterrupt:
        logger.info("👋 Server stopped by user")
    except Exception as e:
        logger.error(f"❌ Server crashed: {e}")
        sys.exit(1)
