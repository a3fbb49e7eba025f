"""
FastAPI application entry point.

Loads configuration from the environment and builds the app. The process
exits at import time if the completion API key is missing.

Run dev server:
    uvicorn tripplanner.main:app --reload --port 3000
"""

import logging
import sys

from dotenv import load_dotenv

from tripplanner.app import create_app
from tripplanner.config import ConfigurationError, PlannerConfig
from tripplanner.shared.logging.config import setup_logging


load_dotenv()

try:
    config = PlannerConfig.from_env()
except ConfigurationError as e:
    setup_logging()
    logging.getLogger(__name__).error(f"Startup aborted: {e}")
    sys.exit(1)

setup_logging(
    level=config.log_level,
    json_format=config.log_json,
    log_file=config.log_file,
)

app = create_app(config)

logging.getLogger(__name__).info(
    f"Backend ready | model={config.model}, environment={config.environment}, "
    f"port={config.port}"
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=config.port)
