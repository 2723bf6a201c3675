"""
Main entrypoint: oracle API server.

Builds the aggregator from env (ORACLE_PRIVATE_KEY, SOLANA_RPC_URL,
LEDGER_PROGRAM_ID, LEDGER_PAYER_KEY, REGISTRY_API_URL, ...) and serves it with
uvicorn on API_HOST:ORACLE_PORT.

Equivalent: uvicorn asset_oracle.api_server.app:app --host 0.0.0.0 --port 8080
"""

import os
import sys

# Configure structured JSON logging before other imports that may log
from asset_oracle.oracle_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Build the oracle from settings and run the FastAPI server in the main thread."""
    from asset_oracle.api_server.server import create_app
    from asset_oracle.config import get_settings
    from asset_oracle.core.exceptions import OracleError
    from asset_oracle.pipeline import build_aggregator

    try:
        settings = get_settings()
        aggregator = build_aggregator(settings)
    except OracleError as e:
        logger.error("main_config_error", code=e.code, error=e.message)
        sys.exit(1)

    app = create_app(aggregator)
    import uvicorn

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
