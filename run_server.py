import os

import uvicorn

from app.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def check_auth_token() -> None:
    """
    Warn early when the pre-shared RTE authorization string is missing.

    The service still starts: /health answers and the sync loop keeps retrying,
    so the token can be fixed without a redeploy of the surrounding stack.
    """
    if not settings.auth_token:
        logger.warning("ECOWATTER_AUTH_TOKEN is not set; every token request will fail.")


if __name__ == "__main__":
    setup_logging(level=settings.log_level)
    check_auth_token()

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8080)),
        reload=False,
        log_config=None,
    )
