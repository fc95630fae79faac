"""Load environment variables before the FastAPI app is built.

With ENV="dev" (the default) variables come from a local .env.dev file. With
ENV="staging" or "prod" they are expected to be injected by the deployment.
"""

import os
import sys
from typing import Literal
from dotenv import load_dotenv

EnvironmentName = Literal["dev", "staging", "prod"]

# The app refuses to start without these.
REQUIRED_ENV_VARS = [
    "DATABASE_URL",
    "IDENTITY_PROVIDER_URL",
    "JWT_AUDIENCE",
]


def validate_required_env_vars() -> None:
    """Exit with a readable message if any required variable is missing."""
    missing = [var for var in REQUIRED_ENV_VARS if not os.getenv(var)]
    if missing:
        print(
            f"ERROR: Missing required environment variables: {', '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)


def get_current_environment() -> EnvironmentName:
    """Get the current environment (dev, staging, or prod)."""
    env = os.getenv("ENV", "dev")
    if env in ("dev", "staging", "prod"):
        return env  # type: ignore[return-value]
    raise ValueError(f"Invalid ENV value: {env}. Must be 'dev', 'staging', or 'prod'.")


_env = get_current_environment()
if _env == "dev":
    load_dotenv(".env.dev")

validate_required_env_vars()
