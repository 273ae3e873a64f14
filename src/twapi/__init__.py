"""twapi package exports."""

from .client import USER_AGENT, Engine
from .config import (
    EnvConfig,
    MissingCredentialsError,
    MissingServerError,
    create_engine_from_env,
    create_session_from_env,
    load_env_config,
)
from .errors import (
    DecodeError,
    EncodingError,
    HTTPError,
    MissingBearerTokenError,
    MissingIdentifierError,
    RequestBuildError,
    TransportError,
    TwapiError,
)
from .logging import setup_logging
from .session import (
    BasicAuth,
    BearerToken,
    BearerTokenContext,
    Cookie,
    Session,
    reset_bearer_token,
    use_bearer_token,
)

__all__ = [
    # Engine
    "Engine",
    "USER_AGENT",
    # Sessions
    "Session",
    "BasicAuth",
    "BearerToken",
    "BearerTokenContext",
    "Cookie",
    "use_bearer_token",
    "reset_bearer_token",
    # Exceptions
    "TwapiError",
    "EncodingError",
    "RequestBuildError",
    "TransportError",
    "HTTPError",
    "DecodeError",
    "MissingIdentifierError",
    "MissingBearerTokenError",
    # Configuration
    "EnvConfig",
    "MissingServerError",
    "MissingCredentialsError",
    "load_env_config",
    "create_session_from_env",
    "create_engine_from_env",
    "setup_logging",
]
