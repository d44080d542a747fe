# stockfighter/config/constants.py
from stockfighter.config.spec import ConfigSpec

DEFAULT_BASE_URL = "https://api.stockfighter.io/ob/api"

CONFIG_SPECS = {
    'api_key': ConfigSpec(
        env_var="STOCKFIGHTER_API_KEY",
        type=str,
        default="",
        description="API key sent as X-Starfighter-Authorization, plain or enc:<fernet token>"
    ),
    'base_url': ConfigSpec(
        env_var="STOCKFIGHTER_BASE_URL",
        type=str,
        default=DEFAULT_BASE_URL,
        validator=lambda x: x.startswith(("http://", "https://")),
        description="Root of the order book API"
    ),
    'timeout': ConfigSpec(
        env_var="STOCKFIGHTER_TIMEOUT",
        type=float,
        default=10.0,
        validator=lambda x: 0 < x <= 120,
        description="Per-request transport timeout (seconds)"
    ),
    'debug': ConfigSpec(
        env_var="STOCKFIGHTER_DEBUG",
        type=bool,
        default=False,
        description="Log requests and responses at DEBUG level"
    ),
    'encryption_key': ConfigSpec(
        env_var="STOCKFIGHTER_ENCRYPTION_KEY",
        type=str,
        default="",
        description="Fernet key used to decrypt an enc:-prefixed API key"
    ),
}
