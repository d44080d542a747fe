# stockfighter/config/manager.py
import os
from typing import Any, Mapping, Optional

from cryptography.fernet import Fernet, InvalidToken
from dotenv import load_dotenv

from stockfighter.logger import logger
from .constants import CONFIG_SPECS

ENCRYPTED_PREFIX = 'enc:'


class ConfigManager:
    """Validated client settings read from the environment (and .env)."""

    def __init__(self, env: Optional[Mapping[str, str]] = None, dotenv_path: Optional[str] = None):
        if env is None:
            load_dotenv(dotenv_path)
            env = os.environ
        self._env = env
        self._specs = CONFIG_SPECS
        self._cache = {}

    def get(self, key: str) -> Any:
        """Get validated config value"""
        if key not in self._specs:
            logger.error(f"Attempted to access unknown config key: {key}")
            raise KeyError(f"Unknown config key: {key}")

        if key in self._cache:
            return self._cache[key]

        spec = self._specs[key]
        value = spec.validate(self._env.get(spec.env_var))
        if key == 'api_key':
            value = self._decrypt(value)

        self._cache[key] = value
        return value

    def get_all(self) -> dict:
        """Get all validated config values"""
        return {key: self.get(key) for key in self._specs.keys()}

    def _decrypt(self, value: str) -> str:
        """Decrypt an enc:-prefixed value, pass anything else through"""
        if not value or not value.startswith(ENCRYPTED_PREFIX):
            return value

        key = self.get('encryption_key')
        if not key:
            raise ValueError(
                f"Encrypted API key found but {self._specs['encryption_key'].env_var} is not set"
            )

        try:
            cipher = Fernet(key.encode())
            return cipher.decrypt(value[len(ENCRYPTED_PREFIX):].encode()).decode()
        except (InvalidToken, ValueError) as e:
            logger.error("Decryption failed - invalid token or key mismatch")
            raise ValueError("Could not decrypt API key") from e


def encrypt_value(value: str, key: str) -> str:
    """Produce the enc:-prefixed form accepted by ConfigManager"""
    return ENCRYPTED_PREFIX + Fernet(key.encode()).encrypt(value.encode()).decode()
