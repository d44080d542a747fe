# stockfighter/config/spec.py
from typing import Type, Callable, Optional, Any
from pydantic import validate_call
from stockfighter.logger import logger


class ConfigSpec:
    """Self-validating configuration specification"""

    def __init__(
        self,
        env_var: str,
        type: Type = str,
        default: Any = None,
        validator: Optional[Callable[[Any], bool]] = None,
        description: str = ""
    ):
        self.env_var = env_var
        self.type = type
        self.default = default
        self.validator = validator or (lambda x: True)
        self.description = description

    @validate_call
    def validate(self, value: Optional[str]) -> Any:
        """Convert and validate a raw environment value"""
        if value is None:
            logger.debug(f"Using default for {self.env_var}: {self.default}")
            return self.default

        try:
            # Special handling for bools
            if self.type == bool:
                converted = str(value).strip().lower() in ('true', '1', 't', 'yes')
            else:
                converted = self.type(value.strip())

            if not self.validator(converted):
                raise ValueError(f"Validation failed for value: {value}")

            return converted

        except (ValueError, TypeError) as e:
            logger.warning(
                f"Config validation error for {self.env_var} (using default {self.default}): {str(e)}"
            )
            return self.default
