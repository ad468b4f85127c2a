# ABOUTME: Utility modules for mcpstack
# ABOUTME: Exports template expansion, credential helpers, and validation functions

from mcpstack.utils.env import (
    check_required_env,
    expand_server_config,
    expand_template,
    find_missing_credentials,
    is_sensitive,
    mask_value,
)
from mcpstack.utils.validation import (
    ValidationError,
    validate_command_exists,
    validate_server_config,
    validate_url,
)

__all__ = [
    "expand_template",
    "expand_server_config",
    "check_required_env",
    "find_missing_credentials",
    "is_sensitive",
    "mask_value",
    "ValidationError",
    "validate_command_exists",
    "validate_url",
    "validate_server_config",
]
