# mcpstack - Project MCP Stack Manager
# ABOUTME: Version information
__version__ = "0.1.0"

# ABOUTME: Export core data models
# ABOUTME: Export config reading/writing functions
from mcpstack.config import (
    add_server_to_config,
    get_config_path,
    read_config,
    remove_server_from_config,
    write_config,
)
from mcpstack.models import ConfigFile, ConnectorDefinition, ServerConfig, StackTemplate

# ABOUTME: Export utility functions
from mcpstack.utils import (
    ValidationError,
    expand_server_config,
    expand_template,
    validate_server_config,
)

__all__ = [
    "__version__",
    "ConfigFile",
    "ConnectorDefinition",
    "ServerConfig",
    "StackTemplate",
    "get_config_path",
    "read_config",
    "write_config",
    "add_server_to_config",
    "remove_server_from_config",
    "expand_template",
    "expand_server_config",
    "ValidationError",
    "validate_server_config",
]
