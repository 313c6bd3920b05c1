"""Configuration package for chatdeck.

Pydantic configuration models and loading utilities, re-exported at the
package level.
"""

from chatdeck.core.config.loader import (
    check_unexpanded_vars,
    expand_env_vars,
    expand_env_vars_recursive,
    load_config,
)
from chatdeck.core.config.models import (
    DEFAULT_LOCAL_BASE_URL,
    ChatConfig,
    Config,
    LoggingConfig,
    ProviderConfig,
    StoreConfig,
    default_providers,
)

__all__ = [
    # Models
    "DEFAULT_LOCAL_BASE_URL",
    "ChatConfig",
    "Config",
    "LoggingConfig",
    "ProviderConfig",
    "StoreConfig",
    "default_providers",
    # Loaders
    "check_unexpanded_vars",
    "expand_env_vars",
    "expand_env_vars_recursive",
    "load_config",
]
