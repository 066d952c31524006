"""
Domain models — Pydantic types for the scaffolder.

All models are re-exported here for convenient access:

    from rbxts_init.core.models import ResolvedConfiguration, PackageManager, Receipt
"""

from rbxts_init.core.models.action import Action, Receipt
from rbxts_init.core.models.config_files import (
    ConfigDocument,
    EslintConfig,
    LanguageSettings,
    PackageJson,
    VSCodeExtensions,
    VSCodeSettings,
    YarnRc,
)
from rbxts_init.core.models.options import (
    TEMPLATE_CHOICES,
    InitMode,
    OptionDefaults,
    RawOptions,
    ResolvedConfiguration,
    ToolAvailability,
)
from rbxts_init.core.models.package_manager import (
    PACKAGE_MANAGER_COMMANDS,
    PackageManager,
    PackageManagerCommands,
    commands_for,
)

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # config_files.py
    "ConfigDocument",
    "EslintConfig",
    "LanguageSettings",
    "PackageJson",
    "VSCodeExtensions",
    "VSCodeSettings",
    "YarnRc",
    # options.py
    "InitMode",
    "OptionDefaults",
    "RawOptions",
    "ResolvedConfiguration",
    "TEMPLATE_CHOICES",
    "ToolAvailability",
    # package_manager.py
    "PACKAGE_MANAGER_COMMANDS",
    "PackageManager",
    "PackageManagerCommands",
    "commands_for",
]
