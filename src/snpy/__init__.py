"""Interactive terminal prompts for template generators."""

from snpy.errors import (
    ConfigError,
    EmptyChoiceList,
    InvalidBasePath,
    IOFailure,
    SnpyError,
    TargetAlreadyExists,
    UnsupportedPromptKind,
)
from snpy.models import (
    CheckboxPrompt,
    ConfirmPrompt,
    DirectoryPrompt,
    InputPrompt,
    ListPrompt,
    PromptKind,
)
from snpy.session import Snpy

__all__ = [
    "CheckboxPrompt",
    "ConfigError",
    "ConfirmPrompt",
    "DirectoryPrompt",
    "EmptyChoiceList",
    "IOFailure",
    "InputPrompt",
    "InvalidBasePath",
    "ListPrompt",
    "PromptKind",
    "Snpy",
    "SnpyError",
    "TargetAlreadyExists",
    "UnsupportedPromptKind",
]
