"""Prompt catalog and message assembly."""

from .definitions import PromptDefinition, PromptArgumentSpec, DirectoryAttachment, FixedAttachment
from .catalog import PromptCatalog, ResolvedPrompt
from .attachments import AttachmentResolver

__all__ = [
    "PromptDefinition",
    "PromptArgumentSpec",
    "DirectoryAttachment",
    "FixedAttachment",
    "PromptCatalog",
    "ResolvedPrompt",
    "AttachmentResolver",
]
