"""Assembly of prompts/get messages from a prompt and its resources.

Blocks are emitted in a fixed order, from broad directory conventions to the
prompt's own declarations, with the template always last:

1. ``docs/<prompt dir>``
2. ``instructions/<prompt dir>``
3. fixed attachments (declared ``attachments`` plus configured directories)
4. the ``instructions`` field
5. the ``resources`` field
6. the template text
"""

import logging
from pathlib import PurePosixPath
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..resources.store import ResourceStore
from .catalog import ResolvedPrompt
from .definitions import DirectoryAttachment, PromptDefinition

logger = logging.getLogger(__name__)

RESOURCE_SEPARATOR = "\n\n---\n\n"


def format_resource(name: str, content: str) -> str:
    return f"Resource: {name}\n\n{content}"


def join_resources(entries: Sequence[Tuple[str, str]]) -> str:
    """Concatenate resources with their attribution headers."""
    return RESOURCE_SEPARATOR.join(format_resource(name, content) for name, content in entries)


def text_message(text: str) -> Dict[str, Any]:
    return {"role": "user", "content": {"type": "text", "text": text}}


def resource_message(text: str) -> Dict[str, Any]:
    return {
        "role": "user",
        "content": {
            "type": "resource",
            "resource": {"type": "text", "text": text},
        },
    }


class AttachmentResolver:
    """Builds the ordered message list for a resolved prompt."""

    def __init__(
        self,
        store: ResourceStore,
        special_attachments: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        self.store = store
        self.special_attachments = dict(special_attachments or {})

    def build_messages(self, resolved: ResolvedPrompt) -> List[Dict[str, Any]]:
        prompt = resolved.definition
        prompt_dir = resolved.prompt_directory

        blocks = [
            self._convention_block("docs", prompt_dir),
            self._convention_block("instructions", prompt_dir),
            self._fixed_block(prompt),
            self._instructions_block(prompt),
            self._resources_block(prompt),
        ]
        messages = [resource_message(text) for text in blocks if text]
        messages.append(text_message(prompt.template or ""))

        logger.debug(
            f"Assembled {len(messages)} messages for prompt {prompt.catalog_name!r}"
        )
        return messages

    def _convention_block(self, category: str, prompt_dir: str) -> Optional[str]:
        if not prompt_dir:
            return None
        entries = self.store.read_resource_directory(str(PurePosixPath(category) / prompt_dir))
        return join_resources(entries) if entries else None

    def _fixed_block(self, prompt: PromptDefinition) -> Optional[str]:
        entries: List[Tuple[str, str]] = []

        for attachment in prompt.attachments or []:
            if isinstance(attachment, DirectoryAttachment):
                entries.extend(self.store.read_resource_directory(attachment.path))
            else:
                content = self.store.read_resource(attachment.name)
                if content is not None:
                    entries.append((attachment.name, content))

        for directory in self.special_attachments.get(prompt.catalog_name, []):
            entries.extend(self.store.read_resource_directory(directory))

        return join_resources(entries) if entries else None

    def _instructions_block(self, prompt: PromptDefinition) -> Optional[str]:
        if not prompt.instructions:
            return None
        content = self.store.read_resource(prompt.instructions)
        if content is None:
            logger.warning(
                f"Instructions resource {prompt.instructions!r} of prompt "
                f"{prompt.catalog_name!r} not found"
            )
            return None
        return f"Instructions: {prompt.instructions}\n\n{content}"

    def _resources_block(self, prompt: PromptDefinition) -> Optional[str]:
        entries = []
        for name in prompt.resources or []:
            content = self.store.read_resource(name)
            if content is None:
                logger.warning(f"Resource {name!r} of prompt {prompt.catalog_name!r} not found")
                continue
            entries.append((name, content))
        return join_resources(entries) if entries else None
