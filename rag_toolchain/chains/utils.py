from typing import Iterable

from rag_toolchain.clients.types import PromptMessage
from rag_toolchain.common.types import Chunk

SUPPORTING_INFORMATION_HEADER = "Here is some supporting information:"


def build_prompt(base_message: PromptMessage, chunks: Iterable[Chunk]) -> PromptMessage:
    """
    Append retrieved chunks to a user message.

    The result reads::

        <user message>
        Here is some supporting information:
        <chunk 1>
        <chunk 2>
    """
    prompt = f"{base_message.content}\n{SUPPORTING_INFORMATION_HEADER}\n"
    for chunk in chunks:
        prompt += f"{chunk.content}\n"
    return PromptMessage.human(prompt)
