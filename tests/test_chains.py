"""Tests for RAG and chat history chains."""

import pytest

from rag_toolchain.chains import (
    BasicRAGChain,
    ChainError,
    ChatHistoryChain,
    RagChainError,
    build_prompt,
)
from rag_toolchain.clients.base import BaseChatClient
from rag_toolchain.clients.errors import AnthropicError, OpenAIError
from rag_toolchain.clients.types import PromptMessage
from rag_toolchain.common.types import Chunk
from rag_toolchain.retrievers.base import BaseRetriever, RetrieverError


class StubRetriever(BaseRetriever):
    def __init__(self, chunks=None, error=None):
        self.chunks = chunks or []
        self.error = error
        self.calls = []

    def retrieve(self, text, top_k):
        self.calls.append((text, top_k))
        if self.error:
            raise self.error
        return self.chunks[:top_k]


class StubChatClient(BaseChatClient):
    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.received = []

    def invoke(self, messages):
        self.received.append(list(messages))
        if self.error:
            raise self.error
        return PromptMessage.ai(self.replies.pop(0))


def test_build_prompt():
    prompt = build_prompt(
        PromptMessage.human("can you explain the data to me"),
        [Chunk("data point 1"), Chunk("data point 2")],
    )

    assert prompt == PromptMessage.human(
        "can you explain the data to me\n"
        "Here is some supporting information:\n"
        "data point 1\n"
        "data point 2\n"
    )


def test_rag_chain_with_system_prompt():
    retriever = StubRetriever([Chunk("data point 1"), Chunk("data point 2"), Chunk("unused")])
    chat_client = StubChatClient(["explained"])
    system = PromptMessage.system("Be concise")
    chain = BasicRAGChain(chat_client, retriever, system_prompt=system)

    reply = chain.invoke_chain(PromptMessage.human("can you explain the data to me"), top_k=2)

    assert reply == PromptMessage.ai("explained")
    assert retriever.calls == [("can you explain the data to me", 2)]
    sent = chat_client.received[0]
    assert sent[0] == system
    assert sent[1].content.endswith("data point 1\ndata point 2\n")


def test_rag_chain_without_system_prompt():
    chat_client = StubChatClient(["ok"])
    chain = BasicRAGChain(chat_client, StubRetriever([Chunk("x")]))

    chain.invoke_chain(PromptMessage.human("q"), top_k=1)

    assert len(chat_client.received[0]) == 1


def test_rag_chain_retriever_failure():
    cause = RetrieverError("Query error: down")
    chat_client = StubChatClient(["never"])
    chain = BasicRAGChain(chat_client, StubRetriever(error=cause))

    with pytest.raises(RagChainError) as exc_info:
        chain.invoke_chain(PromptMessage.human("q"), top_k=1)

    assert exc_info.value.source == 'retriever'
    assert exc_info.value.__cause__ is cause
    assert chat_client.received == []


def test_rag_chain_chat_client_failure():
    cause = OpenAIError("Rate limit reached or Monthly quota exceeded: slow down", status_code=429)
    chain = BasicRAGChain(StubChatClient(error=cause), StubRetriever([Chunk("x")]))

    with pytest.raises(RagChainError, match="chat_client error: Rate limit reached") as exc_info:
        chain.invoke_chain(PromptMessage.human("q"), top_k=1)

    assert exc_info.value.source == 'chat_client'


def test_chat_history_accumulates():
    system = PromptMessage.system("You are a tutor")
    chat_client = StubChatClient(["first answer", "second answer"])
    chain = ChatHistoryChain(chat_client, system)

    chain.invoke_chain(PromptMessage.human("first question"))
    reply = chain.invoke_chain(PromptMessage.human("second question"))

    assert reply.content == "second answer"
    assert chat_client.received[1] == [
        system,
        PromptMessage.human("first question"),
        PromptMessage.ai("first answer"),
        PromptMessage.human("second question"),
    ]
    assert len(chain.history.get_messages()) == 5


def test_chat_history_unchanged_on_failure():
    system = PromptMessage.system("You are a tutor")
    chain = ChatHistoryChain(StubChatClient(error=AnthropicError("Overloaded Error: busy", status_code=529)), system)

    with pytest.raises(ChainError):
        chain.invoke_chain(PromptMessage.human("question"))

    assert chain.history.get_messages() == [system]


def test_rag_chain_does_not_wrap_programming_errors():
    chain = BasicRAGChain(StubChatClient(error=KeyError("bug")), StubRetriever([Chunk("x")]))

    with pytest.raises(KeyError):
        chain.invoke_chain(PromptMessage.human("q"), top_k=1)


def test_rag_chain_does_not_wrap_unexpected_retriever_errors():
    chat_client = StubChatClient(["never"])
    chain = BasicRAGChain(chat_client, StubRetriever(error=AttributeError("no pool")))

    with pytest.raises(AttributeError):
        chain.invoke_chain(PromptMessage.human("q"), top_k=1)

    assert chat_client.received == []
