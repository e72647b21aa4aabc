"""
Command line interface for rag-toolchain.

Commands: chunk, ingest, ask
"""

import json
import logging
import sys
from pathlib import Path

import click

from rag_toolchain import __version__
from rag_toolchain.audit.logger import get_audit_logger
from rag_toolchain.chains.basic_rag_chain import BasicRAGChain
from rag_toolchain.chunkers.errors import ChunkingError
from rag_toolchain.chunkers.token_chunker import TokenChunker
from rag_toolchain.clients.anthropic_client import AnthropicChatCompletionClient
from rag_toolchain.clients.hash_embeddings import HashEmbeddingClient
from rag_toolchain.clients.openai_client import (
    OpenAIChatCompletionClient,
    OpenAIEmbeddingClient,
)
from rag_toolchain.clients.types import PromptMessage
from rag_toolchain.common.embedding_models import OpenAIEmbeddingModel
from rag_toolchain.config import (
    AnthropicConfig,
    ConfigError,
    OpenAIConfig,
    PostgresConfig,
    load_config,
)
from rag_toolchain.loaders.directory import DirectorySource, get_loader
from rag_toolchain.pipeline import IndexingPipeline
from rag_toolchain.retrievers.distance import DistanceFunction
from rag_toolchain.stores.chroma_store import ChromaVectorStore
from rag_toolchain.stores.postgres_vector_store import HNSWIndex, PostgresVectorStore

MODEL_CHOICES = [m.value for m in OpenAIEmbeddingModel]


def _fail(message: str):
    click.echo(click.style(f"✗ {message}", fg="red"), err=True)
    sys.exit(1)


def _build_embedding_client(cfg, audit_logger):
    embedding_cfg = cfg.get_embedding_config()
    model = OpenAIEmbeddingModel(embedding_cfg['model'])
    if embedding_cfg['provider'] == 'hash':
        return HashEmbeddingClient(dimensions=model.dimensions)
    return OpenAIEmbeddingClient(model, OpenAIConfig.from_env(), audit_logger=audit_logger)


def _build_store(cfg, audit_logger):
    store_cfg = cfg.get_vector_store_config()
    model = OpenAIEmbeddingModel(cfg.get('embedding.model'))
    distance = DistanceFunction(store_cfg['distance'])

    if store_cfg['backend'] == 'postgres':
        return PostgresVectorStore(
            store_cfg['collection'],
            model,
            config=PostgresConfig.from_env(),
            index=HNSWIndex(distance),
            audit_logger=audit_logger,
        )
    return ChromaVectorStore(
        store_cfg['collection'],
        model,
        path=store_cfg['path'],
        distance_function=distance,
        audit_logger=audit_logger,
    )


def _build_chat_client(cfg, audit_logger):
    chat_cfg = cfg.get_chat_config()
    if chat_cfg['provider'] == 'anthropic':
        return AnthropicChatCompletionClient(
            chat_cfg['model'],
            chat_cfg['max_tokens'],
            AnthropicConfig.from_env(),
            audit_logger=audit_logger,
        )
    return OpenAIChatCompletionClient(
        chat_cfg['model'],
        OpenAIConfig.from_env(),
        additional_config={'max_tokens': chat_cfg['max_tokens']},
        audit_logger=audit_logger,
    )


@click.group()
@click.version_option(__version__)
@click.option('--config', 'config_path', type=click.Path(exists=True), help='Config file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path, verbose):
    """rag-toolchain - chunk, index and query documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('chunk')
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--chunk-size', type=int, default=None, help='Tokens per chunk')
@click.option('--overlap', type=int, default=None, help='Tokens shared by neighbouring chunks')
@click.option('--model', type=click.Choice(MODEL_CHOICES), default=None,
              help='Embedding model whose tokenizer and limit apply')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default='text')
@click.pass_context
def chunk(ctx, file, chunk_size, overlap, model, output_format):
    """
    Split a document into token chunks and print them.

    Example:
        rag-toolchain chunk notes.txt --chunk-size 256 --overlap 32
    """
    try:
        cfg = load_config(ctx.obj.get('config_path'))
        chunking_cfg = cfg.get_chunking_config()

        chunker = TokenChunker(
            chunk_size if chunk_size is not None else chunking_cfg['chunk_size'],
            overlap if overlap is not None else chunking_cfg['chunk_overlap'],
            OpenAIEmbeddingModel(model or cfg.get('embedding.model')),
        )

        chunks = []
        for document in get_loader(file).load():
            chunks.extend(chunker.generate_chunks(document))
    except ConfigError as e:
        _fail(f"Config error: {e}")
    except ChunkingError as e:
        _fail(f"Chunking error: {e}")
    except (OSError, ValueError) as e:
        _fail(f"Error: {e}")

    if output_format == 'json':
        click.echo(json.dumps([c.content for c in chunks], indent=2, ensure_ascii=False))
        return

    for i, c in enumerate(chunks, 1):
        click.echo(click.style(f"[{i}]", fg="cyan") + f" {c.content}")
    click.echo(click.style(f"✓ {len(chunks)} chunk(s)", fg="green"), err=True)


@cli.command('ingest')
@click.argument('path', type=click.Path(exists=True))
@click.pass_context
def ingest(ctx, path):
    """
    Chunk, embed and store a file or directory.

    Example:
        rag-toolchain ingest ./docs
    """
    try:
        cfg = load_config(ctx.obj.get('config_path'))
        audit_logger = get_audit_logger(cfg.get_audit_config())
        chunking_cfg = cfg.get_chunking_config()

        chunker = TokenChunker(
            chunking_cfg['chunk_size'],
            chunking_cfg['chunk_overlap'],
            OpenAIEmbeddingModel(cfg.get('embedding.model')),
        )
        pipeline = IndexingPipeline(
            chunker,
            _build_embedding_client(cfg, audit_logger),
            _build_store(cfg, audit_logger),
            batch_size=cfg.get('embedding.batch_size', 100),
            audit_logger=audit_logger,
        )

        loader = DirectorySource(path) if Path(path).is_dir() else get_loader(path)
        click.echo(click.style(f"[Indexing {path}...]", fg="blue"))
        report = pipeline.index_source(loader, source=str(path))
    except ConfigError as e:
        _fail(f"Config error: {e}")
    except Exception as e:
        _fail(f"Error: {e}")

    for document_index, message in report.failures:
        click.echo(click.style(f"⚠ Document {document_index} skipped: {message}", fg="yellow"))
    click.echo(click.style(
        f"✓ Indexed {report.chunks} chunk(s) from {report.documents} document(s)",
        fg="green",
    ))


@cli.command('ask')
@click.argument('question')
@click.option('--top-k', type=int, default=3, help='Number of supporting chunks')
@click.pass_context
def ask(ctx, question, top_k):
    """
    Answer a question from the indexed documents.

    Example:
        rag-toolchain ask "What does the report conclude?" --top-k 5
    """
    try:
        cfg = load_config(ctx.obj.get('config_path'))
        audit_logger = get_audit_logger(cfg.get_audit_config())

        store = _build_store(cfg, audit_logger)
        retriever = store.as_retriever(_build_embedding_client(cfg, audit_logger))
        system_prompt = cfg.get('chat.system_prompt')

        chain = BasicRAGChain(
            _build_chat_client(cfg, audit_logger),
            retriever,
            system_prompt=PromptMessage.system(system_prompt) if system_prompt else None,
        )
        reply = chain.invoke_chain(PromptMessage.human(question), top_k)
    except ConfigError as e:
        _fail(f"Config error: {e}")
    except Exception as e:
        _fail(f"Error: {e}")

    click.echo(reply.content)


if __name__ == '__main__':
    cli()
