"""SQL for the pgvector table shared by the Postgres store and retriever."""

import re

_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$')


def validate_table_name(table_name: str) -> str:
    """
    Reject table names that are not plain (optionally schema-qualified) identifiers.

    Table names are interpolated into SQL, so only identifier characters
    are accepted.
    """
    if not _IDENTIFIER.match(table_name or ''):
        raise ValueError(f"Invalid table name: {table_name!r}")
    return table_name


def create_table_sql(table_name: str, dimensions: int) -> str:
    return (
        f"CREATE TABLE IF NOT EXISTS {table_name} ("
        f"id SERIAL PRIMARY KEY, "
        f"content TEXT NOT NULL, "
        f"embedding vector({int(dimensions)}) NOT NULL, "
        f"metadata JSONB)"
    )


def insert_row_sql(table_name: str) -> str:
    return f"INSERT INTO {table_name} (content, embedding, metadata) VALUES (%s, %s, %s)"


def select_rows_sql(table_name: str, operator: str) -> str:
    return (
        f"SELECT id, content, embedding, metadata FROM {table_name} "
        f"ORDER BY embedding {operator} %s::vector LIMIT %s"
    )


def create_index_sql(table_name: str, method: str, ops: str, lists: int = None) -> str:
    index_name = f"{table_name.replace('.', '_')}_embedding_{method}_idx"
    sql = f"CREATE INDEX IF NOT EXISTS {index_name} ON {table_name} USING {method} (embedding {ops})"
    if lists is not None:
        sql += f" WITH (lists = {int(lists)})"
    return sql
