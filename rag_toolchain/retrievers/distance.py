"""Vector distance functions and their spellings in each backend."""

from enum import Enum


class DistanceFunction(str, Enum):
    L2 = "l2"
    COSINE = "cosine"
    INNER_PRODUCT = "inner_product"

    @property
    def ddl_ops(self) -> str:
        """pgvector operator class used when building an index."""
        return {
            DistanceFunction.L2: "vector_l2_ops",
            DistanceFunction.COSINE: "vector_cosine_ops",
            DistanceFunction.INNER_PRODUCT: "vector_ip_ops",
        }[self]

    @property
    def sql_operator(self) -> str:
        """pgvector distance operator used in ORDER BY."""
        return {
            DistanceFunction.L2: "<->",
            DistanceFunction.COSINE: "<=>",
            DistanceFunction.INNER_PRODUCT: "<#>",
        }[self]

    @property
    def chroma_space(self) -> str:
        """chromadb ``hnsw:space`` value."""
        return {
            DistanceFunction.L2: "l2",
            DistanceFunction.COSINE: "cosine",
            DistanceFunction.INNER_PRODUCT: "ip",
        }[self]
