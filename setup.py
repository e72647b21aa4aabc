"""Setup configuration for rag-toolchain."""

from setuptools import setup, find_packages

setup(
    name='rag-toolchain',
    version='0.1.0',
    description='Token-bounded chunking, vector stores and RAG chains',
    author='Your Name',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=[
        'python-dotenv>=1.0.0',
        'PyYAML>=6.0',
        'click>=8.1.7',
        'tiktoken>=0.5.2',
        'requests>=2.31.0',
        'chromadb>=0.5.0',
        'psycopg[binary]>=3.1.12',
        'psycopg-pool>=3.2.0',
        'pgvector>=0.3.0',
        'PyPDF2>=3.0.1',
        'python-docx>=1.1.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'rag-toolchain=rag_toolchain.cli:cli',
        ],
    },
)
