"""glasses-context: queryable memory for smart-glasses capture.

Transcripts and camera-frame descriptions are stored as timestamp-named
files; questions are answered by handing the whole time-ordered log to a
language model, which may cite one image to return with the answer.
"""

__version__ = "0.1.0"

# Storage
from .artifact_store import Artifact, ArtifactCategory, ArtifactStore, StoredImage
from .context_assembler import ContextAssembler

# Query pipeline
from .image_resolver import ImageResolver
from .llm_client import ReasoningClient
from .query_engine import QueryEngine
from .response_composer import ImagePart, TextPart, compose
from .response_parser import QueryResult, ResponseParser
from .tool import ContextQueryTool

# Ingestion
from .ingestion import IngestionService, IngestResult

# Errors & Config
from .config import AppConfig
from .errors import (
    ContextQueryError,
    InvalidInputError,
    MissingConfigurationError,
    PersistenceError,
    ReasoningError,
)

__all__ = [
    # Storage
    "Artifact",
    "ArtifactCategory",
    "ArtifactStore",
    "StoredImage",
    "ContextAssembler",
    # Query pipeline
    "ImageResolver",
    "ReasoningClient",
    "QueryEngine",
    "ImagePart",
    "TextPart",
    "compose",
    "QueryResult",
    "ResponseParser",
    "ContextQueryTool",
    # Ingestion
    "IngestionService",
    "IngestResult",
    # Errors & Config
    "AppConfig",
    "ContextQueryError",
    "InvalidInputError",
    "MissingConfigurationError",
    "PersistenceError",
    "ReasoningError",
]
