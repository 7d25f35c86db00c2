"""
Pydantic wire models for requests and responses.

Response models default every field so partial bodies still decode, and
ignore fields they don't know about.
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for response shapes: tolerant of missing and extra fields."""
    model_config = ConfigDict(extra="ignore")


# ─────────────────────────────────────────────────────────────────────
# ERRORS
# ─────────────────────────────────────────────────────────────────────

class APIErrorBody(BaseModel):
    """The inner object of the error envelope."""
    type: str = ""
    message: str = ""
    status_code: Optional[int] = None


class APIErrorResponse(BaseModel):
    """Error envelope: {"error": {"type": ..., "message": ...}}."""
    error: APIErrorBody


# ─────────────────────────────────────────────────────────────────────
# ENGINES
# ─────────────────────────────────────────────────────────────────────

class EngineObject(WireModel):
    id: str = ""
    object: str = ""
    owner: str = ""
    ready: bool = False


class EnginesResponse(WireModel):
    data: List[EngineObject] = Field(default_factory=list)
    object: str = ""


# ─────────────────────────────────────────────────────────────────────
# COMPLETIONS
# ─────────────────────────────────────────────────────────────────────

class CompletionRequest(BaseModel):
    """
    Request body for the completions endpoint.

    ``stream`` is controlled by the client: completion() sends False,
    the streaming calls send True, whatever is set here.
    """
    prompt: Union[str, List[str]] = ""
    # Text that comes after the insertion point
    suffix: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    n: Optional[int] = None
    logprobs: Optional[int] = None
    echo: bool = False
    # Up to 4 sequences where generation stops
    stop: Optional[List[str]] = None
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    stream: bool = False


class LogprobResult(WireModel):
    tokens: List[str] = Field(default_factory=list)
    token_logprobs: List[Optional[float]] = Field(default_factory=list)
    top_logprobs: List[Optional[Dict[str, float]]] = Field(default_factory=list)
    text_offset: List[int] = Field(default_factory=list)


class CompletionResponseChoice(WireModel):
    text: str = ""
    index: int = 0
    logprobs: Optional[LogprobResult] = None
    finish_reason: Optional[str] = None


class CompletionResponse(WireModel):
    """Full completion response, and the shape of each streamed event."""
    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: List[CompletionResponseChoice] = Field(default_factory=list)


# ─────────────────────────────────────────────────────────────────────
# EDITS
# ─────────────────────────────────────────────────────────────────────

class EditsRequest(BaseModel):
    model: str = ""
    input: str = ""
    # How the model should edit the input
    instruction: str = ""
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    n: Optional[int] = None


class EditsResponseChoice(WireModel):
    text: str = ""
    index: int = 0


class Usage(WireModel):
    """Token accounting returned by edits and embeddings."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class EditsResponse(WireModel):
    object: str = ""
    created: int = 0
    choices: List[EditsResponseChoice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)


# ─────────────────────────────────────────────────────────────────────
# SEARCH
# ─────────────────────────────────────────────────────────────────────

class SearchRequest(BaseModel):
    documents: List[str] = Field(default_factory=list)
    query: str = ""


class SearchData(WireModel):
    """One scored document; ``document`` is its index in the request."""
    document: int = 0
    object: str = ""
    score: float = 0.0


class SearchResponse(WireModel):
    data: List[SearchData] = Field(default_factory=list)
    object: str = ""


# ─────────────────────────────────────────────────────────────────────
# EMBEDDINGS
# ─────────────────────────────────────────────────────────────────────

class EmbeddingsRequest(BaseModel):
    model: str
    input: List[str]
    user: Optional[str] = None


class Embedding(WireModel):
    object: str = ""
    embedding: List[float] = Field(default_factory=list)
    index: int = 0


class EmbeddingsResponse(WireModel):
    object: str = ""
    usage: Usage = Field(default_factory=Usage)
    data: List[Embedding] = Field(default_factory=list)


# ─────────────────────────────────────────────────────────────────────
# FILES
# ─────────────────────────────────────────────────────────────────────

class File(WireModel):
    id: str = ""
    object: str = ""
    bytes: int = 0
    created_at: int = 0
    filename: str = ""
    purpose: str = ""


class FileUploadResponse(File):
    pass


class FileDeleteResponse(WireModel):
    id: str = ""
    object: str = ""
    deleted: bool = False


# ─────────────────────────────────────────────────────────────────────
# FINE-TUNES
# ─────────────────────────────────────────────────────────────────────

class Event(WireModel):
    object: str = ""
    created_at: int = 0
    level: str = ""
    message: str = ""


class HyperParams(WireModel):
    batch_size: Optional[int] = None
    learning_rate_multiplier: Optional[float] = None
    n_epochs: Optional[int] = None
    prompt_loss_weight: Optional[float] = None


class FineTuneOptions(BaseModel):
    """
    Request body for creating a fine-tune job.

    Only training_file is required; unset options are left to the server.
    """
    training_file: str
    validation_file: Optional[str] = None
    model: Optional[str] = None
    batch_size: Optional[int] = None
    learning_rate_multiplier: Optional[float] = None
    n_epochs: Optional[int] = None
    prompt_loss_weight: Optional[float] = None
    compute_classification_metrics: bool = False
    classification_n_classes: Optional[int] = None
    classification_positive_class: Optional[str] = None
    classification_betas: Optional[List[float]] = None
    suffix: Optional[str] = None


class FineTuneResponse(WireModel):
    id: str = ""
    object: str = ""
    model: str = ""
    created_at: int = 0
    events: List[Event] = Field(default_factory=list)
    training_files: List[File] = Field(default_factory=list)
    result_files: List[File] = Field(default_factory=list)
    validation_files: List[File] = Field(default_factory=list)
    updated_at: int = 0
    status: str = ""
    organization_id: str = ""
    hyperparams: HyperParams = Field(default_factory=HyperParams)
    fine_tuned_model: Optional[str] = None
