from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Literal


class PackageConfig(BaseModel):
    """How to build a CDN URL for one logical package"""
    model_config = ConfigDict(frozen=True)

    package: str = Field(description="npm package name served by the CDN, e.g. 'react-dom' or '@radix-ui/react-dialog'")
    version: Optional[str] = Field(default=None, description="Pinned version appended as '@<version>'")
    subpath: Optional[str] = Field(default=None, description="Subpath appended after the version, with a leading '/'")
    external: tuple[str, ...] = Field(default=(), description="Peer dependencies excluded from the bundle, in declaration order")


class FileCode(BaseModel):
    filepath: str = Field(description="The path to the file to be created or modified")
    code: str = Field(description="The code to be added to the file")


class MarkerFilePlan(BaseModel):
    """File plan announced in a <!-- PLAN --> block"""
    create: list[str] = Field(default_factory=list)
    update: list[str] = Field(default_factory=list)
    delete: list[str] = Field(default_factory=list)
    total: int = Field(default=0, description="Number of files to create or update")
    sizes: dict[str, int] = Field(default_factory=dict, description="Expected line count per file")


class GenerationMeta(BaseModel):
    """Batch bookkeeping announced in a <!-- GENERATION_META --> block"""
    total_files_planned: int = 0
    files_in_this_batch: list[str] = Field(default_factory=list)
    completed_files: list[str] = Field(default_factory=list)
    remaining_files: list[str] = Field(default_factory=list)
    current_batch: int = 1
    total_batches: int = 1
    is_complete: bool = True


class ParsedResponse(BaseModel):
    """Files recovered from one model response"""
    files: dict[str, str] = Field(description="File path -> sanitized file content, never empty")
    explanation: Optional[str] = Field(default=None, description="Free-text explanation returned by the model")
    truncated: bool = Field(default=False, description="Whether the response had to be repaired or had incomplete files")
    format: Literal["json", "marker"] = Field(default="json", description="Response format the files were recovered from")
    incomplete_files: list[str] = Field(default_factory=list, description="Marker-format files cut off before their closing tag")
    plan: Optional[MarkerFilePlan] = None
    generation_meta: Optional[GenerationMeta] = None


class MarkerStreamingStatus(BaseModel):
    """Progress of a marker format response that may still be streaming"""
    pending: list[str] = Field(default_factory=list, description="Planned files not started yet")
    streaming: list[str] = Field(default_factory=list, description="The file currently being written, if any")
    complete: list[str] = Field(default_factory=list, description="Files whose content is complete")
