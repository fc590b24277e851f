import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from sandbox_ingest import config
from sandbox_ingest.errors import ResponseParseError
from sandbox_ingest.graph import ingest_response
from sandbox_ingest.parsers import parse_model_response
from sandbox_ingest.resolvers import (
    analyze_files_for_imports,
    get_base_import_map,
    parse_specifier_error,
    resolve_specifier,
)
from sandbox_ingest.states import ParsedResponse

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("sandbox_ingest.server")

app = FastAPI(title="sandbox-ingest")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ResponseRequest(BaseModel):
    text: str


class FilesRequest(BaseModel):
    files: dict[str, str]


class SpecifierRequest(BaseModel):
    specifier: str


class SpecifierErrorRequest(BaseModel):
    message: str


def _parse_error(e: ResponseParseError) -> HTTPException:
    log.warning("Could not parse model response: %s", e.message)
    return HTTPException(status_code=422, detail=e.to_dict())


@app.post("/parse", response_model=ParsedResponse)
def parse(req: ResponseRequest):
    """Recover the file set from a raw model response"""
    try:
        return parse_model_response(req.text)
    except ResponseParseError as e:
        raise _parse_error(e)


@app.post("/ingest")
def ingest(req: ResponseRequest):
    """Recover the file set and build its import maps in one call"""
    try:
        state = ingest_response(req.text)
    except ResponseParseError as e:
        raise _parse_error(e)

    return {
        "files": state["files"],
        "explanation": state.get("explanation"),
        "truncated": state.get("truncated", False),
        "format": state.get("format", "json"),
        "incomplete_files": state.get("incomplete_files", []),
        "import_map": {"imports": state["import_map"]},
        "full_import_map": {"imports": state["full_import_map"]},
    }


@app.post("/import-map")
def import_map(req: FilesRequest):
    return {"imports": analyze_files_for_imports(req.files)}


@app.get("/import-map/base")
def base_import_map():
    return {"imports": get_base_import_map()}


@app.post("/resolve")
def resolve(req: SpecifierRequest):
    return {"specifier": req.specifier, "url": resolve_specifier(req.specifier)}


@app.post("/specifier-error")
def specifier_error(req: SpecifierErrorRequest):
    """Classify a sandbox runtime error and resolve the missing specifier, if any"""
    specifier = parse_specifier_error(req.message)
    return {
        "specifier": specifier,
        "url": resolve_specifier(specifier) if specifier else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
