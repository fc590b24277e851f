from typing import Optional, TypedDict

from langgraph.graph import StateGraph, END

from .debug_utils import log_stage_execution
from .parsers.response_parser import parse_model_response
from .resolvers.import_map import analyze_files_for_imports, get_base_import_map, merge_import_maps
from .resolvers.registry import PACKAGE_REGISTRY, Registry


class IngestState(TypedDict, total=False):
    raw_response: str
    files: dict[str, str]
    explanation: Optional[str]
    truncated: bool
    format: str
    incomplete_files: list[str]
    import_map: dict[str, str]
    full_import_map: dict[str, str]


@log_stage_execution("parse_response")
def parse_response_stage(state: IngestState) -> dict:
    parsed = parse_model_response(state["raw_response"])
    return {
        "files": parsed.files,
        "explanation": parsed.explanation,
        "truncated": parsed.truncated,
        "format": parsed.format,
        "incomplete_files": parsed.incomplete_files,
    }


def build_ingest_graph(registry: Registry = PACKAGE_REGISTRY):
    """
    Compile the ingestion pipeline

    Graph: parse_response -> analyze_imports -> build_import_map
    """

    @log_stage_execution("analyze_imports")
    def analyze_imports_stage(state: IngestState) -> dict:
        return {"import_map": analyze_files_for_imports(state["files"], registry)}

    @log_stage_execution("build_import_map")
    def build_import_map_stage(state: IngestState) -> dict:
        return {"full_import_map": merge_import_maps(get_base_import_map(registry), state["import_map"])}

    graph = StateGraph(IngestState)

    graph.add_node("parse_response", parse_response_stage)
    graph.add_node("analyze_imports", analyze_imports_stage)
    graph.add_node("build_import_map", build_import_map_stage)

    graph.add_edge("parse_response", "analyze_imports")
    graph.add_edge("analyze_imports", "build_import_map")
    graph.add_edge("build_import_map", END)
    graph.set_entry_point("parse_response")

    return graph.compile()


ingest_graph = build_ingest_graph()


def ingest_response(raw_response: str, registry: Optional[Registry] = None) -> dict:
    """
    Run a raw model response through the whole pipeline

    Parse errors (ResponseParseError subclasses) propagate to the caller.

    Returns:
        Final state: files, explanation, truncated, format, incomplete_files,
        import_map and full_import_map
    """
    pipeline = ingest_graph if registry is None else build_ingest_graph(registry)
    return pipeline.invoke({"raw_response": raw_response})
