"""LangGraph StateGraph definition for one generation request."""

import sys

from langgraph.graph import END, StateGraph

from acgen.agents.composer import compose_prompt
from acgen.agents.generator import fallback_node, generator_node
from acgen.state import Document, GenerationState, LearnedPatterns
from acgen.utils.retrieval import retrieve


def _retrieve_node(state: GenerationState) -> dict:
    """Rank the knowledge base (when enabled) and compose the prompt.

    Below-threshold or empty retrieval is not an error: the prompt simply
    carries no context block.
    """
    retrieved = []
    if state["retrieval_enabled"] and state["corpus"]:
        retrieved = retrieve(state["query"], state["corpus"])
        print(
            f"[ACG] Retrieval: {len(retrieved)} of {len(state['corpus'])} document(s) above threshold.",
            file=sys.stderr,
        )

    learned = state["learned"]
    prompt = compose_prompt(
        state["query"],
        learned["profile"],
        retrieved,
        edit_count=len(learned["edits"]),
    )
    return {"retrieved": retrieved, "prompt": prompt}


def _route_after_retrieve(state: GenerationState) -> str:
    """Conditional edge: call the generator only when a provider is selected."""
    return "generator" if state.get("provider") else "fallback"


# --- Build the graph ---

workflow = StateGraph(GenerationState)

workflow.add_node("retrieve", _retrieve_node)
workflow.add_node("generator", generator_node)
workflow.add_node("fallback", fallback_node)

workflow.set_entry_point("retrieve")

workflow.add_conditional_edges(
    "retrieve",
    _route_after_retrieve,
    {
        "generator": "generator",
        "fallback": "fallback",
    },
)

workflow.add_edge("generator", END)
workflow.add_edge("fallback", END)

graph = workflow.compile()


def run_generation(
    query: str,
    corpus: list[Document],
    learned: LearnedPatterns,
    provider: str | None = None,
    retrieval_enabled: bool = False,
) -> GenerationState:
    """Run the full graph for one request and return the final state."""
    state: GenerationState = {
        "query": query,
        "corpus": corpus,
        "retrieval_enabled": retrieval_enabled,
        "learned": learned,
        "provider": provider,
        "retrieved": [],
        "prompt": "",
        "raw_response": "",
        "artifacts": [],
        "mode": "pending",
    }
    return graph.invoke(state)
