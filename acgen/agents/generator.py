"""Generator nodes: call the configured chat model, or fall back to the template.

Provider selector:
- "primary"   → Gemini via langchain-google-genai (config: primary_model)
- "secondary" → Claude via langchain-anthropic (config: secondary_model)

The call is made exactly once. Transport failures are wrapped in
GenerationTransportError and surfaced as-is; retry policy belongs to the
caller. A response that arrives but carries no valid artifact array raises
MalformedGenerationOutput from parse_response().
"""

import sys

import httpx
from langchain_anthropic import ChatAnthropic
from langchain_google_genai import ChatGoogleGenerativeAI

from acgen.agents.composer import build_messages, fallback_generate, parse_response
from acgen.config import get_config
from acgen.errors import GenerationTransportError, ValidationError
from acgen.state import PROVIDERS, GenerationState


def build_llm(provider: str):
    """Instantiate the chat model for a provider selector."""
    config = get_config()
    temperature = config.get("temperature", 0.7)

    if provider == "primary":
        return ChatGoogleGenerativeAI(model=config["primary_model"], temperature=temperature)
    if provider == "secondary":
        return ChatAnthropic(model=config["secondary_model"], temperature=temperature)
    raise ValidationError(f"Unknown provider '{provider}'. Must be one of: {PROVIDERS}")


def _response_text(content) -> str:
    """Locate the text payload; some clients return a list of content blocks."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def _transport_error(exc: Exception) -> GenerationTransportError:
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
    else:
        status = getattr(exc, "status_code", None)
    if status is not None:
        return GenerationTransportError(f"Generator returned HTTP {status}: {exc}")
    return GenerationTransportError(f"Generator call failed: {exc!r}")


def generator_node(state: GenerationState) -> dict:
    """Generator node for the LangGraph StateGraph.

    Sends the composed prompt to the selected provider, parses the raw
    response and returns the validated artifacts.
    """
    try:
        llm = build_llm(state["provider"])
    except ValidationError:
        raise
    except Exception as exc:
        # Missing API keys and bad client settings surface at construction time
        raise GenerationTransportError(f"Generator client could not be created: {exc}") from exc
    messages = build_messages(state["prompt"])

    try:
        response = llm.invoke(messages)
    except Exception as exc:
        raise _transport_error(exc) from exc

    raw = _response_text(response.content)
    artifacts = parse_response(raw)
    print(f"[ACG] Generated {len(artifacts)} artifact(s) via {state['provider']}.", file=sys.stderr)

    return {"raw_response": raw, "artifacts": artifacts, "mode": "generated"}


def fallback_node(state: GenerationState) -> dict:
    """Produce the deterministic template when no provider is selected."""
    if state.get("retrieved"):
        print(
            f"[ACG] {len(state['retrieved'])} reference document(s) matched, "
            "but no provider is configured; using template output.",
            file=sys.stderr,
        )
    return {"artifacts": fallback_generate(state["query"]), "mode": "fallback"}
