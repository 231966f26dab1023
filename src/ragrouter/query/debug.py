"""
Human-readable rendering of routing decisions for the debug panel.
"""

from typing import Optional

from .augmentor import RetrievalResult

RETRIEVAL_DISABLED = "--- Retrieval is disabled in chat mode. ---"


def format_router_debug(result: Optional[RetrievalResult]) -> str:
    """Lists the retrievers that were searched and the segments each found."""
    if result is None:
        return RETRIEVAL_DISABLED

    count = len(result.contents)
    if not result.decision.routed:
        header = f"--- Searched {count} document store(s) (no routing) ---"
    elif not count:
        return "--- The router did not select any retriever. ---"
    else:
        header = f"--- The router selected {count} retriever(s) ---"

    lines = [header, ""]
    for named, docs in result.contents:
        if docs:
            lines.append(f"--- Segments found by [ {named.name} ] ---")
            for doc in docs:
                lines.append(doc.page_content)
                lines.append("---")
        else:
            lines.append(f"--- [ {named.name} ] returned no segment.")

    return "\n".join(lines) + "\n"
