from typing import Any, Dict, List

from .completion import CREATED, FAILED, NOT_RECURRING, SKIPPED, TERMINATED, CompletionResult

_CHAIN_LABELS = {
    CREATED: "next occurrence created",
    TERMINATED: "recurrence finished",
    NOT_RECURRING: "does not repeat",
    SKIPPED: "already done, nothing to repeat",
    FAILED: "could not create next occurrence",
}


def build_completion_trace(result: CompletionResult) -> Dict[str, Any]:
    transition = result.transition
    chain = result.chain

    status_value = f"{transition.previous_status} -> {transition.status}"
    if not transition.changed:
        status_value += " (unchanged)"

    chain_value = _CHAIN_LABELS.get(chain.outcome, chain.outcome)
    if chain.outcome == CREATED:
        chain_value += f" (#{chain.next_id}, due {chain.next_due_date})"

    trace_items: List[Dict[str, str]] = [
        {"label": "Occurrence", "value": f"#{transition.occurrence_id}"},
        {"label": "Status", "value": status_value},
        {"label": "Recurrence", "value": chain_value},
    ]
    if chain.error:
        trace_items.append({"label": "Detail", "value": chain.error})

    return {
        "items": trace_items,
        "result": result.to_dict(),
    }


def format_trace(trace: Dict[str, Any]) -> str:
    return "\n".join(f"{item['label']}: {item['value']}" for item in trace["items"])
