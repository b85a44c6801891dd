"""Selection JSON emitter."""

import json

from wingen.models.options import GeneratorOptions
from wingen.models.plan import ResolvedPlan
from wingen.models.selection import SELECTION_VERSION


def emit_selection_json(resolved: ResolvedPlan, options: GeneratorOptions) -> str | None:
    """Render the selection as indented JSON.

    The output has the exact shape accepted by the selection codec:
    ``version``, ``selectedIds`` (resolved record order) and ``options``.
    Returns None for an empty selection, which the codec would reject.
    """
    if not resolved.records:
        return None

    payload = {
        "version": SELECTION_VERSION,
        "selectedIds": [record.id for record in resolved.records],
        "options": options.to_dict(),
    }
    return json.dumps(payload, indent=2)
