import unicodedata
from typing import Dict, Iterable, List, Optional, Sequence

from predictlab.commons.types import PanelCfg


def normalize_name(raw: Optional[str]) -> str:
    """Lower-case, strip diacritics (NFD + drop combining marks) and trim."""
    decomposed = unicodedata.normalize("NFD", (raw or "").lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).strip()


def matches_panel(name: Optional[str], panel: PanelCfg) -> bool:
    normalized = normalize_name(name)
    if not normalized:
        return False
    return any(normalize_name(k) in normalized for k in panel.keywords)


def classify_panels(name: Optional[str], panels: Sequence[PanelCfg]) -> List[str]:
    """Names of every panel matching ``name``, in the configured priority order."""
    return [p.name for p in panels if matches_panel(name, p)]


def primary_panel(name: Optional[str], panels: Sequence[PanelCfg]) -> Optional[str]:
    # la lista de paneles define la precedencia
    return next((p.name for p in panels if matches_panel(name, p)), None)


def group_by_panel(names: Iterable[str], panels: Sequence[PanelCfg]) -> Dict[str, List[str]]:
    """Panel -> parameter names shown on that panel's chart.

    Each chart filters on its own, so one name can land in several panels.
    Panels without matches are omitted.
    """
    out: Dict[str, List[str]] = {}
    for name in names:
        for panel_name in classify_panels(name, panels):
            out.setdefault(panel_name, []).append(name)
    return {p.name: out[p.name] for p in panels if p.name in out}
