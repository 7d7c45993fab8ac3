from __future__ import annotations
from typing import Iterable, List

import pandas as pd

from irecruit_core.domain.profile import CandidateProfile

# colonnes mises en tête de l'export, dans cet ordre
LEADING_COLUMNS = [
    "_id",
    "status",
    "appliedDate",
    "personalInformation.nom",
    "personalInformation.prenom",
    "personalInformation.email",
    "personalInformation.cin",
    "personalInformation.telephone",
    "applicationDiploma",
]

_LIST_COLUMNS = [
    "parcoursEtDiplomes",
    "niveauxLangues",
    "experiences",
    "experiencePedagogique",
    "publications",
    "communications",
    "residanat",
    "autresDocuments",
]


def profiles_to_frame(profiles: Iterable[CandidateProfile]) -> pd.DataFrame:
    """Aplatit les profils candidats en DataFrame (une ligne par candidature).

    Les listes du parcours professionnel sont remplacées par leur nombre d'éléments
    (colonnes `nb_<champ>`), le détail restant consultable dans l'interface admin.
    """
    rows: List[dict] = []
    for p in profiles:
        wire = p.to_wire()
        professional = wire.pop("professionalInformation", {}) or {}
        flat = pd.json_normalize(wire, sep=".").to_dict(orient="records")[0]
        for col in _LIST_COLUMNS:
            flat[f"nb_{col}"] = len(professional.get(col) or [])
        rows.append(flat)
    if not rows:
        return pd.DataFrame(columns=LEADING_COLUMNS)
    df = pd.DataFrame(rows)
    # dicts libres (experiences, situationDeHandicap) aplatis en colonnes variables
    lead = [c for c in LEADING_COLUMNS if c in df.columns]
    rest = sorted(c for c in df.columns if c not in lead)
    return df[lead + rest]
