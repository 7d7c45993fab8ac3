#!/usr/bin/env python3
from __future__ import annotations
import argparse
import sys

from irecruit_core.domain.errors import IRecruitError
from irecruit_core.export import profiles_to_frame
from irecruit_core.services.container import get_container


def main() -> int:
    ap = argparse.ArgumentParser(description="Exporte les profils candidats d'une tranche en CSV")
    ap.add_argument("tranche_id", help="Identifiant de la tranche")
    ap.add_argument("--out", default=None, help="Fichier CSV de sortie (défaut: stdout)")
    ap.add_argument("--status", choices=["pending", "accepted", "rejected"], default=None, help="Filtrer par statut")
    args = ap.parse_args()

    try:
        profiles = get_container().applications.find_by_tranche(args.tranche_id)
    except IRecruitError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.status:
        profiles = [p for p in profiles if p.status.value == args.status]
    df = profiles_to_frame(profiles)
    if args.out:
        df.to_csv(args.out, index=False, encoding="utf-8")
        print(f"Exported {len(df)} candidates to {args.out}")
    else:
        df.to_csv(sys.stdout, index=False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
