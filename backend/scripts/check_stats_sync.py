"""
Prospection - Vérification de cohérence portes / statistiques.
Run: cd backend && python3 scripts/check_stats_sync.py [--fix]

--fix : relance le recalcul global puis re-valide.
Code retour non nul si des incohérences subsistent.
"""

import argparse
import asyncio
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import client
from services.statistic_sync import recalculate_all_stats
from services.stats_coherence import validate_stats_coherence


def print_report(title: str, report: dict):
    print("\n════════════════════════════════════")
    print(f"  {title}")
    print("════════════════════════════════════")
    print(f"  Cohérentes:       {report['valid_count']}")
    print(f"  Incohérentes:     {len(report['invalid'])}")
    print(f"  Erreurs:          {report['errors']}")
    print("════════════════════════════════════")

    for item in report["invalid"][:20]:
        name = item["commercial"] or item["commercial_id"][:8]
        print(f"\n  {name} ({item['commercial_id'][:8]}...)")
        for field in item["mismatched_fields"]:
            print(f"    {field}: stocké={item['current'][field]} réel={item['real'][field]}")


async def check(fix: bool = False) -> bool:
    try:
        report = await validate_stats_coherence()
        print_report("COHÉRENCE DES STATISTIQUES", report)

        if fix and (report["invalid"] or report["errors"]):
            result = await recalculate_all_stats()
            print(f"\nRecalcul: {result['updated']} mis à jour, {result['errors']} erreurs")

            report = await validate_stats_coherence()
            print_report("APRÈS RECALCUL", report)
    finally:
        client.close()

    return not report["invalid"] and not report["errors"]


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Vérifie la cohérence des statistiques commerciaux")
    parser.add_argument("--fix", action="store_true", help="Recalcule les statistiques si incohérentes")
    args = parser.parse_args()

    ok = asyncio.run(check(fix=args.fix))
    sys.exit(0 if ok else 1)
