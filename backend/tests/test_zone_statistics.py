"""
Tests des statistiques par zone
"""

from models.porte_status import StatutPorte
from services.zone_statistics import get_zone_statistics
from tests.seed import seed_commercial, seed_zone, assign_zone, seed_immeuble, reference_statuts


class TestZoneStatistics:

    async def test_no_assignments(self, mongo_db):
        await seed_zone(mongo_db)
        assert await get_zone_statistics() == []

    async def test_reference_zone(self, mongo_db):
        zone = await seed_zone(mongo_db, nom="Presqu'île")
        commercial = await seed_commercial(mongo_db)
        await assign_zone(mongo_db, commercial["id"], zone["id"])
        await seed_immeuble(mongo_db, commercial["id"], reference_statuts(), zone_id=zone["id"])

        [stats] = await get_zone_statistics()

        assert stats["zone_id"] == zone["id"]
        assert stats["zone_name"] == "Presqu'île"
        assert stats["total_contrats_signes"] == 3
        assert stats["total_rendez_vous_pris"] == 2
        assert stats["total_refus"] == 1
        assert stats["total_immeubles_visites"] == 1
        assert stats["total_portes_prospectes"] == 6
        assert stats["taux_conversion"] == 50.0
        assert stats["taux_succes_rdv"] == 200.0
        assert stats["performance_globale"] == 250.0
        assert stats["nombre_commerciaux"] == 1
        print(f"✅ Stats zone: {stats}")

    async def test_history_counts_commerciaux(self, mongo_db):
        zone = await seed_zone(mongo_db)
        alice = await seed_commercial(mongo_db)
        bob = await seed_commercial(mongo_db, nom="Durand", prenom="Bob")
        await assign_zone(mongo_db, alice["id"], zone["id"])
        await assign_zone(mongo_db, bob["id"], zone["id"], history=True)
        await assign_zone(mongo_db, alice["id"], zone["id"], history=True)

        [stats] = await get_zone_statistics()
        assert stats["nombre_commerciaux"] == 2
        assert stats["total_contrats_signes"] == 0
        assert stats["taux_conversion"] == 0.0

    async def test_managers_not_counted(self, mongo_db):
        zone = await seed_zone(mongo_db)
        commercial = await seed_commercial(mongo_db)
        await assign_zone(mongo_db, commercial["id"], zone["id"])
        await assign_zone(mongo_db, "manager-1", zone["id"], user_type="MANAGER")
        await assign_zone(mongo_db, "manager-2", zone["id"], history=True, user_type="MANAGER")

        [stats] = await get_zone_statistics()
        assert stats["nombre_commerciaux"] == 1

    async def test_sorted_by_performance(self, mongo_db):
        faible = await seed_zone(mongo_db, nom="Faible")
        forte = await seed_zone(mongo_db, nom="Forte")
        commercial = await seed_commercial(mongo_db)
        await assign_zone(mongo_db, commercial["id"], faible["id"], history=True)
        await assign_zone(mongo_db, commercial["id"], forte["id"])
        await seed_immeuble(mongo_db, commercial["id"], [StatutPorte.REFUS] * 3, zone_id=faible["id"])
        await seed_immeuble(mongo_db, commercial["id"], [StatutPorte.CONTRAT_SIGNE], zone_id=forte["id"])

        results = await get_zone_statistics()

        assert [z["zone_name"] for z in results] == ["Forte", "Faible"]
        assert results[0]["taux_conversion"] == 100.0
        assert results[1]["performance_globale"] == 0.0

    async def test_deleted_zone_ignored(self, mongo_db):
        commercial = await seed_commercial(mongo_db)
        await assign_zone(mongo_db, commercial["id"], "zone-supprimee")
        assert await get_zone_statistics() == []
