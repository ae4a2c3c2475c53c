from typing import Dict, List, Optional, Union

from models import Container, Plant, PlantWithQuantity, SpeciesCount

UNKNOWN_SPECIES = "Unknown"


def _expanded_plants(container: Container) -> Optional[List[Plant]]:
    if container.expand is None:
        return None
    return container.expand.plants


def _species_name(plant: Plant) -> str:
    species = plant.expand.species if plant.expand else None
    return species.name if species and species.name else UNKNOWN_SPECIES


def _quantity(plant: Plant) -> Union[int, float]:
    quantity = plant.quantity or 1
    return int(quantity) if float(quantity).is_integer() else quantity


def get_container_plants(container: Container) -> List[PlantWithQuantity]:
    """
    Pflanzen eines Containers mit aufgelöstem Artnamen und Menge.
    Ohne expandierte Pflanzen -> leere Liste.
    """
    plants = _expanded_plants(container)
    if plants is None:
        return []

    return [
        PlantWithQuantity(
            id=plant.id,
            species=_species_name(plant),
            quantity=_quantity(plant),
        )
        for plant in plants
    ]


def get_total_plants_count(container: Container) -> Union[int, float]:
    total = sum(plant.quantity for plant in get_container_plants(container))
    return int(total) if float(total).is_integer() else total


def format_plants_count(container: Container) -> str:
    total_plants = get_total_plants_count(container)
    # bewusst immer "plants", auch bei 1
    return "No plants" if total_plants == 0 else f"{total_plants} plants"


def get_container_species(container: Container) -> List[SpeciesCount]:
    """
    Zählt Pflanzeneinträge pro Art (nicht die Menge!), in Reihenfolge des
    ersten Auftretens.
    """
    plants = _expanded_plants(container)
    if not plants:
        return []

    counts: Dict[str, int] = {}
    for plant in plants:
        name = _species_name(plant)
        counts[name] = counts.get(name, 0) + 1

    return [SpeciesCount(species=name, count=count) for name, count in counts.items()]


def format_species_count(container: Container) -> str:
    species = get_container_species(container)
    if not species:
        return "0 plants"
    return ", ".join(f"{entry.count} {entry.species}" for entry in species)
