from typing import Callable, Dict, Iterable, List, TypeVar

T = TypeVar("T")


def merge_by_name(*layers: Iterable[T], key: Callable[[T], str] = lambda item: item.name,
                  first_wins: bool = False) -> List[T]:
    """
    Fusionne plusieurs listes en une seule, un élément par identifiant.

    Par défaut les couches sont données de la plus faible à la plus forte priorité :
    un élément ultérieur remplace celui de même nom en gardant la position de sa
    première apparition. Avec first_wins=True, la première déclaration d'un nom
    est conservée et les suivantes sont ignorées.
    """
    merged: Dict[str, T] = {}
    for layer in layers:
        for item in layer:
            name = key(item)
            if first_wins and name in merged:
                continue
            merged[name] = item
    return list(merged.values())
