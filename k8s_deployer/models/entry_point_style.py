from enum import Enum
from typing import Optional


class EntryPointStyle(str, Enum):
    """Manière dont les propriétés applicatives parviennent au processus lancé"""
    exec = "exec"
    boot = "boot"
    shell = "shell"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["EntryPointStyle"]:
        """Retourne le style correspondant (insensible à la casse) ou None si inconnu"""
        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None
