from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List

from .models import Commodity, Location, Variety, Warehouse


def _key(name: str) -> str:
    return (name or '').strip().upper()


@dataclass(frozen=True)
class MasterLists:
    """
    Snapshot of the active master entries, keyed upper-case.

    An empty list means that master is not maintained yet; nothing is
    checked against it.
    """
    locations: FrozenSet[str] = frozenset()
    warehouses: FrozenSet[str] = frozenset()
    commodities: FrozenSet[str] = frozenset()
    varieties: Dict[str, FrozenSet[str]] = field(default_factory=dict)

    @classmethod
    def load(cls) -> 'MasterLists':
        varieties: Dict[str, set] = {}
        for commodity, variety in Variety.objects.filter(is_active=True).values_list('commodity_name', 'variety_name'):
            varieties.setdefault(_key(commodity), set()).add(_key(variety))
        return cls(
            locations=frozenset(_key(n) for n in Location.objects.filter(is_active=True).values_list('name', flat=True)),
            warehouses=frozenset(_key(n) for n in Warehouse.objects.filter(is_active=True).values_list('name', flat=True)),
            commodities=frozenset(_key(n) for n in Commodity.objects.filter(is_active=True).values_list('name', flat=True)),
            varieties={k: frozenset(v) for k, v in varieties.items()},
        )

    def check_row(self, row_num: int, *, location: str = '', warehouse: str = '',
                  commodity: str = '', variety: str = '') -> List[str]:
        """Warnings for the row's values that are missing from a maintained master."""
        warnings = []
        if location and self.locations and _key(location) not in self.locations:
            warnings.append(f'Row {row_num}: Location "{location}" not in master list, but accepting as-is.')
        if warehouse and self.warehouses and _key(warehouse) not in self.warehouses:
            warnings.append(f'Row {row_num}: Warehouse "{warehouse}" not in master list, but accepting as-is.')
        if commodity and self.commodities:
            if _key(commodity) not in self.commodities:
                warnings.append(f'Row {row_num}: Commodity "{commodity}" not in master list, but accepting as-is.')
            elif variety:
                known = self.varieties.get(_key(commodity))
                if known and _key(variety) not in known:
                    warnings.append(
                        f'Row {row_num}: Variety "{variety}" not in master list for "{commodity}", but accepting as-is.'
                    )
        return warnings
