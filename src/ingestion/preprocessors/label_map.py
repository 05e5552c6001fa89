"""Series label canonicalization.

The primary source reports the same series under inconsistent labels (CPI is
listed both as "CPI" and "Consumer Price Index"). A LabelMap is the single
place where raw labels are resolved to canonical field names. Canonical names
always resolve to themselves, so already-canonical rows pass through
unchanged.
"""

from collections.abc import Mapping

import pandas as pd

from src.shared.exceptions import InvalidParameter, UnrecognizedSeriesLabel

CPI = "cpi"
CIV_LABOR_FORCE = "civ_labor_force"
UNEMP_LEVEL = "unemp_level"


class LabelMap:
    """Raw label → canonical field lookup.

    Labels are matched exactly after stripping surrounding whitespace.

    Example:
        >>> label_map = LabelMap({"CPI": "cpi", "Consumer Price Index": "cpi"})
        >>> label_map.resolve(" CPI ")
        'cpi'
    """

    def __init__(self, mapping: Mapping[str, str]) -> None:
        if not mapping:
            raise InvalidParameter("Label map must contain at least one entry")

        self._mapping: dict[str, str] = {str(k).strip(): str(v) for k, v in mapping.items()}

        for field in set(self._mapping.values()):
            target = self._mapping.setdefault(field, field)
            if target != field:
                raise InvalidParameter(
                    f"Canonical field '{field}' is also a raw label for '{target}'"
                )

    @property
    def fields(self) -> list[str]:
        """Canonical field names, sorted."""
        return sorted(set(self._mapping.values()))

    def resolve(self, label: str) -> str:
        """Canonical field for one raw label.

        Raises:
            UnrecognizedSeriesLabel: If the label is not mapped.
        """
        key = str(label).strip()
        if key not in self._mapping:
            raise UnrecognizedSeriesLabel([key])
        return self._mapping[key]

    def canonicalize(self, labels: pd.Series) -> pd.Series:
        """Map a column of raw labels to canonical field names.

        Raises:
            UnrecognizedSeriesLabel: Listing every unmapped label.
        """
        keys = labels.astype(str).str.strip()
        fields = keys.map(self._mapping)
        unknown = keys[fields.isna()].unique().tolist()
        if unknown:
            raise UnrecognizedSeriesLabel(unknown)
        return fields.rename("field")

    def __contains__(self, label: object) -> bool:
        return str(label).strip() in self._mapping

    def __repr__(self) -> str:
        return f"LabelMap({self._mapping!r})"


DEFAULT_LABEL_MAP = LabelMap(
    {
        "Consumer Price Index": CPI,
        "CPI": CPI,
        "Civilian Labor Force": CIV_LABOR_FORCE,
        "Unemployment Level": UNEMP_LEVEL,
    }
)
