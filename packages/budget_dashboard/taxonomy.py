"""Category taxonomy lookups.

A :class:`Taxonomy` wraps the ordered ``group -> category -> metadata``
mapping from the budget configuration and answers per-category questions
(owning group, exclusion, icon, income flag). All lookups fail open: a
category missing from the taxonomy is still displayed, never excluded, and
gets an icon derived from its name.

A category is expected to belong to at most one group. When it appears in
several, the first group in declaration order wins; this is not reported as
an error.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from .models import EXCLUDED_GROUP_MARKER, BudgetConfig, CategoryMeta


def is_excluded_group(group: str) -> bool:
    return group.startswith(EXCLUDED_GROUP_MARKER)


def display_group_name(group: str) -> str:
    """Group name with the exclusion marker removed."""

    if is_excluded_group(group):
        return group[len(EXCLUDED_GROUP_MARKER) :].strip()
    return group


class Taxonomy:
    """Read-only view over the configured groups with a category index."""

    __slots__ = ("_groups", "_group_of")

    def __init__(self, groups: Mapping[str, Mapping[str, CategoryMeta]]) -> None:
        self._groups: dict[str, dict[str, CategoryMeta]] = {
            g: dict(cats) for g, cats in groups.items()
        }
        index: dict[str, str] = {}
        for group, cats in self._groups.items():
            for category in cats:
                index.setdefault(category, group)
        self._group_of = index

    @classmethod
    def from_budget(cls, budget: BudgetConfig) -> Taxonomy:
        return cls(budget.groups)

    def resolve_group(self, category: str) -> str | None:
        return self._group_of.get(category)

    def is_excluded(self, category: str) -> bool:
        group = self.resolve_group(category)
        return group is not None and is_excluded_group(group)

    def meta(self, category: str) -> CategoryMeta | None:
        group = self.resolve_group(category)
        if group is None:
            return None
        return self._groups[group][category]

    def icon(self, category: str) -> str:
        """Configured icon, else the category's first character."""

        meta = self.meta(category)
        if meta is not None and meta.icon:
            return meta.icon
        return category[:1]

    def is_income(self, category: str) -> bool:
        meta = self.meta(category)
        return meta is not None and meta.income

    def groups(self) -> Iterator[str]:
        return iter(self._groups)

    def categories(self, group: str) -> Iterator[str]:
        """Categories of ``group`` in declaration order, skipping names a
        previous group already claimed."""

        for category in self._groups.get(group, {}):
            if self._group_of.get(category) == group:
                yield category

    def __contains__(self, category: object) -> bool:
        return category in self._group_of

    def __len__(self) -> int:
        return len(self._group_of)


__all__ = ["Taxonomy", "display_group_name", "is_excluded_group"]
