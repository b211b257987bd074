"""IR model for a compiled object dictionary.

``IRObjectDictionary`` is the whole mutable state of one compile run:
storage groups, descriptors, the OD list, shortcut macros and counters.
A new instance is created for every run so runs never share state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from yaml_to_od.ir.objects import (
    IREntry,
    IRExtension,
    IRObject,
    IRShortcut,
    IRStorageGroup,
)
from yaml_to_od.validation.errors import BuildWarnings, WarningSink


@dataclass
class IRObjectDictionary:
    """Complete object dictionary in IR format.

    The database is mutable (not frozen) to allow building it
    incrementally during compilation.

    Attributes
    ----------
        name: Symbol prefix of the generated C objects (``OD``).
        storage_groups: Storage groups by name, in order of first use.
        objects: Plain descriptors in OD list order.
        extensions: Extended descriptors in OD list order.
        entries: The OD list.
        shortcuts: ``<OD>_ENTRY_H<index>`` macros.
        long_shortcuts: ``<OD>_ENTRY_H<index>_<name>`` macros.
        counters: Entry totals by counter label.
        warnings: Sink that received the build warnings of the run.

    """

    name: str = "OD"
    storage_groups: dict[str, IRStorageGroup] = field(default_factory=dict)
    objects: list[IRObject] = field(default_factory=list)
    extensions: list[IRExtension] = field(default_factory=list)
    entries: list[IREntry] = field(default_factory=list)
    shortcuts: list[IRShortcut] = field(default_factory=list)
    long_shortcuts: list[IRShortcut] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)
    warnings: WarningSink = field(default_factory=BuildWarnings)

    def storage_group(self, name: str) -> IRStorageGroup:
        """Get a storage group, registering it on first use."""
        group = self.storage_groups.get(name)
        if group is None:
            group = IRStorageGroup(name=name)
            self.storage_groups[name] = group
        return group

    def add_object(self, obj: IRObject) -> None:
        """Add a plain descriptor."""
        self.objects.append(obj)

    def add_extension(self, extension: IRExtension) -> None:
        """Add an extended descriptor."""
        self.extensions.append(extension)

    def add_entry(self, entry: IREntry) -> int:
        """Append an OD list row together with its shortcut macros.

        Returns
        -------
            Position of the entry in the OD list.

        """
        position = len(self.entries)
        self.shortcuts.append(IRShortcut(name=f"H{entry.index:04X}", position=position))
        self.long_shortcuts.append(IRShortcut(name=f"H{entry.var_name}", position=position))
        self.entries.append(entry)
        return position

    def count(self, label: str) -> None:
        """Increment a counter bucket; empty labels are not counted."""
        if label:
            self.counters[label] = self.counters.get(label, 0) + 1

    def sorted_counters(self) -> list[tuple[str, int]]:
        """Get counters ordered by label."""
        return sorted(self.counters.items())

    def find_entry(self, index: int) -> IREntry | None:
        """Find an OD list row by object index."""
        for entry in self.entries:
            if entry.index == index:
                return entry
        return None
