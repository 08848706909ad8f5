"""Batching of secondary "jump to listing" buttons into pageable groups."""

from __future__ import annotations

from docbot.docs.pages import KeyboardRow, button, group_payload

DEFAULT_GROUP_SIZE = 3


class AdditionalGrouping:
    """Collects keyboard rows into groups of at most *group_size* rows.

    Once finalized, each group is a small page of buttons of its own: when
    there is more than one group, every group gains a pager row whose
    payloads switch the displayed group instead of the displayed page.
    """

    def __init__(self, group_size: int = DEFAULT_GROUP_SIZE):
        self.group_size = group_size
        self.groups: list[list[KeyboardRow]] = []

    def append_row(self, row: KeyboardRow) -> None:
        if self.groups and len(self.groups[-1]) < self.group_size:
            self.groups[-1].append(row)
        else:
            self.groups.append([row])

    def finalize_groups(self) -> list[list[KeyboardRow]]:
        total = len(self.groups)
        if total > 1:
            for i, group in enumerate(self.groups):
                controls = []
                if i < total - 1:
                    controls.append(button("↓", group_payload(i + 1)))
                if i > 0:
                    controls.append(button("↑", group_payload(i - 1)))
                group.append(tuple(controls))
        return self.groups
