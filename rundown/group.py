class Group:
    """
    A base class representing an ordered collection of participants.
    Provides methods for querying and counting entries.
    """

    participants: list

    @property
    def total(self):
        """Returns the number of roster rows in the group."""
        return len(self.participants)

    @property
    def count(self):
        """
        Returns the number of unique competition entries in the group.

        Each distinct group id counts once at its first occurrence; each
        ungrouped participant counts once.
        """
        seen_groups = set()
        unique_entries = 0
        for p in self.participants:
            if p.group_id:
                if p.group_id not in seen_groups:
                    seen_groups.add(p.group_id)
                    unique_entries += 1
            else:
                unique_entries += 1
        return unique_entries

    def get_participant_by_id(self, id):
        """
        Returns the participant with the specified ID.

        Raises:
            ValueError if no participant with the given ID is found.
        """
        for p in self.participants:
            if p.id == id:
                return p
        raise ValueError(f"Participant ID {id} not found")

    def get_entries(self):
        """
        Collapses participants into competition entries.

        Returns:
            list[list[Participant]]: One list per entry, in order of each
            entry's first member. Grouped entries hold every member of the
            group present in this collection.
        """
        entries = []
        by_group = {}
        for p in self.participants:
            if p.group_id:
                if p.group_id not in by_group:
                    by_group[p.group_id] = []
                    entries.append(by_group[p.group_id])
                by_group[p.group_id].append(p)
            else:
                entries.append([p])
        return entries
