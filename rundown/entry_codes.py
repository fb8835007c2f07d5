"""Entry-code derivation.

An entry code combines a division prefix with the entry's ordinal inside its
(event, division) bucket, e.g. A007. Codes depend on the current order of
the bucket, so they are derived on demand and never stored.
"""

from rundown import utils


def get_entry_index(participant, bucket_participants):
    """
    Returns the 1-based ordinal of a participant within a division bucket.

    Ungrouped participants use their position in the list. Grouped
    participants use a counter that advances once per first-seen group and
    once per ungrouped participant; every member of a group shares the value
    taken when the group was first seen.

    Args:
        participant (Participant): The participant to locate.
        bucket_participants (list[Participant]): The bucket's participants.

    Returns:
        int: Ordinal index, 0 if an ungrouped participant is absent, -1 if a
        grouped participant is absent.
    """
    if not participant.group_id:
        for i, p in enumerate(bucket_participants):
            if p is participant:
                return i + 1
        return 0

    counter = 0
    group_indices = {}
    for p in bucket_participants:
        if p.group_id:
            if p.group_id not in group_indices:
                counter += 1
                group_indices[p.group_id] = counter
            if p.id == participant.id:
                return group_indices[p.group_id]
        else:
            counter += 1
            if p.id == participant.id:
                return counter
    return -1


def get_participant_entry_code(participant, hierarchy):
    """
    Resolves the full entry code for a participant.

    Args:
        participant (Participant): The participant.
        hierarchy (list[EventBucket]): A freshly built hierarchy.

    Returns:
        str: Code such as "A001", or "-" when the event or division bucket
        is missing or no prefix is configured.
    """
    event_bucket = next(
        (b for b in hierarchy if b.event.code == participant.event_code), None
    )
    if event_bucket is None:
        return utils.UNASSIGNED_CODE
    division_bucket = event_bucket.get_division(participant.division)
    if division_bucket is None:
        return utils.UNASSIGNED_CODE
    if not division_bucket.entry_code:
        return utils.UNASSIGNED_CODE

    index = get_entry_index(participant, division_bucket.participants)
    return utils.format_entry_code(division_bucket.entry_code, index)


def get_entry_codes(participants, hierarchy):
    """
    Resolves entry codes for many participants against one hierarchy.

    Returns:
        dict[str, str]: Participant id -> entry code.
    """
    return {p.id: get_participant_entry_code(p, hierarchy) for p in participants}
