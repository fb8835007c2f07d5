import logging

from rundown import utils
from rundown.algorithms import RundownGenerator, register
from rundown.entry_codes import get_entry_codes
from rundown.group import Group

logger = logging.getLogger(__name__)


class _Scope(Group):
    def __init__(self, participants):
        self.participants = participants


@register
class Greedy(RundownGenerator):
    """
    Deterministic single-pass heat packing.

    Participants are ordered by event, then entry code, then store order.
    Grouped rows collapse into one entry, and entries fill stations heat by
    heat. A new heat opens when the event changes mid-heat or when the
    entry's event has no free station left.
    """

    def generate(self, namelist, event_code=None):

        if event_code:
            namelist.clear_rundown(event_code)
            scope = [p for p in namelist.participants if p.event_code == event_code]
        else:
            namelist.clear_rundown()
            scope = list(namelist.participants)

        if not scope:
            logger.info("Nothing to schedule for %s", event_code or "any event")
            return

        ordered = self.sort_participants(namelist, scope)
        entries = _Scope(ordered).get_entries()
        logger.debug("Scheduling %d entries", len(entries))

        current_heat = 1
        if event_code:
            other_heats = [
                p.heat
                for p in namelist.participants
                if p.event_code != event_code and p.heat is not None
            ]
            if other_heats:
                current_heat = max(other_heats) + 1

        first_event_code = entries[0][0].event_code
        initial_config = namelist.get_rundown_config(event_code or first_event_code)
        current_time = initial_config.start_time

        # append mode: resume after the last heat already on the schedule
        if event_code and current_heat > 1:
            current_time = self.resume_time(namelist, current_time)

        current_station = 1
        last_event_code = ""

        for entry in entries:
            entry_event = utils.norm(entry[0].event_code)
            entry_config = namelist.get_rundown_config(entry_event)

            # event boundary: never share a heat across events
            if last_event_code and entry_event != last_event_code:
                if current_station > 1:
                    previous_config = namelist.get_rundown_config(last_event_code)
                    current_heat += 1
                    current_station = 1
                    current_time = utils.add_minutes(
                        current_time, previous_config.heat_duration
                    )
                    logger.debug(
                        "Heat %d opened at %s for %s",
                        current_heat,
                        current_time,
                        entry_event,
                    )
            last_event_code = entry_event

            # capacity: the heat is full for this event
            if current_station > entry_config.station_count:
                current_heat += 1
                current_station = 1
                current_time = utils.add_minutes(
                    current_time, entry_config.heat_duration
                )
                logger.debug(
                    "Heat %d opened at %s, stations full", current_heat, current_time
                )

            for p in entry:
                p.set_schedule(current_heat, current_station, current_time)
            current_station += 1

        logger.info(
            "Scheduled %d entries for %s, last heat %d at %s",
            len(entries),
            event_code or "all events",
            current_heat,
            current_time,
        )

    def sort_participants(self, namelist, participants):
        """
        Orders participants for scheduling.

        Keys, in priority order: configured event index (configured events
        before unconfigured ones, unconfigured ones by code), entry code
        ("-" last), then original order through sort stability.

        Args:
            namelist (Namelist): Source of events and the hierarchy.
            participants (list[Participant]): Participants to order.

        Returns:
            list[Participant]: A new, sorted list.
        """
        event_index = {}
        for i, event in enumerate(namelist.events):
            event_index.setdefault(utils.norm(event.code), i)
        codes = get_entry_codes(participants, namelist.hierarchy)

        def sort_key(p):
            code = utils.norm(p.event_code)
            if code in event_index:
                event_key = (0, event_index[code], "")
            else:
                event_key = (1, 0, code)
            entry_code = codes[p.id]
            if entry_code == utils.UNASSIGNED_CODE:
                code_key = (1, "")
            else:
                code_key = (0, entry_code)
            return event_key + code_key

        return sorted(participants, key=sort_key)

    def resume_time(self, namelist, fallback):
        """
        Returns the end time of the last scheduled heat on the roster.

        The last participant by heat number (store order breaking ties) is
        taken; its start time plus its event's heat duration is the resume
        point. Returns `fallback` when nothing is scheduled.
        """
        timed = sorted(
            (p for p in namelist.participants if p.schedule_time),
            key=lambda p: p.heat or 0,
        )
        if not timed:
            return fallback
        last = timed[-1]
        last_config = namelist.get_rundown_config(last.event_code)
        return utils.add_minutes(last.schedule_time, last_config.heat_duration)
