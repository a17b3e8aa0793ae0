"""
Phase bookkeeping for the discourse activity.

A discourse moves through four sequential phases. The stored phase number selects exactly one of four
phase flags; deadlines of the following phase decide whether a switch is due.
"""
from collections import OrderedDict

import pytz

from discourse_activity import messages


class Phases(object):
    SOLO = 1
    GROUP_ONE = 2
    GROUP_TWO = 3
    COLLABORATIVE = 4

    ALL = (SOLO, GROUP_ONE, GROUP_TWO, COLLABORATIVE)
    DEFAULT = SOLO

    # phase number -> field name suffix, as used in deadline/hint field names
    FIELD_SUFFIXES = OrderedDict([
        (SOLO, 'one'),
        (GROUP_ONE, 'two'),
        (GROUP_TWO, 'three'),
        (COLLABORATIVE, 'four'),
    ])

    HUMAN_NAMES_MAP = {
        SOLO: messages.PHASE_ONE,
        GROUP_ONE: messages.PHASE_TWO,
        GROUP_TWO: messages.PHASE_THREE,
        COLLABORATIVE: messages.PHASE_FOUR,
    }

    @classmethod
    def get_human_name(cls, phase):
        return cls.HUMAN_NAMES_MAP.get(phase)

    @classmethod
    def deadline_field(cls, phase):
        return 'deadlinephase' + cls.FIELD_SUFFIXES[phase]

    @classmethod
    def hint_field(cls, phase):
        return 'hintphase' + cls.FIELD_SUFFIXES[phase]


def normalize_phase(value):
    """
    Returns ``value`` as a phase number, falling back to the solo phase for anything that is not one of the
    four phases.

    :param value: phase number, as int or numeric string
    :rtype: int
    """
    try:
        phase = int(value)
    except (TypeError, ValueError):
        return Phases.DEFAULT

    if phase not in Phases.ALL:
        return Phases.DEFAULT
    return phase


class PhaseState(object):
    """
    Four mutually exclusive phase flags derived from the stored phase number
    """
    def __init__(self, activephase):
        self.activephase = normalize_phase(activephase)

    @property
    def phase_one(self):
        return self.activephase == Phases.SOLO

    @property
    def phase_two(self):
        return self.activephase == Phases.GROUP_ONE

    @property
    def phase_three(self):
        return self.activephase == Phases.GROUP_TWO

    @property
    def phase_four(self):
        return self.activephase == Phases.COLLABORATIVE

    @property
    def flags(self):
        return (self.phase_one, self.phase_two, self.phase_three, self.phase_four)

    @property
    def name(self):
        return Phases.get_human_name(self.activephase)

    def as_dict(self):
        return {
            'activephaseone': self.phase_one,
            'activephasetwo': self.phase_two,
            'activephasethree': self.phase_three,
            'activephasefour': self.phase_four,
        }


def as_utc(value):
    """
    Naive datetimes are treated as UTC, so they compare with aware ones
    """
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=pytz.UTC)
    return value


def resolve_phase_switch(now, activephase, deadlines):
    """
    Decides whether an automatic phase switch is due.

    A phase is due once ``now`` is past the deadline of the phase that follows the active one. Phases
    without a deadline never become due, and the collaborative phase is final.

    :param datetime.datetime now: current time
    :param int activephase: currently active phase
    :param dict[int, datetime.datetime] deadlines: deadline per phase number, missing or None when unset
    :return: phase to switch to, or None
    :rtype: int or None
    """
    if activephase not in Phases.ALL or activephase == Phases.COLLABORATIVE:
        return None

    next_phase = activephase + 1
    deadline = as_utc(deadlines.get(next_phase))
    if deadline is None:
        return None

    if as_utc(now) > deadline:
        return next_phase
    return None


def deadlines_in_order(deadlines):
    """
    Checks that the set deadlines are strictly increasing with phase number.

    :param dict[int, datetime.datetime] deadlines: deadline per phase number
    :rtype: bool
    """
    set_deadlines = [as_utc(deadlines[phase]) for phase in Phases.ALL if deadlines.get(phase) is not None]
    return all(earlier < later for earlier, later in zip(set_deadlines, set_deadlines[1:]))
