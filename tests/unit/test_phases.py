from datetime import datetime
from unittest import TestCase

import ddt

from discourse_activity.phases import (
    Phases, PhaseState, normalize_phase, resolve_phase_switch, deadlines_in_order
)
from tests.utils import utc


@ddt.ddt
class TestNormalizePhase(TestCase):
    @ddt.data(1, 2, 3, 4)
    def test_known_phases_kept(self, phase):
        self.assertEqual(normalize_phase(phase), phase)

    @ddt.data(('1', 1), ('2', 2), ('3', 3), ('4', 4))
    @ddt.unpack
    def test_numeric_strings(self, value, expected_phase):
        self.assertEqual(normalize_phase(value), expected_phase)

    @ddt.data(0, 5, -1, 100, None, '', 'two', '2.5', [], {})
    def test_unknown_phases_fall_back_to_solo_phase(self, value):
        self.assertEqual(normalize_phase(value), Phases.SOLO)


@ddt.ddt
class TestPhaseState(TestCase):
    @ddt.data(
        (1, (True, False, False, False)),
        (2, (False, True, False, False)),
        (3, (False, False, True, False)),
        (4, (False, False, False, True)),
        (0, (True, False, False, False)),
        (7, (True, False, False, False)),
        (None, (True, False, False, False)),
    )
    @ddt.unpack
    def test_flags(self, activephase, expected_flags):
        state = PhaseState(activephase)
        self.assertEqual(state.flags, expected_flags)

    @ddt.data(-3, 0, 1, 2, 3, 4, 5, 'abc')
    def test_exactly_one_flag_set(self, activephase):
        self.assertEqual(sum(PhaseState(activephase).flags), 1)

    def test_as_dict(self):
        self.assertEqual(PhaseState(3).as_dict(), {
            'activephaseone': False,
            'activephasetwo': False,
            'activephasethree': True,
            'activephasefour': False,
        })

    @ddt.data(
        (1, u"Solo phase"),
        (2, u"1st group phase"),
        (3, u"2nd group phase"),
        (4, u"Collaborative phase"),
    )
    @ddt.unpack
    def test_name(self, activephase, expected_name):
        self.assertEqual(PhaseState(activephase).name, expected_name)


@ddt.ddt
class TestResolvePhaseSwitch(TestCase):
    deadlines = {
        Phases.SOLO: utc(2021, 5, 1),
        Phases.GROUP_ONE: utc(2021, 5, 10),
        Phases.GROUP_TWO: utc(2021, 5, 20),
        Phases.COLLABORATIVE: utc(2021, 5, 30),
    }

    @ddt.data(
        # before the 1st group phase starts nothing is due
        (utc(2021, 5, 5), 1, None),
        (utc(2021, 5, 10), 1, None),
        (utc(2021, 5, 10, 0, 0, 1), 1, 2),
        (utc(2021, 5, 15), 2, None),
        (utc(2021, 5, 21), 2, 3),
        (utc(2021, 5, 25), 3, None),
        (utc(2021, 5, 31), 3, 4),
        # only the phase right after the active one is considered
        (utc(2021, 6, 15), 1, 2),
        (utc(2021, 6, 15), 2, 3),
        # collaborative phase is final
        (utc(2021, 6, 15), 4, None),
    )
    @ddt.unpack
    def test_resolve(self, now, activephase, expected_phase):
        self.assertEqual(resolve_phase_switch(now, activephase, self.deadlines), expected_phase)

    @ddt.data(1, 2, 3)
    def test_missing_deadline_never_due(self, activephase):
        self.assertIsNone(resolve_phase_switch(utc(2030, 1, 1), activephase, {}))
        self.assertIsNone(
            resolve_phase_switch(utc(2030, 1, 1), activephase, {phase: None for phase in Phases.ALL})
        )

    @ddt.data(0, 5, None)
    def test_unknown_active_phase(self, activephase):
        self.assertIsNone(resolve_phase_switch(utc(2030, 1, 1), activephase, self.deadlines))

    @ddt.data(
        (datetime(2021, 1, 5), {Phases.GROUP_ONE: utc(2021, 1, 2)}, 2),
        (utc(2021, 1, 5), {Phases.GROUP_ONE: datetime(2021, 1, 2)}, 2),
        (utc(2021, 1, 1), {Phases.GROUP_ONE: datetime(2021, 1, 2)}, None),
    )
    @ddt.unpack
    def test_naive_datetimes_treated_as_utc(self, now, deadlines, expected_phase):
        self.assertEqual(resolve_phase_switch(now, Phases.SOLO, deadlines), expected_phase)


@ddt.ddt
class TestDeadlinesInOrder(TestCase):
    @ddt.data(
        ({}, True),
        ({2: utc(2021, 1, 1)}, True),
        ({2: utc(2021, 1, 1), 3: utc(2021, 1, 2), 4: utc(2021, 1, 3)}, True),
        ({1: utc(2021, 1, 1), 2: utc(2021, 1, 2), 3: utc(2021, 1, 3), 4: utc(2021, 1, 4)}, True),
        ({2: utc(2021, 1, 1), 3: None, 4: utc(2021, 1, 3)}, True),
        ({2: utc(2021, 1, 2), 3: utc(2021, 1, 1)}, False),
        ({2: utc(2021, 1, 1), 3: utc(2021, 1, 1)}, False),
        ({2: utc(2021, 1, 3), 3: None, 4: utc(2021, 1, 1)}, False),
        ({1: utc(2021, 1, 5), 2: utc(2021, 1, 2)}, False),
        ({2: datetime(2021, 1, 1), 3: utc(2021, 1, 2)}, True),
        ({2: utc(2021, 1, 2), 3: datetime(2021, 1, 1)}, False),
    )
    @ddt.unpack
    def test_deadlines_in_order(self, deadlines, expected_result):
        self.assertEqual(deadlines_in_order(deadlines), expected_result)
