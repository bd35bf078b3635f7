import re
import typing

import mmlsynth.scheduler


def _summary (line: str, rules: typing.Sequence[mmlsynth.scheduler.Rule] = mmlsynth.scheduler.RULES) -> typing.List[typing.Tuple[int, str, str]]:

	return [(action.offset, action.kind, action.argument) for action in mmlsynth.scheduler.schedule(line, rules)]


def test_rule_table_order () -> None:

	"""Rules are registered highest priority first."""

	kinds = [rule.kind for rule in mmlsynth.scheduler.RULES]

	assert kinds == [
		"timbre",
		"volume",
		"volume_up",
		"volume_down",
		"octave",
		"octave_up",
		"octave_down",
		"length",
		"tempo",
		"timed_note",
		"note",
	]


def test_actions_follow_source_order () -> None:

	"""The octave set runs before the note even though notes are matched last."""

	assert _summary("O2D") == [(0, "octave", "2"), (2, "note", "D")]


def test_digits_after_a_directive_are_not_a_note_length () -> None:

	"""``V100C`` is a volume set and a bare note, not ``100C``."""

	assert _summary("V100C") == [(0, "volume", "100"), (4, "note", "C")]


def test_tempo_digits_are_not_a_note_length () -> None:

	"""``T90CD`` is a tempo and two bare notes, not a ``90C``."""

	assert _summary("T90CD") == [(0, "tempo", "90"), (3, "note", "C"), (4, "note", "D")]
	assert _summary("t90C") == [(0, "tempo", "90"), (3, "note", "C")]


def test_timed_note_wins_over_bare_note () -> None:

	"""A leading number belongs to the note that follows it."""

	assert _summary("16B 4A#") == [(0, "timed_note", "16B"), (4, "timed_note", "4A#")]


def test_timbre_name_is_not_read_as_notes () -> None:

	"""Letters inside ``@(...)`` are claimed by the timbre rule."""

	assert _summary("@(sawtooth)C") == [(0, "timbre", "sawtooth"), (11, "note", "C")]


def test_volume_steps () -> None:

	"""``(`` and ``)`` carry their amounts."""

	assert _summary("C(10E)5G") == [
		(0, "note", "C"),
		(1, "volume_up", "10"),
		(4, "note", "E"),
		(5, "volume_down", "5"),
		(7, "note", "G"),
	]


def test_octave_shifts_have_no_argument () -> None:

	"""``<`` and ``>`` produce actions with an empty argument."""

	assert _summary("<C>") == [(0, "octave_up", ""), (1, "note", "C"), (2, "octave_down", "")]


def test_directive_letters_accept_lowercase () -> None:

	"""``o``, ``v`` and ``l`` work like their uppercase forms."""

	assert _summary("o3 v50 l16 c") == [
		(0, "octave", "3"),
		(3, "volume", "50"),
		(7, "length", "16"),
		(11, "note", "c"),
	]


def test_inert_characters_are_ignored () -> None:

	"""Bars, spaces and unknown characters produce no actions."""

	assert _summary(" | ** ~ ") == []
	assert _summary("") == []


def test_rest () -> None:

	"""``R`` is scheduled as a note."""

	assert _summary("R8R") == [(0, "note", "R"), (1, "timed_note", "8R")]


def test_overlapping_match_is_skipped_not_fatal () -> None:

	"""A rejected match does not stop later matches of the same rule."""

	assert _summary("O2D 4E") == [(0, "octave", "2"), (2, "note", "D"), (4, "timed_note", "4E")]


def test_custom_rule_table () -> None:

	"""A caller-supplied table is honoured, including its priority order."""

	rules = (
		mmlsynth.scheduler.Rule("tie", re.compile(r"&")),
		mmlsynth.scheduler.Rule("note", re.compile(r"([A-G])")),
	)

	assert _summary("C&D", rules) == [(0, "note", "C"), (1, "tie", ""), (2, "note", "D")]


def test_actions_order_by_offset () -> None:

	"""Action records compare by offset only."""

	first = mmlsynth.scheduler.Action(offset=1, kind="note", argument="C")
	second = mmlsynth.scheduler.Action(offset=5, kind="volume", argument="1")

	assert sorted([second, first]) == [first, second]
