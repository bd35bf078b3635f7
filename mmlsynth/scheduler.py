"""Instruction scheduling for one line of channel MML.

Every rule in the table is scanned over the whole line in registration order.
A rule may only claim characters no earlier rule has claimed, so the order of
the table settles ambiguous text: ``O2D`` is an octave set followed by a bare
``D``, never an octave letter followed by ``2D``. The accepted matches are then
returned sorted by where they start in the line, which restores left-to-right
semantics regardless of the order the rules were scanned in.

Rule kinds (registration order):

- ``timbre``: ``@(name)``
- ``volume``: ``V<n>``
- ``volume_up``: ``(<n>``
- ``volume_down``: ``)<n>``
- ``octave``: ``O<n>``
- ``octave_up``: ``<``
- ``octave_down``: ``>``
- ``length``: ``L<n>``
- ``tempo``: ``T<n>``, claimed here so its digits never reach a note; the tempo
  itself is read once for the whole score
- ``timed_note``: ``<n><note>``, e.g. ``16B`` or ``4A#``
- ``note``: ``<note>``, e.g. ``C`` or ``f+``

Anything no rule matches (spaces, ``|``, stray characters) is ignored.
"""

import dataclasses
import logging
import re
import typing


logger = logging.getLogger(__name__)


@dataclasses.dataclass (frozen=True)
class Rule:

	"""
	A named instruction pattern. Group 1, when present, is the argument.
	"""

	kind: str
	pattern: typing.Pattern[str]


@dataclasses.dataclass (order=True, frozen=True)
class Action:

	"""
	An accepted instruction occurrence, ordered by its offset in the line.
	"""

	offset: int
	kind: str = dataclasses.field(compare=False)
	argument: str = dataclasses.field(compare=False, default="")


NOTE = r"[A-Ga-gR][#+-]?"

RULES: typing.Tuple[Rule, ...] = (
	Rule("timbre", re.compile(r"@\((\w+)\)")),
	Rule("volume", re.compile(r"[Vv](\d+)")),
	Rule("volume_up", re.compile(r"\((\d+)")),
	Rule("volume_down", re.compile(r"\)(\d+)")),
	Rule("octave", re.compile(r"[Oo](\d+)")),
	Rule("octave_up", re.compile(r"<")),
	Rule("octave_down", re.compile(r">")),
	Rule("length", re.compile(r"[Ll](\d+)")),
	Rule("tempo", re.compile(r"[Tt](\d+)")),
	Rule("timed_note", re.compile(r"(\d+" + NOTE + r")")),
	Rule("note", re.compile(r"(" + NOTE + r")")),
)


def schedule (line: str, rules: typing.Sequence[Rule] = RULES) -> typing.List[Action]:

	"""
	Find every non-overlapping instruction in a line, in source order.

	Parameters:
		line: One line of comment-free channel MML.
		rules: The rule table, highest priority first.

	Returns:
		Action records sorted by their starting offset in the line.

	Example:
		```python
		[(a.offset, a.kind, a.argument) for a in schedule("O2D")]
		# → [(0, "octave", "2"), (2, "note", "D")]
		```
	"""

	claimed = [False] * len(line)
	actions: typing.List[Action] = []

	for rule in rules:

		for match in rule.pattern.finditer(line):

			start, end = match.span()

			if any(claimed[start:end]):
				continue

			claimed[start:end] = [True] * (end - start)

			argument = match.group(1) if rule.pattern.groups > 0 else ""
			actions.append(Action(offset=start, kind=rule.kind, argument=argument))

			logger.debug(f"Matched {rule.kind} {argument!r} at offset {start}")

	actions.sort()

	return actions
