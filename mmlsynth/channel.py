import dataclasses
import logging
import re
import typing

import mmlsynth.note
import mmlsynth.scheduler


logger = logging.getLogger(__name__)


DEFAULT_OCTAVE = 4
DEFAULT_VOLUME = 200
DEFAULT_DURATION = 4
DEFAULT_TIMBRE = "sin"

TIMED_NOTE_PATTERN = re.compile(r"^(\d+)(.*)$")


@dataclasses.dataclass
class Channel:

	"""
	One monophonic part: notes in playback order.
	"""

	name: str = ""
	notes: typing.List[mmlsynth.note.Note] = dataclasses.field(default_factory=list)


	def add_note (self, note: mmlsynth.note.Note) -> None:

		"""
		Append a note to the end of the channel.
		"""

		self.notes.append(note)


	def seconds (self, bpm: float) -> float:

		"""
		Total playing time of the channel at the given tempo.
		"""

		return sum(note.seconds(bpm) for note in self.notes)


	def __len__ (self) -> int:

		return len(self.notes)


	def __iter__ (self) -> typing.Iterator[mmlsynth.note.Note]:

		return iter(self.notes)


@dataclasses.dataclass
class BuilderContext:

	"""
	The running state that notes inherit while a channel is being built.
	"""

	octave: int = DEFAULT_OCTAVE
	volume: int = DEFAULT_VOLUME
	duration: int = DEFAULT_DURATION
	timbre: str = DEFAULT_TIMBRE


class ChannelBuilder:

	"""
	Applies scheduled instructions to a context and collects the resulting notes.

	Each builder owns its channel and context, so channels never share state.
	Volume is not clamped: ``V300`` or repeated ``(`` steps are kept as given.
	"""

	def __init__ (self, channel: typing.Optional[Channel] = None, rules: typing.Sequence[mmlsynth.scheduler.Rule] = mmlsynth.scheduler.RULES) -> None:

		"""
		Start a builder with the default context.
		"""

		self.channel = channel if channel is not None else Channel()
		self.context = BuilderContext()
		self.rules = rules

		self._handlers: typing.Dict[str, typing.Callable[[str], None]] = {
			"timbre": self.set_timbre,
			"volume": lambda argument: self.set_volume(int(argument)),
			"volume_up": lambda argument: self.add_volume(int(argument)),
			"volume_down": lambda argument: self.add_volume(-int(argument)),
			"octave": lambda argument: self.set_octave(int(argument)),
			"octave_up": lambda argument: self.add_octave(1),
			"octave_down": lambda argument: self.add_octave(-1),
			"length": lambda argument: self.set_default_duration(int(argument)),
			"tempo": self.skip_tempo,
			"timed_note": self.add_note,
			"note": self.add_note,
		}


	def set_octave (self, octave: int) -> None:

		self.context.octave = octave
		logger.debug(f"Octave set to {self.context.octave}")


	def add_octave (self, delta: int) -> None:

		self.context.octave += delta
		logger.debug(f"Octave changed by {delta:+d} to {self.context.octave}")


	def set_default_duration (self, duration: int) -> None:

		self.context.duration = duration
		logger.debug(f"Default duration set to {self.context.duration}")


	def set_timbre (self, timbre: str) -> None:

		self.context.timbre = timbre
		logger.debug(f"Timbre set to {self.context.timbre!r}")


	def set_volume (self, volume: int) -> None:

		self.context.volume = volume
		logger.debug(f"Volume set to {self.context.volume}")


	def add_volume (self, delta: int) -> None:

		self.context.volume += delta
		logger.debug(f"Volume changed by {delta:+d} to {self.context.volume}")


	def skip_tempo (self, argument: str) -> None:

		"""Tempo is global to the score; inside a channel it only has to be consumed."""

		logger.debug(f"Tempo {argument} ignored by channel {self.channel.name!r}")


	def add_note (self, token: str) -> None:

		"""
		Append a note from a token such as ``"C"``, ``"f+"`` or ``"16B-"``.

		A leading number is the duration denominator; without one the
		context's default duration is used.
		"""

		match = TIMED_NOTE_PATTERN.match(token)

		if match is not None:
			duration = int(match.group(1))
			name = match.group(2)

		else:
			duration = self.context.duration
			name = token

		note = mmlsynth.note.Note.from_name(
			name,
			duration = duration,
			octave = self.context.octave,
			volume = self.context.volume,
			timbre = self.context.timbre
		)

		self.channel.add_note(note)
		logger.debug(f"Note added: {note}")


	def apply (self, action: mmlsynth.scheduler.Action) -> None:

		"""
		Dispatch one scheduled action to the matching mutator.
		"""

		if action.kind not in self._handlers:
			raise ValueError(f"Unknown action kind: {action.kind!r}")

		self._handlers[action.kind](action.argument)


	def feed_line (self, line: str) -> None:

		"""
		Schedule a single line and apply its actions in source order.
		"""

		for action in mmlsynth.scheduler.schedule(line, self.rules):
			self.apply(action)


	def feed (self, text: str) -> None:

		"""
		Feed a block of channel MML, line by line from the top.
		"""

		for line in text.splitlines():
			self.feed_line(line)


def build_channel (text: str, name: str = "", rules: typing.Sequence[mmlsynth.scheduler.Rule] = mmlsynth.scheduler.RULES) -> Channel:

	"""
	Build a channel from its complete MML text.
	"""

	builder = ChannelBuilder(Channel(name=name), rules=rules)
	builder.feed(text)

	return builder.channel
