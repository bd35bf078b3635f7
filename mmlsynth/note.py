import dataclasses

import mmlsynth.pitch


A4_FREQUENCY = 440.0
A4_SCALE_INDEX = 9
REFERENCE_OCTAVE = 4

MAX_VOLUME = 255


@dataclasses.dataclass (frozen=True)
class Note:

	"""
	One sounding or resting event in a channel.

	Equality compares scale index, duration, octave, volume and timbre only.
	A rest always has volume 0 but still takes up its full duration.
	"""

	scale_index: int
	duration: int
	octave: int
	volume: int
	timbre: str
	is_rest: bool = dataclasses.field(default=False, compare=False)


	def __post_init__ (self) -> None:

		"""
		Validate the scale index and duration, and silence rests.
		"""

		# Raises InvalidScaleIndex for anything outside 0-11.
		mmlsynth.pitch.scale_index_to_name(self.scale_index)

		if self.duration < 1:
			raise mmlsynth.pitch.InvalidDuration(f"Duration must be at least 1, got {self.duration}")

		if self.is_rest and self.volume != 0:
			object.__setattr__(self, "volume", 0)


	@classmethod
	def from_name (cls, name: str, duration: int, octave: int, volume: int, timbre: str) -> "Note":

		"""
		Build a note from an MML note name, applying the octave carry.

		``B#`` in octave 4 becomes ``C`` in octave 5, and ``C-`` in octave 5
		becomes ``B`` in octave 4.
		"""

		scale_index = mmlsynth.pitch.name_to_scale_index(name)

		if scale_index < 0:
			scale_index += mmlsynth.pitch.SEMITONES_PER_OCTAVE
			octave -= 1

		elif scale_index >= mmlsynth.pitch.SEMITONES_PER_OCTAVE:
			scale_index -= mmlsynth.pitch.SEMITONES_PER_OCTAVE
			octave += 1

		return cls(
			scale_index = scale_index,
			duration = duration,
			octave = octave,
			volume = volume,
			timbre = timbre,
			is_rest = mmlsynth.pitch.is_rest(name)
		)


	@property
	def name (self) -> str:

		"""The note name, sharps only (``"R"`` for a rest)."""

		if self.is_rest:
			return mmlsynth.pitch.REST_NAME

		return mmlsynth.pitch.scale_index_to_name(self.scale_index)


	@property
	def frequency (self) -> float:

		"""Equal-tempered frequency in Hz, A4 = 440."""

		semitones = (self.scale_index - A4_SCALE_INDEX) + mmlsynth.pitch.SEMITONES_PER_OCTAVE * (self.octave - REFERENCE_OCTAVE)

		return A4_FREQUENCY * 2 ** (semitones / mmlsynth.pitch.SEMITONES_PER_OCTAVE)


	@property
	def midi_pitch (self) -> int:

		"""MIDI note number (C4 = 60). May fall outside 0-127 for extreme octaves."""

		return mmlsynth.pitch.SEMITONES_PER_OCTAVE * (self.octave + 1) + self.scale_index


	def seconds (self, bpm: float) -> float:

		"""Length of the note in seconds at the given tempo."""

		return (4.0 / self.duration) * (60.0 / bpm)


	def __str__ (self) -> str:

		return f"{self.name}{self.octave} /{self.duration} vol={self.volume} {self.timbre}"
