import dataclasses
import logging
import math
import typing

import mmlsynth.channel
import mmlsynth.settings
import mmlsynth.synth
import mmlsynth.waveforms


logger = logging.getLogger(__name__)


DEFAULT_BPM = 100
BITS_PER_SAMPLE = 8


@dataclasses.dataclass
class Score:

	"""
	A compiled piece: global tempo, channels and synthesis settings.
	"""

	bpm: float = DEFAULT_BPM
	channels: typing.List[mmlsynth.channel.Channel] = dataclasses.field(default_factory=list)
	settings: mmlsynth.settings.SynthSettings = dataclasses.field(default_factory=mmlsynth.settings.SynthSettings)


	def __post_init__ (self) -> None:

		self.set_bpm(self.bpm)


	def set_bpm (self, bpm: float) -> None:

		"""
		Set the global tempo.
		"""

		if bpm <= 0:
			raise ValueError("BPM must be positive")

		self.bpm = bpm


	def add_channel (self, channel: mmlsynth.channel.Channel) -> None:

		self.channels.append(channel)


	@property
	def sample_rate (self) -> int:

		return self.settings.sample_rate


	def seconds (self) -> float:

		"""
		Playing time of the longest channel (0.0 for an empty score).
		"""

		return max((channel.seconds(self.bpm) for channel in self.channels), default=0.0)


	def buffer_length (self) -> int:

		"""
		Number of samples the rendered buffer holds, padding included.
		"""

		return self.sample_rate * math.ceil(self.seconds()) + self.settings.padding_samples


	def render (self, generators: typing.Mapping[str, mmlsynth.waveforms.Generator] = mmlsynth.waveforms.WAVEFORMS) -> mmlsynth.synth.Rendering:

		"""
		Synthesise the score into an 8-bit sample buffer.
		"""

		return mmlsynth.synth.render(
			self.channels,
			bpm = self.bpm,
			length = self.buffer_length(),
			settings = self.settings,
			generators = generators
		)
