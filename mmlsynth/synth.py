"""Audio synthesis engine.

Renders channels of notes into one mono buffer of signed 8-bit samples.

Each channel plays its notes back to back from the start of the buffer. A note
lasts ``round((4 / duration) * (60 / bpm) * sample_rate)`` samples and is shaped
by two linear ramps:

- **attack**: the first ``attack_seconds`` fade in from silence.
- **decay**: the last ``decay_seconds`` fade out to silence. The ramp is
  measured in absolute samples, so a note shorter than the decay never reaches
  full amplitude.

Peak amplitude is ``255 * 0.5 * volume / 255`` divided by the number of
channels. Every channel's rounded contribution is summed in a wide integer
accumulator and the mix is clamped to [-128, 127] once at the end.

A note whose timbre has no generator, or whose pitch is too high to compute, is
logged, recorded on the returned `Rendering` and left silent; rendering carries
on with the next note.
"""

import dataclasses
import logging
import typing

import numpy

import mmlsynth.channel
import mmlsynth.note
import mmlsynth.pitch
import mmlsynth.settings
import mmlsynth.waveforms


logger = logging.getLogger(__name__)


MAX_SAMPLE_VALUE = 255
SAMPLE_MIN = -128
SAMPLE_MAX = 127


class PitchOutOfRange (mmlsynth.pitch.MmlError, ValueError):

	"""
	A note whose octave puts its frequency beyond floating point range.
	"""


@dataclasses.dataclass
class Rendering:

	"""
	A rendered buffer plus what went wrong while producing it.
	"""

	samples: numpy.ndarray
	sample_rate: int
	errors: typing.List[mmlsynth.pitch.MmlError] = dataclasses.field(default_factory=list)
	channels: int = 1
	bits_per_sample: int = 8


	@property
	def seconds (self) -> float:

		return len(self.samples) / self.sample_rate


	@property
	def degraded (self) -> bool:

		"""True if any note was left silent because of an unknown timbre or pitch."""

		return bool(self.errors)


def note_samples (duration_seconds: float, sample_rate: int) -> int:

	"""Number of samples a note of the given length occupies."""

	return int(round(duration_seconds * sample_rate))


def note_frequency (note: mmlsynth.note.Note) -> float:

	"""Frequency of a note, as a `PitchOutOfRange` if it cannot be represented."""

	try:
		return note.frequency

	except OverflowError as exc:
		raise PitchOutOfRange(f"Octave {note.octave} is out of range") from exc


def envelope (count: int, span: int, amplitude: float, attack_samples: int, decay_samples: int) -> numpy.ndarray:

	"""
	Per-sample amplitude for the first ``span`` samples of a ``count``-sample note.
	"""

	phase = numpy.arange(span, dtype=numpy.float64)
	remaining = count - phase
	env = numpy.full(span, float(amplitude))

	if attack_samples > 0:
		rising = phase < attack_samples
		env[rising] *= phase[rising] / attack_samples

	if decay_samples > 0:
		falling = remaining < decay_samples
		env[falling] *= remaining[falling] / decay_samples

	return env


def render_channel (
	channel: mmlsynth.channel.Channel,
	out: numpy.ndarray,
	bpm: float,
	channel_count: int,
	settings: mmlsynth.settings.SynthSettings,
	generators: typing.Mapping[str, mmlsynth.waveforms.Generator],
	errors: typing.List[mmlsynth.pitch.MmlError],
) -> None:

	"""
	Add one channel's contribution into the accumulator ``out``.
	"""

	sample_rate = settings.sample_rate
	length = len(out)
	offset = 0

	for note in channel.notes:

		if offset >= length:
			break

		count = note_samples(note.seconds(bpm), sample_rate)
		span = min(count, length - offset)

		if note.volume == 0 or span <= 0:
			offset += count
			continue

		try:
			generator = mmlsynth.waveforms.get_generator(note.timbre, generators)
			frequency = note_frequency(note)

		except (mmlsynth.waveforms.InvalidGeneratorId, PitchOutOfRange) as exc:
			logger.error(f"Channel {channel.name!r}: {exc} - note {note} will be silent")
			errors.append(exc)
			offset += count
			continue

		amplitude = MAX_SAMPLE_VALUE * 0.5 * (note.volume / mmlsynth.note.MAX_VOLUME) / channel_count
		env = envelope(count, span, amplitude, settings.attack_samples, settings.decay_samples)

		t = numpy.arange(span, dtype=numpy.float64) / sample_rate
		signal = generator(frequency, t)

		out[offset:offset + span] += numpy.rint(signal * env).astype(numpy.int32)
		offset += count


def render (
	channels: typing.Sequence[mmlsynth.channel.Channel],
	bpm: float,
	length: int,
	settings: typing.Optional[mmlsynth.settings.SynthSettings] = None,
	generators: typing.Mapping[str, mmlsynth.waveforms.Generator] = mmlsynth.waveforms.WAVEFORMS,
) -> Rendering:

	"""
	Render channels into a buffer of ``length`` signed 8-bit samples.

	Parameters:
		channels: The channels to mix, in a fixed order.
		bpm: Global tempo.
		length: Buffer length in samples. Notes past the end are cut off.
		settings: Sample rate and envelope settings (defaults if omitted).
		generators: Timbre id to generator mapping.

	Returns:
		A `Rendering` holding the int8 samples and any per-note errors.
	"""

	if bpm <= 0:
		raise ValueError("BPM must be positive")

	if settings is None:
		settings = mmlsynth.settings.SynthSettings()

	mix = numpy.zeros(length, dtype=numpy.int32)
	errors: typing.List[mmlsynth.pitch.MmlError] = []

	for channel in channels:
		render_channel(channel, mix, bpm, len(channels), settings, generators, errors)

	clipped = int(numpy.count_nonzero((mix < SAMPLE_MIN) | (mix > SAMPLE_MAX)))

	if clipped:
		logger.warning(f"{clipped} samples clipped to the 8-bit range")

	samples = numpy.clip(mix, SAMPLE_MIN, SAMPLE_MAX).astype(numpy.int8)

	return Rendering(samples=samples, sample_rate=settings.sample_rate, errors=errors)
