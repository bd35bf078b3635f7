"""Waveform generators.

A generator maps a frequency in Hz and time offsets in seconds to signal values
in [-1.0, 1.0]. Time offsets are usually a numpy array covering a whole note,
but plain floats work too.

`WAVEFORMS` is the read-only registry the synthesis engine looks timbre ids up
in. Pass a different mapping to the engine to add or replace generators (the
tests do this to make ``noise`` deterministic).
"""

import math
import types
import typing

import numpy

import mmlsynth.pitch


Generator = typing.Callable[[float, typing.Any], typing.Any]


class InvalidGeneratorId (mmlsynth.pitch.MmlError, LookupError):

	"""
	No generator is registered under the requested timbre id.
	"""


def sine (frequency: float, t: typing.Any) -> typing.Any:

	"""sin(2πft)."""

	return numpy.sin(2 * math.pi * frequency * t)


def square (frequency: float, t: typing.Any) -> typing.Any:

	"""+1 for the first half of each period, -1 for the second."""

	period = 1.0 / frequency
	half = numpy.floor(numpy.mod(t, period) / (period / 2))

	return numpy.where(half % 2 == 0, 1.0, -1.0)


def sawtooth (frequency: float, t: typing.Any) -> typing.Any:

	"""Rises linearly from -1 to +1 over each period."""

	period = 1.0 / frequency

	return (numpy.mod(t, period) / period) * 2 - 1


def noise (frequency: float, t: typing.Any) -> typing.Any:

	"""Uniform white noise. Ignores frequency and time; unseeded."""

	return numpy.random.default_rng().uniform(-1.0, 1.0, size=numpy.shape(t))


WAVEFORMS: typing.Mapping[str, Generator] = types.MappingProxyType({
	"sin": sine,
	"square": square,
	"sawtooth": sawtooth,
	"noise": noise,
})


def get_generator (timbre: str, generators: typing.Mapping[str, Generator] = WAVEFORMS) -> Generator:

	"""
	Look up a generator by timbre id.

	Raises:
		InvalidGeneratorId: If the id is not registered.
	"""

	if timbre not in generators:
		raise InvalidGeneratorId(f"Unknown timbre {timbre!r} (available: {', '.join(sorted(generators))})")

	return generators[timbre]
