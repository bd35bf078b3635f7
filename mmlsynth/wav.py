import logging
import wave

import numpy

import mmlsynth.synth


logger = logging.getLogger(__name__)


# 8-bit PCM in a WAV file is unsigned, centred on 128.
UNSIGNED_OFFSET = 128


def to_unsigned_bytes (samples: numpy.ndarray) -> bytes:

	"""
	Convert signed 8-bit samples to the unsigned bytes WAV expects.
	"""

	return (samples.astype(numpy.int16) + UNSIGNED_OFFSET).astype(numpy.uint8).tobytes()


def write_wav (path: str, rendering: mmlsynth.synth.Rendering) -> None:

	"""
	Write a rendering to an uncompressed mono 8-bit WAV file.
	"""

	with wave.open(path, 'wb') as f:
		f.setnchannels(rendering.channels)
		f.setsampwidth(rendering.bits_per_sample // 8)
		f.setframerate(rendering.sample_rate)
		f.writeframes(to_unsigned_bytes(rendering.samples))

	logger.info(f"Saved {path} ({rendering.seconds:.2f}s, {rendering.sample_rate} Hz)")
