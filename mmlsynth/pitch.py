"""Note names and scale indices.

This module converts between MML note names and chromatic scale indices, and
declares the error types shared by the rest of the package.

Scale index convention: ``C = 0, C# = 1, D = 2, ... B = 11``.

Module-level constants:
- `NATURAL_SCALE_INDEX`: Maps the seven natural letters to their scale index.
- `REST_NAME`: The note name that denotes silence.

Module-level helpers:
- `name_to_scale_index(name)`: Decode a note name. The result may be -1
  (``C-``) or 12 (``B#``); the caller applies the octave carry.
- `scale_index_to_name(index)`: Encode a scale index. Non-natural indices are
  always spelled with a sharp (``1 -> "C#"``).
"""

import re
import typing


NATURAL_SCALE_INDEX: typing.Dict[str, int] = {
	"C": 0,
	"D": 2,
	"E": 4,
	"F": 5,
	"G": 7,
	"A": 9,
	"B": 11,
}

SCALE_INDEX_TO_NATURAL: typing.Dict[int, str] = {index: name for name, index in NATURAL_SCALE_INDEX.items()}

ACCIDENTAL_OFFSET: typing.Dict[str, int] = {
	"": 0,
	"#": 1,
	"+": 1,
	"-": -1,
}

REST_NAME = "R"

SEMITONES_PER_OCTAVE = 12

NOTE_NAME_PATTERN = re.compile(r"^([A-Ga-gR])([#+-]?)$")


class MmlError (Exception):

	"""
	Base class for every error raised while compiling or rendering MML.
	"""


class InvalidNoteName (MmlError, ValueError):

	"""
	A note token does not match ``[A-Ga-gR][#+-]?``.
	"""


class InvalidScaleIndex (MmlError, ValueError):

	"""
	A scale index outside 0-11 was requested for decoding.
	"""


class InvalidDuration (MmlError, ValueError):

	"""
	A note duration denominator below 1.
	"""


def is_rest (name: str) -> bool:

	"""Return True if the note name denotes a rest.

	Only the letter counts, so ``R#`` and ``R-`` are rests too.
	"""

	return name[:1] == REST_NAME


def name_to_scale_index (name: str) -> int:

	"""Decode a note name into a scale index.

	Parameters:
		name: Letter ``A``-``G`` (either case) or ``R``, with an optional
			accidental: ``#`` or ``+`` raises a semitone, ``-`` lowers one.

	Returns:
		The scale index of the letter plus the accidental offset. This is
		**not** wrapped, so ``"C-"`` gives -1 and ``"B#"`` gives 12. A rest
		always gives 0.

	Raises:
		InvalidNoteName: If the name is malformed.

	Example:
		```python
		name_to_scale_index("a")   # → 9
		name_to_scale_index("F+")  # → 6
		name_to_scale_index("C-")  # → -1
		```
	"""

	match = NOTE_NAME_PATTERN.match(name)

	if match is None:
		raise InvalidNoteName(f"Invalid note name: {name!r}")

	letter, accidental = match.groups()

	if is_rest(letter):
		return 0

	return NATURAL_SCALE_INDEX[letter.upper()] + ACCIDENTAL_OFFSET[accidental]


def scale_index_to_name (index: int) -> str:

	"""Encode a scale index (0-11) as a note name.

	Natural indices give the bare letter. Every other index is spelled as the
	natural one semitone below with a ``#`` suffix, so decoding the result
	with `name_to_scale_index` gives the index back.

	Raises:
		InvalidScaleIndex: If the index is outside 0-11.
	"""

	if not 0 <= index < SEMITONES_PER_OCTAVE:
		raise InvalidScaleIndex(f"Scale index must be 0-11, got {index}")

	if index in SCALE_INDEX_TO_NATURAL:
		return SCALE_INDEX_TO_NATURAL[index]

	return SCALE_INDEX_TO_NATURAL[index - 1] + "#"
