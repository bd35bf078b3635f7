"""Reading MML source into a `Score`.

Source layout::

	T120                     /* header: only tempo matters here */
	:melody                  /* starts a channel named "melody" */
	L8 V150 CDEFG
	:bass
	O2 L2 C G

- ``/* ... */`` comments may span lines. Everything from ``/*`` to the next
  ``*/`` is removed and the text either side is joined up. A comment that is
  never closed runs to the end of the source.
- ``:<name>`` starts a channel. The rest of that line and every line up to
  the next marker belong to it.
- ``T<n>`` sets the tempo for the whole piece. The last one in the source
  wins, wherever it appears.
"""

import logging
import re
import typing

import mmlsynth.channel
import mmlsynth.score
import mmlsynth.settings


logger = logging.getLogger(__name__)


COMMENT_PATTERN = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
CHANNEL_MARKER_PATTERN = re.compile(r":(\w*)")
TEMPO_PATTERN = re.compile(r"[Tt](\d+)")


def strip_comments (text: str) -> str:

	"""
	Remove block comments, splicing the surrounding text together.
	"""

	return COMMENT_PATTERN.sub("", text)


def split_sections (text: str) -> typing.List[typing.Tuple[str, str]]:

	"""
	Split comment-free source into ``(name, body)`` pairs, one per channel.

	Text before the first marker is header text and is not returned.

	Example:
		```python
		split_sections("T90\\n:a\\nCDE\\n:b FGA\\n")
		# → [("a", "\\nCDE\\n"), ("b", " FGA\\n")]
		```
	"""

	markers = list(CHANNEL_MARKER_PATTERN.finditer(text))
	sections: typing.List[typing.Tuple[str, str]] = []

	for i, marker in enumerate(markers):
		end = markers[i + 1].start() if i + 1 < len(markers) else len(text)
		sections.append((marker.group(1), text[marker.end():end]))

	return sections


def find_tempo (text: str) -> typing.Optional[int]:

	"""
	Return the value of the last ``T<n>`` directive, or None if there is none.

	Channel marker names are skipped, so ``:T1`` does not set a tempo.
	"""

	tempos = TEMPO_PATTERN.findall(CHANNEL_MARKER_PATTERN.sub(" ", text))

	if not tempos:
		return None

	return int(tempos[-1])


def compile_text (text: str, settings: typing.Optional[mmlsynth.settings.SynthSettings] = None) -> mmlsynth.score.Score:

	"""
	Compile MML source into a score.

	Raises:
		InvalidNoteName: A note token could not be decoded.
		InvalidDuration: A note has a duration denominator below 1.
		ValueError: The tempo is 0.
	"""

	source = strip_comments(text)
	score = mmlsynth.score.Score(settings=settings or mmlsynth.settings.SynthSettings())

	tempo = find_tempo(source)

	if tempo is not None:
		score.set_bpm(tempo)

	for name, body in split_sections(source):
		channel = mmlsynth.channel.build_channel(body, name=name)
		logger.debug(f"Channel {name!r}: {len(channel)} notes, {channel.seconds(score.bpm):.2f}s")
		score.add_channel(channel)

	if not score.channels:
		logger.warning("No channels found (a channel starts with ':<name>')")

	return score


def compile_file (path: str, settings: typing.Optional[mmlsynth.settings.SynthSettings] = None) -> mmlsynth.score.Score:

	"""
	Read and compile an MML file (UTF-8).

	File errors propagate as `OSError` subclasses such as `FileNotFoundError`.
	"""

	with open(path, 'r', encoding="utf-8") as f:
		text = f.read()

	return compile_text(text, settings=settings)
