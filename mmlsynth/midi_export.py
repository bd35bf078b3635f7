import logging
import typing

import mido

import mmlsynth.note
import mmlsynth.score


logger = logging.getLogger(__name__)


TICKS_PER_BEAT = 480
MIDI_CHANNELS = 16
MIDI_NOTE_MIN = 0
MIDI_NOTE_MAX = 127


def note_ticks (note: mmlsynth.note.Note, ticks_per_beat: int = TICKS_PER_BEAT) -> float:

	"""Length of a note in ticks (a quarter note is one beat)."""

	return ticks_per_beat * 4.0 / note.duration


def note_velocity (note: mmlsynth.note.Note) -> int:

	"""Map a 0-255 volume to a 1-127 MIDI velocity."""

	return max(1, min(127, round(note.volume * 127 / mmlsynth.note.MAX_VOLUME)))


def channel_track (notes: typing.Sequence[mmlsynth.note.Note], midi_channel: int, name: str = "", ticks_per_beat: int = TICKS_PER_BEAT) -> mido.MidiTrack:

	"""
	Build one track holding a channel's notes back to back.

	Positions are accumulated in fractional ticks and rounded per event, so
	odd durations (``3``, ``7``) do not drift. Rests, silent notes and
	pitches outside 0-127 advance time without sounding.
	"""

	track = mido.MidiTrack()

	if name:
		track.append(mido.MetaMessage('track_name', name=name, time=0))

	position = 0.0
	last_tick = 0

	for note in notes:

		start = round(position)
		position += note_ticks(note, ticks_per_beat)
		end = round(position)

		if note.is_rest or note.volume <= 0:
			continue

		pitch = note.midi_pitch

		if not MIDI_NOTE_MIN <= pitch <= MIDI_NOTE_MAX:
			logger.warning(f"Note {note} is outside the MIDI range - skipped")
			continue

		velocity = note_velocity(note)

		track.append(mido.Message('note_on', channel=midi_channel, note=pitch, velocity=velocity, time=start - last_tick))
		track.append(mido.Message('note_off', channel=midi_channel, note=pitch, velocity=0, time=end - start))
		last_tick = end

	track.append(mido.MetaMessage('end_of_track', time=max(0, round(position) - last_tick)))

	return track


def score_to_midi (score: mmlsynth.score.Score, ticks_per_beat: int = TICKS_PER_BEAT) -> mido.MidiFile:

	"""
	Convert a score to a type 1 MIDI file: a tempo track, then one track per channel.
	"""

	mid = mido.MidiFile(type=1)
	mid.ticks_per_beat = ticks_per_beat

	tempo_track = mido.MidiTrack()
	tempo_track.append(mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(score.bpm), time=0))
	mid.tracks.append(tempo_track)

	for index, channel in enumerate(score.channels):
		mid.tracks.append(channel_track(channel.notes, index % MIDI_CHANNELS, channel.name, ticks_per_beat))

	return mid


def write_midi (path: str, score: mmlsynth.score.Score) -> None:

	"""
	Write a score to a Standard MIDI File.
	"""

	mid = score_to_midi(score)
	mid.save(path)

	logger.info(f"Saved {path} ({len(score.channels)} channels)")
