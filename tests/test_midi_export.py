import pathlib

import mido

import mmlsynth.channel
import mmlsynth.midi_export
import mmlsynth.note
import mmlsynth.reader


def _notes (track: mido.MidiTrack) -> list:

	return [message for message in track if message.type in ("note_on", "note_off")]


def test_file_layout () -> None:

	"""A tempo track followed by one named track per channel."""

	score = mmlsynth.reader.compile_text("T150\n:lead\nC\n:bass\nO2 C\n")
	mid = mmlsynth.midi_export.score_to_midi(score)

	assert mid.type == 1
	assert mid.ticks_per_beat == 480
	assert len(mid.tracks) == 3

	tempo = [message for message in mid.tracks[0] if message.type == 'set_tempo']
	assert tempo[0].tempo == mido.bpm2tempo(150)

	names = [message.name for track in mid.tracks[1:] for message in track if message.type == 'track_name']
	assert names == ["lead", "bass"]


def test_note_timing_and_pitch () -> None:

	"""Quarter notes last 480 ticks and C4 is MIDI note 60."""

	channel = mmlsynth.channel.build_channel("C 8D")
	messages = _notes(mmlsynth.midi_export.channel_track(channel.notes, midi_channel=2))

	assert [(m.type, m.note, m.time, m.channel) for m in messages] == [
		('note_on', 60, 0, 2),
		('note_off', 60, 480, 2),
		('note_on', 62, 0, 2),
		('note_off', 62, 240, 2),
	]


def test_rests_advance_time () -> None:

	"""A rest delays the next note without producing messages."""

	channel = mmlsynth.channel.build_channel("R C")
	messages = _notes(mmlsynth.midi_export.channel_track(channel.notes, midi_channel=0))

	assert [(m.type, m.time) for m in messages] == [('note_on', 480), ('note_off', 480)]


def test_out_of_range_notes_are_skipped () -> None:

	"""Notes below MIDI 0 are dropped, with their time preserved."""

	channel = mmlsynth.channel.Channel(notes=[
		mmlsynth.note.Note.from_name("C", duration=4, octave=-2, volume=200, timbre="sin"),
		mmlsynth.note.Note.from_name("C", duration=4, octave=4, volume=200, timbre="sin"),
	])
	messages = _notes(mmlsynth.midi_export.channel_track(channel.notes, midi_channel=0))

	assert [(m.type, m.note, m.time) for m in messages] == [('note_on', 60, 480), ('note_off', 60, 480)]


def test_velocity_mapping () -> None:

	"""Volume 0-255 maps onto velocity 1-127."""

	assert mmlsynth.midi_export.note_velocity(mmlsynth.note.Note(0, 4, 4, 255, "sin")) == 127
	assert mmlsynth.midi_export.note_velocity(mmlsynth.note.Note(0, 4, 4, 1, "sin")) == 1
	assert mmlsynth.midi_export.note_velocity(mmlsynth.note.Note(0, 4, 4, 400, "sin")) == 127


def test_write_midi (tmp_path: pathlib.Path) -> None:

	"""The written file loads back with the same notes."""

	score = mmlsynth.reader.compile_text(":a\nL8 CDE\n")
	path = tmp_path / "out.mid"

	mmlsynth.midi_export.write_midi(str(path), score)

	loaded = mido.MidiFile(str(path))
	notes_on = [m.note for m in loaded.tracks[1] if m.type == 'note_on']

	assert notes_on == [60, 62, 64]
