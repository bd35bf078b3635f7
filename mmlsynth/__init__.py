
"""
mmlsynth - compile Music Macro Language (MML) scores to audio.

An MML score is plain text: each ``:<name>`` marker starts a monophonic
channel, and each channel is a stream of short instructions::

	T120
	:lead
	L8 V150 @(square) O5 C D E F 4G 4R
	:bass
	@(sawtooth) O2 L2 C > G < C

mmlsynth reads the score, resolves every channel into a list of notes and
renders the channels into a single mono buffer of signed 8-bit samples, which
can be saved as a WAV file (or exported as a Standard MIDI File).

Instructions:

- **Notes.** ``C`` … ``B`` (either case) with optional ``#``/``+`` (sharp)
  or ``-`` (flat); ``R`` is a rest. A leading number sets the length for that
  note only: ``16B`` is a sixteenth, ``2A`` a half note.
- **Length.** ``L<n>`` sets the default note length (``4`` = quarter note).
- **Octave.** ``O<n>`` sets it, ``<`` raises it by one, ``>`` lowers it.
- **Volume.** ``V<n>`` sets it (0-255, default 200), ``(<n>`` raises it,
  ``)<n>`` lowers it.
- **Timbre.** ``@(sin)``, ``@(square)``, ``@(sawtooth)`` or ``@(noise)``.
- **Tempo.** ``T<n>`` in beats per minute, global to the piece.
- **Comments.** ``/* ... */``, may span lines.

Instructions in a line always take effect left to right, so ``O2D`` plays a
D in octave 2.

Minimal example:

	```python
	import mmlsynth

	score = mmlsynth.compile_text(":melody\\nL8 CDEFGAB<C")
	rendering = score.render()
	mmlsynth.write_wav("scale.wav", rendering)
	```

Package-level exports: ``Score``, ``Note``, ``Channel``, ``compile_text``,
``compile_file``, ``write_wav``, ``write_midi``, the ``MmlError`` hierarchy.
"""

import mmlsynth.channel
import mmlsynth.midi_export
import mmlsynth.note
import mmlsynth.pitch
import mmlsynth.reader
import mmlsynth.score
import mmlsynth.settings
import mmlsynth.synth
import mmlsynth.wav
import mmlsynth.waveforms


Score = mmlsynth.score.Score
Note = mmlsynth.note.Note
Channel = mmlsynth.channel.Channel
Rendering = mmlsynth.synth.Rendering
SynthSettings = mmlsynth.settings.SynthSettings

compile_text = mmlsynth.reader.compile_text
compile_file = mmlsynth.reader.compile_file
write_wav = mmlsynth.wav.write_wav
write_midi = mmlsynth.midi_export.write_midi

MmlError = mmlsynth.pitch.MmlError
InvalidNoteName = mmlsynth.pitch.InvalidNoteName
InvalidScaleIndex = mmlsynth.pitch.InvalidScaleIndex
InvalidDuration = mmlsynth.pitch.InvalidDuration
InvalidGeneratorId = mmlsynth.waveforms.InvalidGeneratorId
PitchOutOfRange = mmlsynth.synth.PitchOutOfRange
