import argparse
import logging
import sys
import typing

import mmlsynth.midi_export
import mmlsynth.pitch
import mmlsynth.reader
import mmlsynth.settings
import mmlsynth.wav


logger = logging.getLogger("mmlsynth")


def parse_args (argv: typing.Optional[typing.List[str]] = None) -> argparse.Namespace:

	"""
	Parse command line arguments.
	"""

	parser = argparse.ArgumentParser(prog="mmlsynth", description="Compile an MML score to a WAV file")
	parser.add_argument("input_file", metavar="inputFile", help="MML source file")
	parser.add_argument("-o", "--output", metavar="outputFile", default=None, help=f"WAV output path (default: {mmlsynth.settings.DEFAULT_OUTPUT})")
	parser.add_argument("-v", "--verbose", action="store_true", help="print verbose information")
	parser.add_argument("-q", "--quiet", action="store_true", help="only print errors")
	parser.add_argument("-c", "--config", default=None, help="YAML config file")
	parser.add_argument("--midi", metavar="midiFile", default=None, help="also write a Standard MIDI File")

	return parser.parse_args(argv)


def configure_logging (verbose: bool, quiet: bool) -> None:

	"""
	Set the log level from the verbosity flags. Quiet wins over verbose.
	"""

	if quiet:
		level = logging.ERROR

	elif verbose:
		level = logging.DEBUG

	else:
		level = logging.INFO

	logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
	logging.getLogger().setLevel(level)


def run (args: argparse.Namespace) -> int:

	"""
	Compile, render and save. Returns the process exit status.
	"""

	try:
		config = mmlsynth.settings.load_config(args.config) if args.config else {}
		settings = mmlsynth.settings.SynthSettings.from_config(config)

	except (OSError, ValueError) as exc:
		logger.error(f"Invalid config: {exc}")
		return 1

	output = args.output or config.get("output") or mmlsynth.settings.DEFAULT_OUTPUT

	logger.info("Compiling...")

	try:
		score = mmlsynth.reader.compile_file(args.input_file, settings=settings)

	except FileNotFoundError:
		logger.error(f"File not found: {args.input_file}")
		return 1

	except OSError as exc:
		logger.error(f"I/O error reading {args.input_file}: {exc}")
		return 1

	except (mmlsynth.pitch.MmlError, ValueError) as exc:
		logger.error(f"Compile error: {exc}")
		return 1

	logger.info(f"Done ({len(score.channels)} channels, {score.bpm} BPM, {score.seconds():.2f}s)")

	logger.info("Rendering audio...")
	rendering = score.render()

	if rendering.degraded:
		logger.warning(f"{len(rendering.errors)} notes were silenced by unknown timbres or out-of-range pitches")

	try:
		mmlsynth.wav.write_wav(output, rendering)

		if args.midi:
			mmlsynth.midi_export.write_midi(args.midi, score)

	except OSError as exc:
		logger.error(f"I/O error writing output: {exc}")
		return 1

	return 0


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Main entry point for the mmlsynth command.
	"""

	args = parse_args(argv)
	configure_logging(args.verbose, args.quiet)

	try:
		status = run(args)

	except Exception:
		logger.exception("Unexpected error")
		status = 1

	sys.exit(status)


if __name__ == "__main__":
	main()
